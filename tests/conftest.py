import inspect
import unittest

import pytest
from _pytest.unittest import UnitTestCase
from testscenarios.testcase import WithScenarios


@pytest.hookimpl(tryfirst=True)
def pytest_pycollect_makeitem(collector, name, obj):
    # pytest does not honour testscenarios' load_tests/run expansion, so
    # collect one concrete TestCase class per declared scenario instead.
    if not (inspect.isclass(obj) and issubclass(obj, unittest.TestCase)
            and issubclass(obj, WithScenarios)):
        return None
    scenarios = getattr(obj, 'scenarios', None)
    if not scenarios:
        return None
    items = []
    for scenario_name, attrs in scenarios:
        namespace = dict(attrs)
        namespace['scenarios'] = None
        namespace['__module__'] = obj.__module__
        cls = type('{0}[{1}]'.format(name, scenario_name), (obj,), namespace)
        setattr(collector.obj, cls.__name__, cls)
        items.append(UnitTestCase.from_parent(
            collector, name=cls.__name__, obj=cls))
    return items
