import xml.etree.ElementTree as ET

import mock
from testscenarios import TestWithScenarios
from testscenarios import load_tests_apply_scenarios as load_tests  # noqa

import jenkins_service
from jenkins_service import Build
from jenkins_service import BuildArtifact
from jenkins_service import Job
from jenkins_service import JobConfig
from jenkins_service import ParameterDefinition
from tests.base import JenkinsServiceTestBase


def property_build(file_name='test.properties'):
    return Build(10, duration=0, artifacts=[
        BuildArtifact(display_path=file_name, file_name=file_name,
                      relative_path=file_name)])


def http_error(status_code):
    return jenkins_service.JenkinsHTTPException(
        'Error in request [%d]' % status_code, status_code)


class JenkinsServiceEncodingTest(TestWithScenarios, JenkinsServiceTestBase):

    scenarios = [
        ('get_builds', dict(method='get_builds', extra_args=[])),
        ('get_dependencies', dict(method='get_dependencies', extra_args=[])),
        ('get_build', dict(method='get_build', extra_args=[2])),
        ('get_git_details', dict(method='get_git_details', extra_args=[2])),
        ('get_latest_build', dict(method='get_latest_build', extra_args=[])),
        ('get_job_config', dict(method='get_job_config', extra_args=[])),
    ]

    def test_encodes_job_name(self):
        getattr(self.service, self.method)(self.job_unencoded,
                                           *self.extra_args)

        getattr(self.client, self.method).assert_called_once_with(
            self.job_encoded, *self.extra_args)


class JenkinsServiceTriggerTest(TestWithScenarios, JenkinsServiceTestBase):

    scenarios = [
        ('build', dict(
            method='build', extra_args=[],
            client_args=['folder/job/name%20with%20spaces', ''])),
        ('build_with_parameters', dict(
            method='build_with_parameters', extra_args=[{'key': 'value'}],
            client_args=['folder/job/name%20with%20spaces',
                         {'key': 'value'}, ''])),
        ('stop_running_build', dict(
            method='stop_running_build', extra_args=[1],
            client_args=['folder/job/name%20with%20spaces', 1, ''])),
    ]

    def test_encodes_job_name_without_crumb(self):
        getattr(self.service, self.method)(self.job_unencoded,
                                           *self.extra_args)

        getattr(self.client, self.method).assert_called_once_with(
            *(self.client_args + [None]))
        self.assertFalse(self.client.get_crumb.called)

    def test_negotiates_crumb_when_csrf_enabled(self):
        self.client.get_crumb.return_value = 'fb171d526b9cc9e25afe80b356e12cb7'

        getattr(self.csrf_service, self.method)(self.job_unencoded,
                                                *self.extra_args)

        self.assertEqual(self.client.get_crumb.call_count, 1)
        getattr(self.client, self.method).assert_called_once_with(
            *(self.client_args + ['fb171d526b9cc9e25afe80b356e12cb7']))

    def test_crumb_per_call(self):
        for _ in range(3):
            getattr(self.csrf_service, self.method)(self.job_unencoded,
                                                    *self.extra_args)

        self.assertEqual(self.client.get_crumb.call_count, 3)


class JenkinsServiceStopQueuedBuildTest(JenkinsServiceTestBase):

    def test_without_crumb(self):
        self.service.stop_queued_build(25)

        self.client.stop_queued_build.assert_called_once_with(25, '', None)
        self.assertFalse(self.client.get_crumb.called)

    def test_with_crumb(self):
        self.client.get_crumb.return_value = 'crumb'

        self.csrf_service.stop_queued_build(25)

        self.client.stop_queued_build.assert_called_once_with(
            25, '', 'crumb')
        self.assertEqual(self.client.get_crumb.call_count, 1)


class JenkinsServiceReadOnlyTest(JenkinsServiceTestBase):

    def test_no_crumb_for_reads(self):
        self.client.get_jobs.return_value = []
        self.client.get_git_details.return_value = []
        self.client.get_build.return_value = property_build()
        self.client.get_property_file.return_value = b'a=b'

        self.csrf_service.get_job_names()
        self.csrf_service.get_build(self.job_unencoded, 1)
        self.csrf_service.get_generic_git_revisions(self.job_unencoded, 1)
        self.csrf_service.get_build_properties(
            self.job_unencoded, 1, 'test.properties')
        self.csrf_service.get_queued_item(3)

        self.assertFalse(self.client.get_crumb.called)

    def test_get_crumb(self):
        self.client.get_crumb.return_value = 'fb171d526b9cc9e25afe80b356e12cb7'

        self.assertEqual(self.service.get_crumb(),
                         'fb171d526b9cc9e25afe80b356e12cb7')

    def test_get_queued_item(self):
        self.client.get_queued_item.return_value = jenkins_service.QueuedItem(
            25, 198)

        self.assertEqual(self.service.get_queued_item(25).number, 198)
        self.client.get_queued_item.assert_called_once_with(25)


class JenkinsServiceJobNamesTest(JenkinsServiceTestBase):

    def test_folders_plugin(self):
        self.client.get_jobs.return_value = [
            Job('folder', jobs=[Job('job1'), Job('job2')]),
            Job('job3'),
        ]

        self.assertEqual(self.service.get_job_names(),
                         ['folder/job/job1', 'folder/job/job2', 'job3'])
        self.client.get_jobs.assert_called_once_with()

    def test_nested_folders_depth_first(self):
        self.client.get_jobs.return_value = [
            Job('job1'),
            Job('folder1', jobs=[
                Job('folder2', jobs=[Job('job3')]),
                Job('job4'),
            ]),
            Job('job2'),
        ]

        self.assertEqual(self.service.get_job_names(), [
            'job1',
            'folder1/job/folder2/job/job3',
            'folder1/job/job4',
            'job2',
        ])

    def test_no_jobs(self):
        self.client.get_jobs.return_value = []

        self.assertEqual(self.service.get_job_names(), [])

    def test_projects(self):
        job1_build = Build(1)
        job3_build = Build(3, building=True)
        self.client.get_projects.return_value = [
            Job('job1', last_build=job1_build),
            Job('job2'),
            Job('folder1', jobs=[
                Job('folder2', jobs=[Job('job3', last_build=job3_build)]),
            ]),
        ]

        projects = self.service.get_projects()

        self.assertEqual([p.name for p in projects],
                         ['job1', 'job2', 'folder1/job/folder2/job/job3'])
        self.assertIs(projects[0].last_build, job1_build)
        self.assertIsNone(projects[1].last_build)
        self.assertIs(projects[2].last_build, job3_build)


class JenkinsServiceBuildPropertiesTest(JenkinsServiceTestBase):

    def test_retries_on_transient_failure(self):
        self.client.get_build.return_value = property_build()
        self.client.get_property_file.side_effect = [http_error(502), b'a=b']

        properties = self.service.get_build_properties(
            'job1', 10, 'test.properties')

        self.assertEqual(properties, {'a': 'b'})
        self.client.get_build.assert_called_once_with('job1', 10)
        self.assertEqual(self.client.get_property_file.call_args_list, [
            mock.call('job1', 10, 'test.properties'),
            mock.call('job1', 10, 'test.properties'),
        ])

    def test_do_not_retry_on_404(self):
        self.client.get_build.return_value = property_build()
        self.client.get_property_file.side_effect = [
            jenkins_service.NotFoundException(), b'a=b']

        properties = self.service.get_build_properties(
            'job1', 10, 'test.properties')

        self.assertEqual(properties, {})
        self.client.get_build.assert_called_once_with('job1', 10)
        self.client.get_property_file.assert_called_once_with(
            'job1', 10, 'test.properties')

    def test_missing_file_is_logged(self):
        self.client.get_build.return_value = property_build()
        self.client.get_property_file.side_effect = (
            jenkins_service.NotFoundException())

        with self.assertLogs('jenkins_service.service', 'DEBUG') as logs:
            properties = self.service.get_build_properties(
                'job1', '10', 'test.properties')

        self.assertEqual(properties, {})
        self.assertEqual(logs.output, [
            'DEBUG:jenkins_service.service:No property file'
            '[test.properties] for job[job1] number[10]'])

    def test_gives_up_after_second_failure(self):
        self.client.get_build.return_value = property_build()
        self.client.get_property_file.side_effect = [
            http_error(502), http_error(500), b'a=b']

        with self.assertRaises(jenkins_service.JenkinsHTTPException) as cm:
            self.service.get_build_properties('job1', 10, 'test.properties')
        self.assertEqual(cm.exception.status_code, 500)
        self.assertEqual(self.client.get_property_file.call_count, 2)

    def test_terminal_failure_is_not_retried(self):
        self.client.get_build.return_value = property_build()
        self.client.get_property_file.side_effect = [http_error(403), b'a=b']

        with self.assertRaises(jenkins_service.JenkinsHTTPException):
            self.service.get_build_properties('job1', 10, 'test.properties')
        self.assertEqual(self.client.get_property_file.call_count, 1)

    def test_missing_build_is_an_error(self):
        self.client.get_build.side_effect = \
            jenkins_service.NotFoundException()

        with self.assertRaises(jenkins_service.NotFoundException):
            self.service.get_build_properties('job1', 10, 'test.properties')
        self.assertFalse(self.client.get_property_file.called)

    def test_uses_artifact_relative_path(self):
        self.client.get_build.return_value = Build(5, artifacts=[
            BuildArtifact('props.json', 'props.json',
                          'properties/props.json')])
        self.client.get_property_file.return_value = \
            b'{"a": "hello", "c": 3, "nested": {"list": [1, "a"]}}'

        properties = self.service.get_build_properties(
            'PropertiesTest', 5, 'props.json')

        self.assertEqual(properties, {'a': 'hello', 'c': 3,
                                      'nested': {'list': [1, 'a']}})
        self.client.get_property_file.assert_called_once_with(
            'PropertiesTest', 5, 'properties/props.json')

    def test_yaml(self):
        self.client.get_build.return_value = property_build('props.yml')
        self.client.get_property_file.return_value = b'a: hello\nc: 3\n'

        self.assertEqual(
            self.service.get_build_properties('job1', 10, 'props.yml'),
            {'a': 'hello', 'c': 3})

    def test_decode_failure_is_surfaced(self):
        self.client.get_build.return_value = property_build('props.json')
        self.client.get_property_file.return_value = b'{"a": '

        with self.assertRaises(jenkins_service.PropertyFileDecodeException):
            self.service.get_build_properties('job1', 10, 'props.json')
        self.assertEqual(self.client.get_property_file.call_count, 1)

    def test_encodes_job_name(self):
        self.client.get_build.return_value = Build(2)
        self.client.get_property_file.return_value = b''

        self.assertEqual(self.service.get_build_properties(
            self.job_unencoded, 2, 'test.properties'), {})
        self.client.get_build.assert_called_once_with(self.job_encoded, 2)
        self.client.get_property_file.assert_called_once_with(
            self.job_encoded, 2, 'test.properties')


class JenkinsServiceGitRevisionsTest(JenkinsServiceTestBase):

    def test_revisions(self):
        root = ET.fromstring(
            '<freeStyleBuild>'
            '<action><lastBuiltRevision><branch>'
            '<SHA1>111aaa</SHA1><name>refs/remotes/origin/master</name>'
            '</branch></lastBuiltRevision>'
            '<remoteUrl>https://github.com/spinnaker/igor</remoteUrl></action>'
            '<action><build><revision><branch>'
            '<SHA1>111aaa</SHA1><name>refs/remotes/origin/master</name>'
            '</branch></revision></build>'
            '<remoteUrl>https://github.com/spinnaker/igor</remoteUrl></action>'
            '</freeStyleBuild>')
        self.client.get_git_details.return_value = root.findall('action')

        revisions = self.service.get_generic_git_revisions('test', 1)

        self.assertEqual(revisions, [jenkins_service.GenericGitRevision(
            'refs/remotes/origin/master', 'master', '111aaa',
            'https://github.com/spinnaker/igor')])
        self.client.get_git_details.assert_called_once_with('test', 1)

    def test_no_scm(self):
        self.client.get_git_details.return_value = []

        self.assertEqual(
            self.service.get_generic_git_revisions('test', 1), [])


class JenkinsServiceParametersTest(JenkinsServiceTestBase):

    def setUp(self):
        super(JenkinsServiceParametersTest, self).setUp()
        self.client.get_job_config.return_value = JobConfig(
            'my_job', parameter_definitions=[
                ParameterDefinition('hey', type='ChoiceParameterDefinition',
                                    choices=['why', 'not'])])
        self.client.build.return_value = 24
        self.client.build_with_parameters.return_value = 25

    def test_validate_job_parameters(self):
        with self.assertRaises(jenkins_service.InvalidJobParameterException):
            jenkins_service.JenkinsService.validate_job_parameters(
                self.client.get_job_config.return_value, {'hey': 'you'})

    def test_trigger_valid_parameters(self):
        queue_id = self.csrf_service.trigger_build('my_job', {'hey': 'why'})

        self.assertEqual(queue_id, 25)
        self.client.get_job_config.assert_called_once_with('my_job')
        self.assertEqual(self.client.get_crumb.call_count, 1)
        self.client.build_with_parameters.assert_called_once_with(
            'my_job', {'hey': 'why'}, '', self.client.get_crumb.return_value)

    def test_trigger_invalid_parameters(self):
        with self.assertRaises(jenkins_service.InvalidJobParameterException):
            self.csrf_service.trigger_build('my_job', {'hey': 'you'})

        self.assertFalse(self.client.build_with_parameters.called)
        self.assertFalse(self.client.build.called)
        self.assertFalse(self.client.get_crumb.called)

    def test_trigger_without_parameters(self):
        self.assertEqual(self.service.trigger_build('my_job'), 24)

        self.assertFalse(self.client.get_job_config.called)
        self.client.build.assert_called_once_with('my_job', '', None)
