# Software License Agreement (BSD License)
#
# Copyright (c) 2010, Willow Garage, Inc.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
#  * Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
#  * Redistributions in binary form must reproduce the above
#    copyright notice, this list of conditions and the following
#    disclaimer in the documentation and/or other materials provided
#    with the distribution.
#  * Neither the name of Willow Garage, Inc. nor the names of its
#    contributors may be used to endorse or promote products derived
#    from this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# 'AS IS' AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
# COPYRIGHT OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN
# ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.
#

'''
.. module:: jenkins_service.model
    :platform: Unix, Windows
    :synopsis: Jobs, builds and job configurations read from the XML API

Every type here is a read-only snapshot of the server state, built from
an ``xml.etree.ElementTree.Element`` of the ``api/xml`` remote API.
'''

import collections
import enum


def _text(element, path, default=None):
    found = element.find(path)
    if found is None or found.text is None:
        return default
    return found.text.strip()


def _int(element, path, default=None):
    value = _text(element, path)
    return int(value) if value else default


def _bool(element, path, default=False):
    value = _text(element, path)
    if value is None:
        return default
    return value.lower() == 'true'


class BuildResult(enum.Enum):
    SUCCESS = 'SUCCESS'
    FAILURE = 'FAILURE'
    UNSTABLE = 'UNSTABLE'
    ABORTED = 'ABORTED'
    BUILDING = 'BUILDING'
    UNKNOWN = 'UNKNOWN'

    @classmethod
    def from_build(cls, result, building=False):
        '''Map the ``result`` reported for a build to a member.

        :param result: reported result, ``str`` or ``None``
        :param building: whether the build is still running, ``bool``
        '''
        if building:
            return cls.BUILDING
        try:
            return cls(result)
        except ValueError:
            return cls.UNKNOWN


class BuildArtifact(collections.namedtuple(
        'BuildArtifact', 'display_path file_name relative_path')):
    '''A file archived by a build.'''

    @classmethod
    def from_xml(cls, element):
        return cls(display_path=_text(element, 'displayPath'),
                   file_name=_text(element, 'fileName'),
                   relative_path=_text(element, 'relativePath'))


class GenericGitRevision(collections.namedtuple(
        'GenericGitRevision', 'name branch sha1 remote_url')):
    '''A git commit a build was made from.'''


class Build(object):
    '''A single execution of a job.'''

    def __init__(self, number, duration=None, result=BuildResult.UNKNOWN,
                 timestamp=None, building=False, url=None,
                 full_display_name=None, artifacts=None):
        self.number = number
        self.duration = duration
        self.result = result
        self.timestamp = timestamp
        self.building = building
        self.url = url
        self.full_display_name = full_display_name
        self.artifacts = list(artifacts or [])

    @classmethod
    def from_xml(cls, element):
        building = _bool(element, 'building')
        return cls(
            number=_int(element, 'number'),
            duration=_int(element, 'duration'),
            result=BuildResult.from_build(_text(element, 'result'), building),
            timestamp=_int(element, 'timestamp'),
            building=building,
            url=_text(element, 'url'),
            full_display_name=_text(element, 'fullDisplayName'),
            artifacts=[BuildArtifact.from_xml(artifact)
                       for artifact in element.findall('artifact')])

    def get_artifact(self, file_name):
        '''Return the first artifact named ``file_name`` or ``None``.'''
        for artifact in self.artifacts:
            if artifact.file_name == file_name:
                return artifact
        return None

    def __repr__(self):
        return '<Build number=%s result=%s>' % (self.number, self.result.name)


class Job(object):
    '''A node of the job tree, a folder when it has child jobs.'''

    def __init__(self, name, jobs=None, last_build=None):
        self.name = name
        self.jobs = list(jobs or [])
        self.last_build = last_build

    @classmethod
    def from_xml(cls, element):
        last_build = element.find('lastBuild')
        return cls(
            name=_text(element, 'name'),
            jobs=[cls.from_xml(child) for child in element.findall('job')],
            last_build=(Build.from_xml(last_build)
                        if last_build is not None else None))

    def __repr__(self):
        return '<Job name=%s jobs=%d>' % (self.name, len(self.jobs))


class Project(collections.namedtuple('Project', 'name last_build')):
    '''A leaf job under its fully qualified name.'''


class ParameterDefinition(object):

    def __init__(self, name, type=None, description=None,
                 default_value=None, choices=None):
        self.name = name
        self.type = type
        self.description = description
        self.default_value = default_value
        self.choices = choices

    @classmethod
    def from_xml(cls, element):
        choices = [choice.text for choice in element.findall('choice')]
        return cls(
            name=_text(element, 'name'),
            type=_text(element, 'type'),
            description=_text(element, 'description'),
            default_value=_text(element, 'defaultParameterValue/value'),
            choices=choices or None)


class JobConfig(object):
    '''Configuration of a job as far as triggering builds is concerned.'''

    def __init__(self, name, display_name=None, description=None, url=None,
                 buildable=True, concurrent_build=False,
                 parameter_definitions=None, upstream_projects=None,
                 downstream_projects=None):
        self.name = name
        self.display_name = display_name
        self.description = description
        self.url = url
        self.buildable = buildable
        self.concurrent_build = concurrent_build
        self.parameter_definitions = list(parameter_definitions or [])
        self.upstream_projects = list(upstream_projects or [])
        self.downstream_projects = list(downstream_projects or [])

    @classmethod
    def from_xml(cls, element):
        return cls(
            name=_text(element, 'name'),
            display_name=_text(element, 'displayName'),
            description=_text(element, 'description'),
            url=_text(element, 'url'),
            buildable=_bool(element, 'buildable', default=True),
            concurrent_build=_bool(element, 'concurrentBuild'),
            parameter_definitions=[
                ParameterDefinition.from_xml(definition)
                for definition in element.findall(
                    'property/parameterDefinition')],
            upstream_projects=[
                _text(project, 'name')
                for project in element.findall('upstreamProject')],
            downstream_projects=[
                _text(project, 'name')
                for project in element.findall('downstreamProject')])


class JobDependencies(collections.namedtuple('JobDependencies',
                                             'upstream downstream')):
    '''Names of the jobs triggering and triggered by a job.'''

    @classmethod
    def from_xml(cls, element):
        return cls(
            upstream=[_text(project, 'name')
                      for project in element.findall('upstreamProject')],
            downstream=[_text(project, 'name')
                        for project in element.findall('downstreamProject')])


class QueuedItem(collections.namedtuple('QueuedItem', 'id number')):
    '''A queue item, ``number`` is set once its build started.'''

    @classmethod
    def from_xml(cls, element):
        return cls(id=_int(element, 'id'),
                   number=_int(element, 'executable/number'))
