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
.. module:: jenkins_service.service
    :platform: Unix, Windows
    :synopsis: Jenkins builds as seen by a delivery pipeline

Example::

    >>> client = JenkinsClient('http://jenkins.example.com', 'user', 'token')
    >>> service = JenkinsService('http://jenkins.example.com', client,
    ...                          csrf=True)
    >>> service.get_job_names()
    ['folder/job/job1', 'folder/job/job2', 'job3']
    >>> service.get_build_properties('folder/job/job1', 42, 'build.properties')
    {'version': '1.2.3'}
'''

import logging

from jenkins_service.exceptions import NotFoundException
from jenkins_service.model import Project
from jenkins_service.names import encode_job_name, to_ci_path
from jenkins_service.parameters import validate_job_parameters
from jenkins_service.properties import decode_properties
from jenkins_service.retry import RetryPolicy
from jenkins_service.scm import extract_git_revisions

logger = logging.getLogger(__name__)

EMPTY_BODY = ''


class JenkinsService(object):

    def __init__(self, address, client, csrf=False, permissions=None,
                 retry_policy=None):
        '''Pipeline facing view of one Jenkins master.

        Job names are accepted unencoded in their folder qualified form,
        ``folder/job/my job``, and encoded before every remote call.

        :param address: URL of Jenkins server, ``str``
        :param client: remote calls, ``BaseJenkinsClient``
        :param csrf: whether the server requires a crumb on mutating
            requests, ``bool``
        :param permissions: who may use this master, passed through
        :param retry_policy: retry of property file fetches,
            ``RetryPolicy``
        '''
        self.address = address
        self.client = client
        self.csrf = csrf
        self.permissions = permissions
        self.retry_policy = retry_policy or RetryPolicy()

    def _walk_jobs(self, jobs, path=None):
        # depth first, siblings in server order, yields leaves only
        path = path or []
        for job in jobs:
            job_path = path + [job.name]
            if job.jobs:
                for leaf in self._walk_jobs(job.jobs, job_path):
                    yield leaf
            else:
                yield to_ci_path(job_path), job

    def get_job_names(self):
        '''Get the folder qualified names of all jobs.

        :returns: ``[str]``, e.g. ``['folder/job/job1', 'job3']``
        '''
        return [name for name, _ in self._walk_jobs(self.client.get_jobs())]

    def get_projects(self):
        '''Get every job with its last build.

        :returns: ``[Project]``
        '''
        return [Project(name, job.last_build)
                for name, job in self._walk_jobs(self.client.get_projects())]

    def get_builds(self, job_name):
        return self.client.get_builds(encode_job_name(job_name))

    def get_build(self, job_name, number):
        return self.client.get_build(encode_job_name(job_name), number)

    def get_latest_build(self, job_name):
        return self.client.get_latest_build(encode_job_name(job_name))

    def get_job_config(self, job_name):
        return self.client.get_job_config(encode_job_name(job_name))

    def get_dependencies(self, job_name):
        return self.client.get_dependencies(encode_job_name(job_name))

    def get_git_details(self, job_name, number):
        return self.client.get_git_details(encode_job_name(job_name), number)

    def get_queued_item(self, item_number):
        return self.client.get_queued_item(item_number)

    def get_generic_git_revisions(self, job_name, number):
        '''Get the git revisions a build was made from.

        The same revision reported by several actions is returned once.

        :param job_name: Job name, ``str``
        :param number: Build number, ``int``
        :returns: ``[GenericGitRevision]``, possibly empty
        '''
        return extract_git_revisions(self.get_git_details(job_name, number))

    def get_build_properties(self, job_name, number, file_name):
        '''Get the properties archived by a build.

        A 5xx answer to the file download is retried as configured by the
        retry policy. A missing file gives an empty result, while a 404 on the
        build itself is an error.

        :param job_name: Job name, ``str``
        :param number: Build number, ``int``
        :param file_name: Name of the archived property file, ``str``
        :returns: decoded properties, ``dict``
        :throws: :class:`PropertyFileDecodeException` on malformed content
        '''
        encoded_name = encode_job_name(job_name)
        build = self.client.get_build(encoded_name, number)
        artifact = build.get_artifact(file_name)
        path = artifact.relative_path if artifact is not None else file_name
        try:
            content = self.retry_policy.call(
                self.client.get_property_file, encoded_name, number, path)
        except NotFoundException:
            logger.debug('No property file[%s] for job[%s] number[%s]',
                         file_name, job_name, number)
            return {}
        return decode_properties(file_name, content)

    def get_crumb(self):
        return self.client.get_crumb()

    def _crumb(self):
        if not self.csrf:
            return None
        logger.debug('Fetching crumb from server[%s]', self.address)
        return self.get_crumb()

    @staticmethod
    def validate_job_parameters(job_config, parameters):
        '''See :func:`jenkins_service.parameters.validate_job_parameters`.'''
        validate_job_parameters(job_config, parameters)

    def build(self, job_name):
        '''Trigger a build.

        :param job_name: Job name, ``str``
        :returns: ``int`` queue item, see :meth:`get_queued_item`
        '''
        return self.client.build(
            encode_job_name(job_name), EMPTY_BODY, self._crumb())

    def build_with_parameters(self, job_name, parameters):
        return self.client.build_with_parameters(
            encode_job_name(job_name), parameters, EMPTY_BODY, self._crumb())

    def trigger_build(self, job_name, parameters=None):
        '''Validate ``parameters`` against the job, then trigger a build.

        :param job_name: Job name, ``str``
        :param parameters: build parameters or ``None``, ``dict``
        :returns: ``int`` queue item
        :throws: :class:`InvalidJobParameterException` without triggering
            anything when a parameter is not one of its choices
        '''
        if not parameters:
            return self.build(job_name)
        self.validate_job_parameters(self.get_job_config(job_name),
                                     parameters)
        return self.build_with_parameters(job_name, parameters)

    def stop_running_build(self, job_name, number):
        self.client.stop_running_build(
            encode_job_name(job_name), number, EMPTY_BODY, self._crumb())

    def stop_queued_build(self, queue_id):
        self.client.stop_queued_build(queue_id, EMPTY_BODY, self._crumb())
