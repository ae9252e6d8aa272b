#!/usr/bin/env python
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
.. module:: jenkins_service
    :platform: Unix, Windows
    :synopsis: Jenkins builds, artifacts and SCM data for delivery pipelines
    :noindex:

Example::

    >>> import jenkins_service
    >>> client = jenkins_service.JenkinsClient('http://localhost:8080/')
    >>> service = jenkins_service.JenkinsService('http://localhost:8080/',
    ...                                          client)
    >>> service.get_generic_git_revisions('folder/job/my job', 12)
    [GenericGitRevision(name='refs/remotes/origin/master', branch='master',
    sha1='111aaa', remote_url='https://github.com/org/repo')]
'''

import logging

from jenkins_service.client import BaseJenkinsClient  # noqa: F401
from jenkins_service.client import JenkinsClient  # noqa: F401
from jenkins_service.exceptions import (  # noqa: F401
    BadHTTPException, EmptyResponseException, InvalidJobParameterException,
    JenkinsException, JenkinsHTTPException, NotFoundException,
    PropertyFileDecodeException, TimeoutException)
from jenkins_service.model import (  # noqa: F401
    Build, BuildArtifact, BuildResult, GenericGitRevision, Job, JobConfig,
    JobDependencies, ParameterDefinition, Project, QueuedItem)
from jenkins_service.names import decode_job_name  # noqa: F401
from jenkins_service.names import encode_job_name  # noqa: F401
from jenkins_service.properties import decode_properties  # noqa: F401
from jenkins_service.retry import is_transient_failure  # noqa: F401
from jenkins_service.retry import RetryPolicy  # noqa: F401
from jenkins_service.scm import extract_git_revisions  # noqa: F401
from jenkins_service.service import JenkinsService  # noqa: F401

# Set default logging handler to avoid "No handler found" warnings.
logging.getLogger(__name__).addHandler(logging.NullHandler())
