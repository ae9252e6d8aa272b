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
.. module:: jenkins_service.endpoints
    :platform: Unix, Windows
    :synopsis: Jenkins XML remote API endpoints

``%(name)s`` is always an already encoded job name in its folder qualified
form, e.g. ``folder/job/my%20job``.
'''

# REST Endpoints
CRUMB_URL = 'crumbIssuer/api/xml'
JOBS_QUERY = 'api/xml?tree=%s'
JOBS_QUERY_TREE = 'jobs[name,%s]'
PROJECTS_QUERY_TREE = 'jobs[name,lastBuild[number,result,building,' \
                      'duration,timestamp,url,fullDisplayName,' \
                      'artifacts[displayPath,fileName,relativePath]],%s]'
BUILDS = 'job/%(name)s/api/xml?tree=builds[number,url,duration,' \
         'timestamp,result,building,fullDisplayName,' \
         'artifacts[displayPath,fileName,relativePath]]'
BUILD_INFO = 'job/%(name)s/%(number)d/api/xml' \
             '?exclude=/*/action&exclude=/*/changeSet&exclude=/*/culprit'
LAST_BUILD = 'job/%(name)s/lastBuild/api/xml' \
             '?exclude=/*/action&exclude=/*/changeSet&exclude=/*/culprit'
GIT_DETAILS = 'job/%(name)s/%(number)d/api/xml' \
              '?exclude=/*/action[not(lastBuiltRevision|build/revision)]' \
              '&exclude=/*/artifact&exclude=/*/changeSet&exclude=/*/culprit'
JOB_CONFIG = 'job/%(name)s/api/xml?exclude=/*/action&exclude=/*/build' \
             '&exclude=/*/property[not(parameterDefinition)]'
DEPENDENCIES = 'job/%(name)s/api/xml' \
               '?tree=upstreamProjects[name],downstreamProjects[name]'
Q_ITEM = 'queue/item/%(number)d/api/xml'
PROPERTY_FILE = 'job/%(name)s/%(number)d/artifact/%(path)s'
BUILD_JOB = 'job/%(name)s/build'
BUILD_WITH_PARAMS_JOB = 'job/%(name)s/buildWithParameters'
STOP_BUILD = 'job/%(name)s/%(number)d/stop'
CANCEL_QUEUE = 'queue/cancelItem?id=%(id)s'
