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
.. module:: jenkins_service.names
    :platform: Unix, Windows
    :synopsis: Encoding of folder-qualified Jenkins job names

Job names nested in folders (see the cloudbees folder plugin) are handled
one path segment at a time, so a ``/`` separating two folder levels is never
percent-encoded while a ``/`` can never sneak into a single segment.
'''

from urllib.parse import quote, unquote

from jenkins_service.exceptions import JenkinsException

SEPARATOR = '/'
FOLDER_SEGMENT = 'job'


def split_job_name(name):
    '''Split a job name into its path segments.

    :param name: Job name, ``str``
    :returns: list of segments, ``[str]``
    :throws: :class:`JenkinsException` if the name has an empty segment
    '''
    segments = name.split(SEPARATOR)
    if not all(segments):
        raise JenkinsException('job[%s] has an empty path segment' % name)
    return segments


def encode_job_name(name):
    '''Percent-encode every segment of a job name.

    >>> encode_job_name('folder/job/name with spaces')
    'folder/job/name%20with%20spaces'
    '''
    return SEPARATOR.join(quote(segment, safe='')
                          for segment in split_job_name(name))


def decode_job_name(wire_name):
    '''Inverse of :func:`encode_job_name`.'''
    return SEPARATOR.join(unquote(segment)
                          for segment in split_job_name(wire_name))


def to_ci_path(segments):
    '''Join folder levels with the literal ``job`` segment.

    ``['folder', 'job1']`` becomes ``'folder/job/job1'``, the name under
    which the server addresses ``job1`` inside ``folder``.
    '''
    return (SEPARATOR + FOLDER_SEGMENT + SEPARATOR).join(segments)

