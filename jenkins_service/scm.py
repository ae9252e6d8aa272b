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
.. module:: jenkins_service.scm
    :platform: Unix, Windows
    :synopsis: Git revisions recorded in the actions of a build

Depending on the version of the git plugin the revision a build was made
from is reported in one of two shapes inside an ``<action>`` element::

    <action _class="hudson.plugins.git.util.BuildData">
      <lastBuiltRevision>
        <branch><SHA1>111aaa</SHA1><name>refs/remotes/origin/master</name></branch>
      </lastBuiltRevision>
      <remoteUrl>https://github.com/org/repo</remoteUrl>
    </action>

    <action _class="hudson.plugins.git.util.BuildDetails">
      <build>
        <revision>
          <branch><SHA1>111aaa</SHA1><name>refs/remotes/origin/master</name></branch>
        </revision>
      </build>
      <remoteUrl>https://github.com/org/repo</remoteUrl>
    </action>

Either shape may show up under either action class, so only the element
structure is looked at.
'''

import collections
import re

from jenkins_service.model import GenericGitRevision

BRANCH_PREFIX = re.compile(r'^(?:refs/remotes/[^/]+/|refs/heads/)')


class DirectRevision(collections.namedtuple('DirectRevision', 'path')):
    '''Revision reported as ``lastBuiltRevision``.'''


class NestedBuildRevision(collections.namedtuple('NestedBuildRevision',
                                                 'path')):
    '''Revision reported as ``build/revision``.'''


# tried in order, the first one found in an action wins
REVISION_SHAPES = (
    DirectRevision('lastBuiltRevision'),
    NestedBuildRevision('build/revision'),
)


def branch_from_ref(name):
    '''Strip the remote tracking or head prefix from a ref name.

    >>> branch_from_ref('refs/remotes/origin/master')
    'master'
    '''
    return BRANCH_PREFIX.sub('', name, count=1)


def _find_revision(action):
    for shape in REVISION_SHAPES:
        revision = action.find(shape.path)
        # a revision without a named branch is a detached checkout
        if (revision is not None and
                revision.find('branch/name') is not None):
            return revision
    return None


def _text(element, path):
    found = element.find(path)
    if found is None or found.text is None:
        return None
    return found.text.strip()


def extract_git_revisions(actions):
    '''Return the distinct git revisions found in the actions of a build.

    Actions recording a revision without a named branch are skipped.

    :param actions: ``<action>`` elements of a build,
        ``[xml.etree.ElementTree.Element]``
    :returns: revisions in order of first occurrence,
        ``[GenericGitRevision]``
    '''
    revisions = []
    for action in actions:
        revision = _find_revision(action)
        if revision is None:
            continue
        name = _text(revision, 'branch/name')
        if not name:
            continue
        candidate = GenericGitRevision(
            name=name,
            branch=branch_from_ref(name),
            sha1=_text(revision, 'branch/SHA1'),
            remote_url=_text(action, 'remoteUrl'))
        if candidate not in revisions:
            revisions.append(candidate)
    return revisions
