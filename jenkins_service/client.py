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
.. module:: jenkins_service.client
    :platform: Unix, Windows
    :synopsis: Calls to the Jenkins XML remote API

:class:`BaseJenkinsClient` is the set of remote calls the service relies
on, one method per round trip. :class:`JenkinsClient` implements it over
HTTP with ``requests``. Job names handed to a client are already encoded,
see :func:`jenkins_service.names.encode_job_name`.
'''

import abc
import logging
import os
from urllib.parse import quote, urlencode, urljoin
import xml.etree.ElementTree as ET

import requests
import requests.exceptions as req_exc
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from jenkins_service.endpoints import (
    BUILD_INFO, BUILD_JOB, BUILD_WITH_PARAMS_JOB, BUILDS, CANCEL_QUEUE,
    CRUMB_URL, DEPENDENCIES, GIT_DETAILS, JOB_CONFIG, JOBS_QUERY,
    JOBS_QUERY_TREE, LAST_BUILD, PROJECTS_QUERY_TREE, PROPERTY_FILE, Q_ITEM,
    STOP_BUILD)
from jenkins_service.exceptions import (
    BadHTTPException, EmptyResponseException, JenkinsException,
    JenkinsHTTPException, NotFoundException, TimeoutException)
from jenkins_service.model import (
    Build, Job, JobConfig, JobDependencies, QueuedItem)

logger = logging.getLogger(__name__)

DEFAULT_CRUMB_FIELD = 'Jenkins-Crumb'
DEFAULT_FOLDER_DEPTH = 10


class BaseJenkinsClient(metaclass=abc.ABCMeta):
    '''Remote calls needed by :class:`jenkins_service.JenkinsService`.'''

    @abc.abstractmethod
    def get_jobs(self):
        ''':returns: the job tree, ``[Job]``'''

    @abc.abstractmethod
    def get_projects(self):
        ''':returns: the job tree with the last build of every job,
            ``[Job]``'''

    @abc.abstractmethod
    def get_builds(self, name):
        ''':returns: builds of a job, newest first, ``[Build]``'''

    @abc.abstractmethod
    def get_build(self, name, number):
        ''':returns: ``Build``'''

    @abc.abstractmethod
    def get_latest_build(self, name):
        ''':returns: ``Build``'''

    @abc.abstractmethod
    def get_git_details(self, name, number):
        ''':returns: ``<action>`` elements of a build,
            ``[xml.etree.ElementTree.Element]``'''

    @abc.abstractmethod
    def get_job_config(self, name):
        ''':returns: ``JobConfig``'''

    @abc.abstractmethod
    def get_dependencies(self, name):
        ''':returns: ``JobDependencies``'''

    @abc.abstractmethod
    def get_queued_item(self, item_number):
        ''':returns: ``QueuedItem``'''

    @abc.abstractmethod
    def get_property_file(self, name, number, path):
        ''':returns: content of an archived file, ``bytes``'''

    @abc.abstractmethod
    def get_crumb(self):
        ''':returns: the CSRF crumb, ``str``'''

    @abc.abstractmethod
    def build(self, name, body, crumb=None):
        ''':returns: queue item number, ``int``'''

    @abc.abstractmethod
    def build_with_parameters(self, name, parameters, body, crumb=None):
        ''':returns: queue item number, ``int``'''

    @abc.abstractmethod
    def stop_running_build(self, name, number, body, crumb=None):
        pass

    @abc.abstractmethod
    def stop_queued_build(self, queue_id, body, crumb=None):
        pass


class WrappedSession(requests.Session):
    """A wrapper for requests.Session to override 'verify' property, ignoring REQUESTS_CA_BUNDLE environment variable.

    This is a workaround for https://github.com/kennethreitz/requests/issues/3829 (will be fixed in requests 3.0.0)
    """

    def merge_environment_settings(self, url, proxies, stream, verify, *args,
                                   **kwargs):
        if self.verify is False:
            verify = False

        return super(WrappedSession, self).merge_environment_settings(
            url, proxies, stream, verify, *args, **kwargs)


class JenkinsClient(BaseJenkinsClient):

    def __init__(self, url, username=None, password=None, timeout=None,
                 crumb_field=DEFAULT_CRUMB_FIELD,
                 folder_depth=DEFAULT_FOLDER_DEPTH):
        '''Create handle to Jenkins instance.

        All methods will raise :class:`JenkinsException` on failure.

        :param url: URL of Jenkins server, ``str``
        :param username: Server username, ``str``
        :param password: Server password or API token, ``str``
        :param timeout: Server connection timeout in secs (default: not
            set), ``int``
        :param crumb_field: Header carrying the CSRF crumb, ``str``
        :param folder_depth: Number of folder levels fetched when listing
            jobs, ``int``
        '''
        if url[-1] == '/':
            self.server = url
        else:
            self.server = url + '/'

        self.timeout = timeout
        self.crumb_field = crumb_field
        self.folder_depth = folder_depth
        self._session = WrappedSession()
        if username is not None and password is not None:
            self._session.auth = requests.auth.HTTPBasicAuth(
                username.encode('utf-8'), password.encode('utf-8'))

        extra_headers = os.environ.get("JENKINS_API_EXTRA_HEADERS", "")
        if extra_headers:
            logger.warning("JENKINS_API_EXTRA_HEADERS adds these HTTP headers: %s",
                           extra_headers.split("\n"))
        for token in extra_headers.split("\n"):
            if ":" in token:
                header, value = token.split(":", 1)
                self._session.headers[header] = value.strip()

        if os.getenv('PYTHONHTTPSVERIFY', '1') == '0':
            logger.debug('PYTHONHTTPSVERIFY=0 detected so we will '
                         'disable requests library SSL verification.')
            requests.packages.urllib3.disable_warnings(InsecureRequestWarning)
            self._session.verify = False

    @property
    def auth(self):
        return self._session.auth

    def _get_encoded_params(self, params):
        for k, v in params.items():
            if k == "path":
                params[k] = quote(v.encode('utf8'), safe='/')
        return params

    def _build_url(self, format_spec, variables=None):

        if variables:
            url_path = format_spec % self._get_encoded_params(variables)
        else:
            url_path = format_spec

        return str(urljoin(self.server, url_path))

    def _response_handler(self, response):
        '''Handle response objects'''

        # raise exceptions if occurred
        response.raise_for_status()

        headers = response.headers
        if (headers.get('content-length') is None and
                headers.get('transfer-encoding') is None and
                headers.get('location') is None and
                (response.content is None or len(response.content) <= 0)):
            # response body should only exist if one of these is provided
            raise EmptyResponseException(
                "Error communicating with server[%s]: "
                "empty response" % self.server)

        return response

    def _request(self, req):

        r = self._session.prepare_request(req)
        # requests.Session.send() does not honor env settings by design
        # see https://github.com/requests/requests/issues/2807
        _settings = self._session.merge_environment_settings(
            r.url, {}, None, self._session.verify, None)
        _settings['timeout'] = self.timeout
        return self._session.send(r, **_settings)

    def _crumb_headers(self, crumb):
        if crumb:
            return {self.crumb_field: crumb}
        return {}

    def jenkins_open(self, req):
        '''Return the HTTP response body from a ``requests.Request``.

        :returns: ``str``
        '''
        return self.jenkins_request(req).text

    def jenkins_request(self, req):
        '''Utility routine for opening an HTTP request to a Jenkins server.

        :param req: A ``requests.Request`` to submit.
        :returns: A ``requests.Response`` object.
        :throws: :class:`JenkinsHTTPException` carrying the HTTP status,
            :class:`NotFoundException` on a 404,
            :class:`TimeoutException` on a timeout
        '''
        try:
            return self._response_handler(self._request(req))

        except req_exc.HTTPError as e:
            status_code = e.response.status_code
            if status_code == 404:
                raise NotFoundException('Requested item could not be found')
            if status_code in [401, 403]:
                msg = 'Error in request. ' + \
                      'Possibly authentication failed [%s]: %s' % (
                          status_code, e.response.reason)
            else:
                msg = 'Error in request [%s]: %s' % (
                    status_code, e.response.reason)
            if e.response.text:
                msg += '\n' + e.response.text
            raise JenkinsHTTPException(msg, status_code)
        except req_exc.Timeout as e:
            raise TimeoutException('Error in request: %s' % (e))
        except req_exc.ConnectionError as e:
            raise JenkinsException('Error in request: %s' % (e))

    def _get_xml(self, url):
        response = self.jenkins_open(requests.Request('GET', url))
        try:
            return ET.fromstring(response)
        except ET.ParseError:
            raise BadHTTPException("Could not parse XML info for url[%s]"
                                   % url)

    def _get_tag_text(self, name, xml):
        '''Get text of tag from xml

        :param name: XML tag name, ``str``
        :param xml: XML document, ``Element``
        :returns: Text of tag, ``str``
        :throws: :class:`JenkinsException` whenever tag does not exist
            or has invalidated text
        '''
        tag = xml.find(name)
        try:
            text = tag.text.strip()
            if text:
                return text
            raise JenkinsException("tag[%s] is invalidated" % name)
        except AttributeError:
            raise JenkinsException("tag[%s] is invalidated" % name)

    def _jobs_query(self, tree):
        jobs_query = 'jobs[name]'
        for _ in range(self.folder_depth):
            jobs_query = tree % jobs_query
        return JOBS_QUERY % jobs_query

    def get_jobs(self):
        '''Get the job tree, folders included.

        Folders nested deeper than ``folder_depth`` levels are returned
        without their children.
        '''
        root = self._get_xml(self._build_url(
            self._jobs_query(JOBS_QUERY_TREE)))
        return [Job.from_xml(job) for job in root.findall('job')]

    def get_projects(self):
        root = self._get_xml(self._build_url(
            self._jobs_query(PROJECTS_QUERY_TREE)))
        return [Job.from_xml(job) for job in root.findall('job')]

    def get_builds(self, name):
        root = self._get_xml(self._build_url(BUILDS, locals()))
        return [Build.from_xml(build) for build in root.findall('build')]

    def get_build(self, name, number):
        '''Get build information.

        :param name: Encoded job name, ``str``
        :param number: Build number, ``int``
        :returns: ``Build``
        '''
        return Build.from_xml(self._get_xml(
            self._build_url(BUILD_INFO, locals())))

    def get_latest_build(self, name):
        return Build.from_xml(self._get_xml(
            self._build_url(LAST_BUILD, locals())))

    def get_git_details(self, name, number):
        root = self._get_xml(self._build_url(GIT_DETAILS, locals()))
        return root.findall('action')

    def get_job_config(self, name):
        return JobConfig.from_xml(self._get_xml(
            self._build_url(JOB_CONFIG, locals())))

    def get_dependencies(self, name):
        return JobDependencies.from_xml(self._get_xml(
            self._build_url(DEPENDENCIES, locals())))

    def get_queued_item(self, item_number):
        '''Get information about a queued item (to-be-created build).

        :param item_number: queue number, ``int``
        :returns: ``QueuedItem``, its ``number`` is ``None`` while the item
            waits for an executor
        '''
        number = item_number
        return QueuedItem.from_xml(self._get_xml(
            self._build_url(Q_ITEM, locals())))

    def get_property_file(self, name, number, path):
        '''Get the raw content of a file archived by a build.

        :param name: Encoded job name, ``str``
        :param number: Build number, ``int``
        :param path: Path of the artifact relative to the archive, ``str``
        :returns: ``bytes``
        '''
        response = self.jenkins_request(requests.Request(
            'GET', self._build_url(PROPERTY_FILE, locals())))
        return response.content

    def get_crumb(self):
        '''Ask the crumb issuer for a CSRF crumb.

        :returns: the crumb, ``str``
        '''
        xml = self._get_xml(self._build_url(CRUMB_URL))
        return self._get_tag_text('crumb', xml)

    def _queue_item_number(self, response):
        if 'Location' not in response.headers:
            raise EmptyResponseException(
                "Header 'Location' not found in "
                "response from server[%s]" % self.server)

        location = response.headers['Location']
        # location is a queue item, eg. "http://jenkins/queue/item/25/"
        if location.endswith('/'):
            location = location[:-1]
        parts = location.split('/')
        return int(parts[-1])

    def build(self, name, body, crumb=None):
        '''Trigger a build.

        :param name: Encoded job name, ``str``
        :param body: Request body, ``str``
        :param crumb: CSRF crumb or ``None``, ``str``
        :returns: ``int`` queue item
        '''
        response = self.jenkins_request(requests.Request(
            'POST', self._build_url(BUILD_JOB, {'name': name}),
            data=body, headers=self._crumb_headers(crumb)))
        return self._queue_item_number(response)

    def build_with_parameters(self, name, parameters, body, crumb=None):
        url = (self._build_url(BUILD_WITH_PARAMS_JOB, {'name': name}) +
               '?' + urlencode(parameters))
        response = self.jenkins_request(requests.Request(
            'POST', url, data=body, headers=self._crumb_headers(crumb)))
        return self._queue_item_number(response)

    def stop_running_build(self, name, number, body, crumb=None):
        self.jenkins_open(requests.Request(
            'POST', self._build_url(STOP_BUILD,
                                    {'name': name, 'number': number}),
            data=body, headers=self._crumb_headers(crumb)))

    def stop_queued_build(self, queue_id, body, crumb=None):
        headers = self._crumb_headers(crumb)
        headers['Referer'] = self.server
        self.jenkins_open(requests.Request(
            'POST', self._build_url(CANCEL_QUEUE, {'id': queue_id}),
            data=body, headers=headers))
