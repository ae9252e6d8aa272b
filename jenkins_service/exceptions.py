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
.. module:: jenkins_service.exceptions
    :platform: Unix, Windows
    :synopsis: Exception types raised by the Jenkins service adapter
'''


class JenkinsException(Exception):
    '''General exception type for jenkins-API-related failures.'''
    pass


class JenkinsHTTPException(JenkinsException):
    '''A failed HTTP exchange carrying the status returned by the server.'''

    def __init__(self, msg, status_code=None):
        super(JenkinsHTTPException, self).__init__(msg)
        self.status_code = status_code


class NotFoundException(JenkinsHTTPException):
    '''A special exception to call out the case of receiving a 404.'''

    def __init__(self, msg='Requested item could not be found'):
        super(NotFoundException, self).__init__(msg, status_code=404)


class EmptyResponseException(JenkinsException):
    '''A special exception to call out the case receiving an empty response.'''
    pass


class BadHTTPException(JenkinsException):
    '''A special exception to call out the case of a broken HTTP response.'''
    pass


class TimeoutException(JenkinsException):
    '''A special exception to call out in the case of a socket timeout.'''


class PropertyFileDecodeException(JenkinsException):
    '''The content of a property file could not be decoded.'''

    def __init__(self, file_name, reason):
        super(PropertyFileDecodeException, self).__init__(
            'Could not decode property file[%s]: %s' % (file_name, reason))
        self.file_name = file_name


class InvalidJobParameterException(JenkinsException):
    '''A requested build parameter violates the job's declared choices.'''

    def __init__(self, parameter, value, choices):
        super(InvalidJobParameterException, self).__init__(
            'Invalid job parameter[%s]: value[%s] is not one of %s'
            % (parameter, value, ', '.join(choices)))
        self.parameter = parameter
        self.value = value
        self.choices = choices
