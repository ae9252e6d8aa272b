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
.. module:: jenkins_service.retry
    :platform: Unix, Windows
    :synopsis: Bounded retry of calls failing with a transient server error
'''

import logging

import tenacity

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 2


def is_transient_failure(exc):
    '''Whether a failed call is worth another attempt.

    Only errors carrying a 5xx HTTP status are transient. Timeouts carry
    no status and are not retried.

    :param exc: the raised exception
    :returns: ``True`` if the call may be retried
    '''
    status_code = getattr(exc, 'status_code', None)
    return status_code is not None and 500 <= status_code < 600


class RetryPolicy(object):
    '''Run a callable, retrying it on transient failures.

    :param attempts: total number of attempts, ``int``
    :param is_retryable: predicate classifying a raised exception
    :param wait: a tenacity wait strategy, none by default
    '''

    def __init__(self, attempts=DEFAULT_ATTEMPTS,
                 is_retryable=is_transient_failure, wait=None):
        if attempts < 1:
            raise ValueError("attempts must be >= 1 not %d" % attempts)
        self.attempts = attempts
        self.is_retryable = is_retryable
        self.wait = wait if wait is not None else tenacity.wait_none()

    def _retrying(self):
        return tenacity.Retrying(
            stop=tenacity.stop_after_attempt(self.attempts),
            retry=tenacity.retry_if_exception(self.is_retryable),
            wait=self.wait,
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True)

    def call(self, fn, *args, **kwargs):
        '''Call ``fn(*args, **kwargs)`` under this policy.

        :returns: the result of the first successful attempt
        :throws: the exception of the last attempt, or the first terminal
            one
        '''
        return self._retrying()(fn, *args, **kwargs)
