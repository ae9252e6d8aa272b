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
.. module:: jenkins_service.properties
    :platform: Unix, Windows
    :synopsis: Decoding of property files archived by a build

A build may archive a property file in java properties, JSON or YAML
syntax. Whatever the syntax, the decoded result is a single ``dict`` whose
values keep the types of the source document (java properties only know
strings).
'''

import json
import logging
import os

import yaml

from jenkins_service.exceptions import PropertyFileDecodeException

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ('#', '!')


def _decode_properties(file_name, text):
    properties = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        if '=' not in line:
            continue
        key, value = line.split('=', 1)
        properties[key.strip()] = value.strip()
    return properties


def _decode_json(file_name, text):
    try:
        document = json.loads(text)
    except ValueError as e:
        raise PropertyFileDecodeException(file_name, e)
    if not isinstance(document, dict):
        raise PropertyFileDecodeException(
            file_name, 'top level element is not an object')
    return document


def _decode_yaml(file_name, text):
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise PropertyFileDecodeException(file_name, e)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise PropertyFileDecodeException(
            file_name, 'top level element is not a mapping')
    return document


# extension -> decoder, anything else is read as java properties
DECODERS = {
    '.json': _decode_json,
    '.yml': _decode_yaml,
    '.yaml': _decode_yaml,
}


def get_decoder(file_name):
    '''Return the decoder used for ``file_name``.'''
    extension = os.path.splitext(file_name)[1].lower()
    return DECODERS.get(extension, _decode_properties)


def decode_properties(file_name, content):
    '''Decode the content of a property file.

    :param file_name: Name of the archived file, ``str``
    :param content: Raw file content, ``bytes`` or ``str``
    :returns: decoded properties, ``dict``
    :throws: :class:`PropertyFileDecodeException` on malformed content
    '''
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise PropertyFileDecodeException(file_name, e)
    decoder = get_decoder(file_name)
    logger.debug('Decoding property file[%s] with %s',
                 file_name, decoder.__name__)
    return decoder(file_name, content)
