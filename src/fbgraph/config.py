#!/usr/bin/env python
#
# Copyright 2010 Facebook
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License. You may obtain
# a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.

"""Client configuration

A Config holds the Graph API base url and the optional app secret used for
signing requests. Pass one to GraphAPI explicitly, or use the process-wide
default, which is created on first use from the FBGRAPH_URL and
FBGRAPH_APPSECRET environment variables.
"""

import logging
import os

import fbgraph

log = logging.getLogger(__name__)

URL_ENV = "FBGRAPH_URL"
APPSECRET_ENV = "FBGRAPH_APPSECRET"


class Config(object):
    def __init__(self, base_url=None, secret=None):
        self.base_url = base_url or fbgraph.GRAPH_API_URL
        self.secret = secret

    @classmethod
    def from_env(cls, environ=None):
        if environ is None:
            environ = os.environ
        return cls(environ.get(URL_ENV) or None, environ.get(APPSECRET_ENV) or None)

    def __repr__(self):
        # Never show the secret itself
        return "<Config: %s signing=%s>" % (self.base_url, self.secret is not None)


_default_config = None

def get_config():
    """Return the process-wide Config, creating it on first use"""
    global _default_config
    if _default_config is None:
        _default_config = Config.from_env()
        log.debug("Created default config %r", _default_config)
    return _default_config

def reset_config():
    """Drop the process-wide Config so the next call rebuilds it"""
    global _default_config
    _default_config = None

def get_base_url():
    return get_config().base_url

def set_base_url(url):
    get_config().base_url = url or fbgraph.GRAPH_API_URL

def get_secret():
    return get_config().secret

def set_secret(value):
    get_config().secret = value
