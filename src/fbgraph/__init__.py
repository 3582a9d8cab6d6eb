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
"""
Python client library for the Facebook Graph API.

A handful of convenience calls over the Graph API: profiles, pictures,
permissions, pages, page feeds and like/comment counts. Access tokens are
supplied by the caller on every call. If an app secret is configured, every
request is signed with an appsecret_proof, see
https://developers.facebook.com/docs/graph-api/securing-requests

Typical usage:

    fbgraph.set_appsecret(app_secret)

    profile = fbgraph.me("id,first_name", access_token)
    if isinstance(profile, fbgraph.JsonResponse):
        print(profile.data["first_name"])

    likes = fbgraph.object_count("likes", post_id, access_token)

"""


class Error(Exception):
    """Generic client library error"""
    pass


class FeedLimitError(Error, ValueError):
    """A page feed was requested with more posts than the Graph API returns"""
    pass


class UnexpectedResponseError(Error):
    """A response didn't have the shape an operation needed to unwrap it"""
    def __init__(self, message, response):
        Error.__init__(self, message)
        self.response = response


GRAPH_API_URL = "https://graph.facebook.com"
MAX_FEED_LIMIT = 100
DEFAULT_FEED_LIMIT = 25

from fbgraph.config import Config
from fbgraph.config import get_config
from fbgraph.config import get_base_url
from fbgraph.config import get_secret
from fbgraph.config import set_base_url
from fbgraph.config import set_secret
from fbgraph.auth import appsecret_proof
from fbgraph.response import JsonResponse
from fbgraph.response import RawBody
from fbgraph.response import RemoteError
from fbgraph.response import UnrecognizedRemoteError
from fbgraph.graph_api import GraphAPI
from fbgraph.graph_api import http_get
from fbgraph.graph_api import http_post


def set_appsecret(appsecret):
    """Sign every following request with an appsecret_proof for this secret"""
    set_secret(appsecret)


# Shortcuts bound to the process-wide configuration
def _graph():
    return GraphAPI(get_config())

def me(fields, access_token):
    return _graph().me(fields, access_token)

def picture(user_id, type, access_token):
    return _graph().picture(user_id, type, access_token)

def my_likes(access_token):
    return _graph().my_likes(access_token)

def permissions(user_id, access_token):
    return _graph().permissions(user_id, access_token)

def page(page_id, access_token, fields=None):
    return _graph().page(page_id, access_token, fields)

def page_feed(page_id, access_token, limit=DEFAULT_FEED_LIMIT):
    return _graph().page_feed(page_id, access_token, limit)

def fan_count(page_id, access_token):
    return _graph().fan_count(page_id, access_token)

def page_likes(page_id, access_token):
    return _graph().page_likes(page_id, access_token)

def object_count(kind, object_id, access_token):
    return _graph().object_count(kind, object_id, access_token)


__all__ = [
    "Error", "FeedLimitError", "UnexpectedResponseError",
    "Config", "GraphAPI", "JsonResponse", "RawBody", "RemoteError",
    "UnrecognizedRemoteError", "appsecret_proof", "get_base_url",
    "get_secret", "set_base_url", "set_secret", "set_appsecret",
    "http_get", "http_post", "me", "picture", "my_likes", "permissions",
    "page", "page_feed", "fan_count", "page_likes", "object_count",
]
