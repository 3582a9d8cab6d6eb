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

"""Core graph API

graph_api_request() does a single round trip to the Graph API and returns a
JsonResponse or RawBody whatever the status code. Instances of GraphAPI build
the parameters for the common calls on top of it, signing them when the
config carries an app secret.
"""

import http.client
import logging
import urllib.parse

import fbgraph
from fbgraph import auth
from fbgraph.response import JsonResponse
from fbgraph.response import RemoteError
from fbgraph.response import decode_body

log = logging.getLogger(__name__)

APP_USAGE_HEADER = "x-app-usage"

CONNECTION_CLASSES = {
    "http": http.client.HTTPConnection,
    "https": http.client.HTTPSConnection,
}

# Per-call credentials: masked in logs, never taken from callers
_TOKEN_PARAMS = ("access_token", auth.APPSECRET_PROOF_PARAM)

COUNT_KINDS = ("likes", "comments")


class GraphAPI(object):
    """A client for the Facebook Graph API.

    See https://developers.facebook.com/docs/graph-api for complete
    documentation for the API.

    Every call takes the access token to use; nothing is kept between calls.
    For example, this will fetch the profile of the token's user and the
    number of likes on one of their posts:

       graph = fbgraph.GraphAPI()
       profile = graph.me("id,first_name", access_token)
       likes = graph.object_count("likes", post_id, access_token)

    Calls return a JsonResponse, or a RawBody when the Graph API answered
    with something other than JSON. Errors reported by the Graph API come
    back as ordinary JSON with an 'error' key; the count calls decode them
    into a RemoteError which they return in place of the count.
    """
    def __init__(self, config=None, options=None):
        """Create a GraphAPI for the given Config

        Without a config the process-wide one is used. options are passed to
        every request, e.g. {'timeout': 10}.
        """
        self.config = config or fbgraph.get_config()
        self.options = options

    def me(self, fields, access_token):
        """Basic information on the token's user.

        fields is either a comma separated string or list of field names, or
        a dict or list of (name, value) parameters. Any access_token or
        appsecret_proof among them is dropped for the ones of this call.
        """
        if isinstance(fields, str):
            params = [("fields", fields)]
        elif isinstance(fields, dict):
            params = list(fields.items())
        elif fields and all(isinstance(f, tuple) for f in fields):
            params = list(fields)
        elif fields:
            params = [("fields", fields)]
        else:
            params = []

        params = [(name, value) for name, value in params if name not in _TOKEN_PARAMS]
        params.append(("access_token", access_token))
        return self.get("/me", params, access_token)

    def picture(self, user_id, type, access_token):
        """Picture of a user: type is one of small, normal, album, large, square"""
        params = [("type", type), ("redirect", False), ("access_token", access_token)]
        return self.get("/".join(("", str(user_id), "picture")), params, access_token)

    def my_likes(self, access_token):
        return self.get("/me/likes", [("access_token", access_token)], access_token)

    def permissions(self, user_id, access_token):
        """Permissions the user granted"""
        return self.get("/".join(("", str(user_id), "permissions")),
                        [("access_token", access_token)], access_token)

    def page(self, page_id, access_token, fields=None):
        """Page information, optionally limited to a list of fields"""
        params = []
        if fields:
            params.append(("fields", fields))
        params.append(("access_token", access_token))
        return self.get("/" + str(page_id), params, access_token)

    def page_feed(self, page_id, access_token, limit=fbgraph.DEFAULT_FEED_LIMIT):
        """One page of posts and links published by or to the page.

        The Graph API won't return more than 100 posts at a time, so asking
        for more raises a FeedLimitError without doing any request.
        """
        if limit > fbgraph.MAX_FEED_LIMIT:
            raise fbgraph.FeedLimitError("feed limit %r is over %d" % (limit, fbgraph.MAX_FEED_LIMIT))

        params = [("access_token", access_token), ("limit", limit)]
        return self.get("/".join(("", str(page_id), "feed")), params, access_token)

    def fan_count(self, page_id, access_token):
        """Number of fans of the page, or the RemoteError the Graph API returned"""
        response = self.page(page_id, access_token, ["fan_count"])
        return extract_field(response, "fan_count")

    def page_likes(self, page_id, access_token):
        """Deprecated, use fan_count"""
        return self.fan_count(page_id, access_token)

    def object_count(self, kind, object_id, access_token):
        """Total number of likes or comments on a post, comment, link, photo...

        kind is 'likes' or 'comments'. Returns the count, or the RemoteError
        the Graph API returned.
        """
        if kind not in COUNT_KINDS:
            raise ValueError("unknown count %r, expected one of %s" % (kind, ", ".join(COUNT_KINDS)))
        return summary_count(self.object_summary(kind, object_id, access_token))

    def object_summary(self, kind, object_id, access_token):
        """The 'summary' object of a connection, or {'error': ...}"""
        params = [("access_token", access_token), ("summary", True)]
        response = self.get("/".join(("", str(object_id), kind)), params, access_token)

        if not isinstance(response, JsonResponse) or not isinstance(response.data, dict):
            raise fbgraph.UnexpectedResponseError("no summary in response", response)
        if "error" in response.data:
            return {"error": response.data["error"]}
        try:
            return response.data["summary"]
        except KeyError:
            raise fbgraph.UnexpectedResponseError("no summary in response", response)

    def put(self, parent_id, connection_name, access_token, **data):
        """Writes the given object to the graph, connected to the given parent.

        For example,

            graph.put(post_id, "comments", access_token, message="First!")

        Most write operations require extended permissions.
        """
        path = "/".join(("", str(parent_id), connection_name))
        return self.post(path, [("access_token", access_token)], access_token, payload=data)

    def put_comment(self, object_id, message, access_token):
        """Writes the given comment on the given post."""
        return self.put(object_id, "comments", access_token, message=message)

    def put_like(self, object_id, access_token):
        """Likes the given post."""
        return self.put(object_id, "likes", access_token)

    def get(self, path, params, access_token):
        params = auth.sign_params(params, access_token, self.config.secret)
        return http_get(path, params, options=self.options, config=self.config)

    def post(self, path, params, access_token, payload=None):
        params = auth.sign_params(params, access_token, self.config.secret)
        return http_post(path, params, payload, options=self.options, config=self.config)


def summary_count(summary):
    """Pull total_count out of a summary, or decode the error in its place"""
    if not isinstance(summary, dict):
        raise fbgraph.UnexpectedResponseError("summary is not an object", summary)
    if "total_count" in summary:
        return summary["total_count"]
    if "error" in summary:
        return RemoteError.from_data(summary["error"])
    raise fbgraph.UnexpectedResponseError("no total_count in summary", summary)


def extract_field(response, name):
    if isinstance(response, JsonResponse) and isinstance(response.data, dict):
        if "error" in response.data:
            return response.error
        if name in response.data:
            return response.data[name]
    raise fbgraph.UnexpectedResponseError("no %s in response" % name, response)


def http_get(path, params=None, options=None, config=None):
    return graph_api_request("GET", path, params, options=options, config=config)


def http_post(path, params=None, payload=None, options=None, config=None):
    return graph_api_request("POST", path, params, payload, options=options, config=config)


def encode_params(params):
    """URL encode params, keeping their order.

    params is a list of (name, value) pairs or a dict. Booleans are sent as
    true/false and lists are comma joined.
    """
    if not params:
        return ""
    if isinstance(params, dict):
        params = params.items()

    pairs = [(str(name), _param_value(value)) for name, value in params]
    return urllib.parse.urlencode(pairs, quote_via=urllib.parse.quote)


def _param_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_param_value(v) for v in value)
    return str(value)


def build_url(base_url, path, params=None):
    url = base_url.rstrip("/") + "/" + path.lstrip("/")
    query = encode_params(params)
    if query:
        url = "?".join((url, query))
    return url


def graph_api_request(method, path, params=None, payload=None, options=None, config=None):
    """Does one request against the Graph API and classifies the response.

    The result is a JsonResponse when the body is JSON, otherwise a RawBody.
    If the Graph API reported app usage, the raw x-app-usage header is also
    stored under 'app_usage' in the decoded body.

    Whatever the status code, a completed exchange is never an error here.
    Failures to complete it (refused connections, timeouts, DNS or TLS
    errors) are raised unchanged and never retried.
    """
    config = config or fbgraph.get_config()
    options = options or {}

    url = build_url(config.base_url, path, params)
    parts = urllib.parse.urlsplit(url)
    try:
        connection_class = CONNECTION_CLASSES[parts.scheme]
    except KeyError:
        raise fbgraph.Error("base url %r is not an http or https url" % config.base_url)

    headers = dict(options.get("headers") or {})
    body = None
    if payload is not None:
        body = _encode_payload(payload, headers)

    conn_kwargs = {}
    if options.get("timeout") is not None:
        conn_kwargs["timeout"] = options["timeout"]

    log.info("[%s] %s", method, _redacted_url(url))

    conn = connection_class(parts.netloc, **conn_kwargs)
    target = urllib.parse.urlunsplit(("", "", parts.path or "/", parts.query, ""))
    try:
        conn.request(method, target, body, headers)
        response = conn.getresponse()
        status = response.status
        app_usage = response.getheader(APP_USAGE_HEADER)
        charset = response.headers.get_content_charset()
        response_body = response.read()
    except (OSError, http.client.HTTPException) as e:
        log.error("[%s] %s failed: %r", method, path, e)
        raise
    finally:
        conn.close()

    log.debug("Response: %r", (status, response.reason))

    if app_usage is not None:
        if status == 403:
            log.error("Graph API usage limit reached. Details: %s", app_usage)
        else:
            log.warning("Graph API usage nearly reached. Details: %s", app_usage)

    log.debug("Response Data: %r", response_body)

    return decode_body(response_body, status, app_usage, charset)


def _encode_payload(payload, headers):
    if isinstance(payload, dict):
        headers.setdefault("Content-Type", "application/x-www-form-urlencoded")
        return encode_params(payload)
    return payload


def _redacted_url(url):
    parts = urllib.parse.urlsplit(url)
    pairs = urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
    if not pairs:
        return url
    query = "&".join("%s=%s" % (name, "***" if name in _TOKEN_PARAMS else value)
                     for name, value in pairs)
    return urllib.parse.urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))
