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

"""Graph API results

Every request yields exactly one of two results:

  JsonResponse - the body decoded as JSON, available as .data
  RawBody      - the body as text, when it wasn't JSON

Both carry the HTTP status and the raw x-app-usage header, if any. A
non-2xx status is not an error here; the Graph API reports its own errors in
the body, and RemoteError decodes those.
"""

import json

DEFAULT_CHARSET = "utf-8"


class Response(object):
    """Base of JsonResponse and RawBody.

    Results compare equal when their variant, content, status and app_usage
    match. They hold mutable data and are not hashable.
    """
    __hash__ = None

    def __init__(self, status=None, app_usage=None):
        self.status = status
        self.app_usage = app_usage

    @property
    def rate_limited(self):
        """True when the Graph API refused the call and reported app usage"""
        return self.status == 403 and self.app_usage is not None

    @property
    def error(self):
        """The RemoteError in the body, or None"""
        return None


class JsonResponse(Response):
    def __init__(self, data, status=None, app_usage=None):
        Response.__init__(self, status, app_usage)
        self.data = data

    @property
    def error(self):
        if isinstance(self.data, dict) and "error" in self.data:
            return RemoteError.from_data(self.data["error"])
        return None

    def __eq__(self, other):
        return (isinstance(other, JsonResponse) and self.data == other.data
                and self.status == other.status and self.app_usage == other.app_usage)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return "<JsonResponse %s: %r>" % (self.status, self.data)


class RawBody(Response):
    def __init__(self, body, status=None, app_usage=None):
        Response.__init__(self, status, app_usage)
        self.body = body

    def __eq__(self, other):
        return (isinstance(other, RawBody) and self.body == other.body
                and self.status == other.status and self.app_usage == other.app_usage)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return "<RawBody %s: %r>" % (self.status, self.body)


def decode_body(body, status=None, app_usage=None, charset=None):
    """Classify a response body as JsonResponse or RawBody.

    Bytes are decoded with the response charset, utf-8 when it has none or an
    unknown one. With app_usage set, the raw header value is merged into a
    decoded object under the 'app_usage' key.
    """
    if isinstance(body, bytes):
        try:
            body = body.decode(charset or DEFAULT_CHARSET, "replace")
        except LookupError:
            body = body.decode(DEFAULT_CHARSET, "replace")
    try:
        data = json.loads(body)
    except (ValueError, RecursionError):
        # RecursionError on bodies nested deeper than the decoder can follow
        return RawBody(body, status, app_usage)

    if app_usage is not None and isinstance(data, dict):
        data["app_usage"] = app_usage
    return JsonResponse(data, status, app_usage)


class RemoteError(object):
    """An error object reported by the Graph API, e.g.

        {"message": "(#4) Application request limit reached",
         "type": "OAuthException", "is_transient": true,
         "code": 4, "fbtrace_id": "HMoEZxU6YQn"}

    The full object stays available as .raw.
    """
    def __init__(self, message, type=None, code=None, raw=None):
        self.message = message
        self.type = type
        self.code = code
        self.raw = raw

    @classmethod
    def from_data(cls, data):
        if not isinstance(data, dict):
            return UnrecognizedRemoteError(data)

        message = data.get("message")
        code = data.get("code")
        if not isinstance(message, str) or isinstance(code, bool) or not isinstance(code, int):
            return UnrecognizedRemoteError(data)

        return cls(message, data.get("type"), code, data)

    def __eq__(self, other):
        return (type(self) is type(other) and self.message == other.message
                and self.type == other.type and self.code == other.code)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return "<RemoteError %s (%s): %s>" % (self.code, self.type, self.message)


class UnrecognizedRemoteError(RemoteError):
    """An error value that didn't look like a Graph API error object"""
    def __init__(self, raw):
        RemoteError.__init__(self, None, raw=raw)

    def __eq__(self, other):
        return isinstance(other, UnrecognizedRemoteError) and self.raw == other.raw

    def __repr__(self):
        return "<UnrecognizedRemoteError: %r>" % (self.raw,)
