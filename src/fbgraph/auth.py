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
import hashlib
import hmac

APPSECRET_PROOF_PARAM = "appsecret_proof"


def appsecret_proof(secret, access_token):
    """Return the appsecret_proof for an access token.

    This is the lowercase hex HMAC-SHA256 of the access token keyed by the app
    secret. The Graph API uses it to check that a request comes from someone
    holding the app secret and not just a (possibly stolen) token.

    See https://developers.facebook.com/docs/graph-api/securing-requests
    """
    return hmac.new(_to_bytes(secret), msg=_to_bytes(access_token),
                    digestmod=hashlib.sha256).hexdigest()


def sign_params(params, access_token, secret):
    """Append the appsecret_proof to the params if a secret is configured.

    The proof is always the last parameter. Without a secret the params are
    returned untouched.
    """
    if secret is None:
        return params
    return list(params) + [(APPSECRET_PROOF_PARAM, appsecret_proof(secret, access_token))]


def _to_bytes(value):
    if isinstance(value, bytes):
        return value
    return str(value).encode("utf-8")
