"""Fixtures faking the Graph API at the http.client level."""
import email.message
import json
import urllib.parse

import pytest

import fbgraph
from fbgraph import config as fb_config
from fbgraph import graph_api


class FakeResponse(object):
    def __init__(self, status=200, body=b"", headers=None, reason="OK"):
        self.status = status
        self.reason = reason
        self._body = body if isinstance(body, bytes) else body.encode("utf-8")
        self.msg = email.message.Message()
        for name, value in (headers or {}).items():
            self.msg[name] = value
        self.headers = self.msg

    def getheader(self, name, default=None):
        return self.msg.get(name, default)

    def read(self):
        return self._body


class FakeGraph(object):
    """Queue of canned responses plus a log of the requests made."""

    def __init__(self):
        self.responses = []
        self.requests = []
        self.failure = None

    def reply(self, status=200, body=None, headers=None):
        if not isinstance(body, (str, bytes)):
            body = json.dumps(body)
        self.responses.append(FakeResponse(status, body, headers))

    def fail_with(self, exc):
        self.failure = exc

    @property
    def last(self):
        return self.requests[-1]

    def connection_class(self, scheme):
        graph = self

        class FakeConnection(object):
            def __init__(self, host, **kwargs):
                self.host = host
                self.kwargs = kwargs
                self.closed = False

            def request(self, method, target, body=None, headers=None):
                parts = urllib.parse.urlsplit(target)
                graph.requests.append(FakeRequest(
                    scheme, self.host, method, target, parts.path,
                    urllib.parse.parse_qsl(parts.query, keep_blank_values=True),
                    body, headers or {}, self.kwargs, self))
                if graph.failure is not None:
                    raise graph.failure

            def getresponse(self):
                return graph.responses.pop(0)

            def close(self):
                self.closed = True

        return FakeConnection


class FakeRequest(object):
    def __init__(self, scheme, host, method, target, path, params, body, headers, conn_kwargs, conn):
        self.scheme = scheme
        self.host = host
        self.method = method
        self.target = target
        self.path = path
        self.params = params
        self.body = body
        self.headers = headers
        self.conn_kwargs = conn_kwargs
        self.conn = conn

    @property
    def param_names(self):
        return [name for name, _ in self.params]


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.delenv(fb_config.URL_ENV, raising=False)
    monkeypatch.delenv(fb_config.APPSECRET_ENV, raising=False)
    fb_config.reset_config()
    yield fbgraph.get_config()
    fb_config.reset_config()


@pytest.fixture
def fake_graph(monkeypatch):
    graph = FakeGraph()
    for scheme in ("http", "https"):
        monkeypatch.setitem(graph_api.CONNECTION_CLASSES, scheme, graph.connection_class(scheme))
    return graph
