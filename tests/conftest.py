"""
Shared fixtures.

fake_http replaces requests.Session inside restup.client so no request ever
leaves the process. Each call is recorded with its method, URL, headers and
the fully drained body.
"""
from unittest.mock import MagicMock

import pytest

from restup import RestClient


class FakeHTTP:
    def __init__(self):
        self.status = 200
        self.content = b""
        self.error = None
        self.gate = None
        self.calls = []
        self.closed = []
        self.trust_env = []

    def request(self, method, url, headers=None, data=None, stream=False):
        body = None
        if data is not None:
            body = data if isinstance(data, bytes) else b"".join(data)
        self.calls.append({
            "method": method,
            "url": url,
            "headers": dict(headers or {}),
            "body": body,
            "data": data,
        })
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error

        resp = MagicMock()
        resp.status_code = self.status
        resp.content = self.content
        resp.__enter__.return_value = resp
        resp.__exit__.side_effect = lambda *exc: self.closed.append("response")
        return resp

    def new_session(self):
        session = MagicMock()
        session.__enter__.return_value = session
        session.__exit__.side_effect = self._close_session(session)
        session.request.side_effect = self.request
        return session

    def _close_session(self, session):
        def close(*exc):
            self.trust_env.append(session.trust_env)
            self.closed.append("session")
        return close

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def fake_http(monkeypatch):
    state = FakeHTTP()
    monkeypatch.setattr("restup.client.requests.Session", state.new_session)
    return state


@pytest.fixture
def client():
    c = RestClient("http", "example.com")
    yield c
    c.close()
