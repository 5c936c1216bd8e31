from __future__ import annotations

import json

import pytest
import requests

from lootview.data.errors import NetworkError, ProtocolError
from lootview.data.fetcher import RemoteFetcher


class _FakeResponse:
    def __init__(self, status_code: int = 200, body: bytes = b"", reason: str = "OK") -> None:
        self.status_code = status_code
        self.content = body
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[tuple[str, dict, float]] = []
        self.closed = False

    def get(self, url: str, *, headers: dict, timeout: float) -> _FakeResponse:
        self.calls.append((url, headers, timeout))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    def close(self) -> None:
        self.closed = True


def test_fetch_returns_body_and_sends_user_agent() -> None:
    session = _FakeSession(_FakeResponse(body=b"hello"))
    fetcher = RemoteFetcher(session, timeout=5.0, user_agent="tests/1.0")

    assert fetcher.fetch("https://example.test/a") == b"hello"
    url, headers, timeout = session.calls[0]
    assert url == "https://example.test/a"
    assert headers["User-Agent"] == "tests/1.0"
    assert timeout == 5.0


def test_fetch_json_parses_body() -> None:
    payload = [{"name": "a", "url": "U1"}]
    fetcher = RemoteFetcher(_FakeSession(_FakeResponse(body=json.dumps(payload).encode())))
    assert fetcher.fetch_json("https://example.test/listing") == payload


def test_non_success_status_raises_network_error() -> None:
    fetcher = RemoteFetcher(_FakeSession(_FakeResponse(status_code=403, reason="Forbidden")))
    with pytest.raises(NetworkError) as excinfo:
        fetcher.fetch("https://example.test/limited")
    assert excinfo.value.status_code == 403
    assert excinfo.value.locator == "https://example.test/limited"


def test_transport_failure_raises_network_error() -> None:
    fetcher = RemoteFetcher(_FakeSession(error=requests.ConnectionError("boom")))
    with pytest.raises(NetworkError) as excinfo:
        fetcher.fetch("https://example.test/down")
    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_invalid_json_raises_protocol_error() -> None:
    fetcher = RemoteFetcher(_FakeSession(_FakeResponse(body=b"<html>rate limited</html>")))
    with pytest.raises(ProtocolError):
        fetcher.fetch_json("https://example.test/html")


def test_close_closes_session() -> None:
    session = _FakeSession(_FakeResponse())
    RemoteFetcher(session).close()
    assert session.closed
