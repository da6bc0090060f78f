from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from oddsync.adapters.feed import FeedClient
from oddsync.adapters.http_client import AsyncHttpClient, HttpClientConfig
from oddsync.config.feed import DEFAULT_FEED_URL, FeedConfig
from oddsync.domain.errors import FetchError

FEED_URL = "https://feed.example.test/odds"


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[HttpClientConfig], AsyncHttpClient]:
    def factory(http: HttpClientConfig) -> AsyncHttpClient:
        return AsyncHttpClient(http, transport=httpx.MockTransport(handler))

    return factory


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> FeedClient:
    return FeedClient(config=FeedConfig(url=FEED_URL), client_factory=_make_client_factory(handler))


def test_fetch_returns_raw_body(feed_document: str) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text=feed_document)

    body = _client(handler).fetch()

    assert body == feed_document
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert str(requests[0].url) == FEED_URL


def test_fetch_raises_on_error_status() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with pytest.raises(FetchError) as excinfo:
        _client(handler).fetch()

    assert excinfo.value.status_code == 503


def test_fetch_does_not_retry() -> None:
    calls = 0

    def handler(_request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(500)

    with pytest.raises(FetchError):
        _client(handler).fetch()

    assert calls == 1


def test_fetch_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as excinfo:
        _client(handler).fetch()

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_fetch_follows_redirects(feed_document: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/odds":
            return httpx.Response(302, headers={"Location": "https://feed.example.test/v2"})
        return httpx.Response(200, text=feed_document)

    assert _client(handler).fetch() == feed_document


def test_fetch_treats_unfollowed_redirect_as_failure() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(304)

    with pytest.raises(FetchError):
        _client(handler).fetch()


def test_default_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ODDS_FEED_URL", raising=False)
    assert FeedClient().config.url == DEFAULT_FEED_URL

    monkeypatch.setenv("ODDS_FEED_URL", FEED_URL)
    assert FeedClient().config.url == FEED_URL


def test_fetch_sends_configured_headers(feed_document: str) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text=feed_document)

    _client(handler).fetch()

    assert requests[0].headers["Accept"] == "application/xml, text/xml"
