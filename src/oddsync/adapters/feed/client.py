"""HTTP client for the betting odds feed."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from oddsync.adapters.http_client import AsyncHttpClient, HttpClientConfig
from oddsync.config.feed import FeedConfig, get_feed_config
from oddsync.domain.errors import FetchError

if TYPE_CHECKING:
    from collections.abc import Callable

    from oddsync.domain.ports.fetching import FeedFetcher

log = getLogger(__name__)


def _default_client_factory(config: HttpClientConfig) -> AsyncHttpClient:
    return AsyncHttpClient(config)


@dataclass(slots=True)
class FeedClient:
    """Fetch the raw feed document with a single GET; no parsing happens here."""

    config: FeedConfig = field(default_factory=get_feed_config)
    client_factory: Callable[[HttpClientConfig], AsyncHttpClient] = field(
        default=_default_client_factory
    )

    def fetch(self) -> str:
        return asyncio.run(self.fetch_async())

    async def fetch_async(self) -> str:
        url = self.config.url
        log.info("Fetching odds feed from %s", url)
        async with self.client_factory(self.config.http) as client:
            try:
                response = await client.get(url, follow_redirects=True)
            except httpx.HTTPError as exc:
                log.error("Transport error fetching %s: %s", url, exc)
                raise FetchError(f"Could not fetch odds feed: {exc}") from exc

        if not response.is_success:
            log.error("Odds feed responded with HTTP %s", response.status_code)
            raise FetchError(
                f"Odds feed responded with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        return response.text


if TYPE_CHECKING:
    _fetcher_check: FeedFetcher = FeedClient()
