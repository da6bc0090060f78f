"""Betting odds feed configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var
from .http_client import HttpClientConfig

DEFAULT_FEED_URL = "https://www.electionbettingodds.com/President2020_api"
FEED_CONTAINER_KEY = "BettingData"
FEED_TIME_KEY = "Time"


def _default_feed_http() -> HttpClientConfig:
    return HttpClientConfig(
        name="betting-odds-feed",
        default_headers={"Accept": "application/xml, text/xml"},
    )


@dataclass(frozen=True, slots=True)
class FeedConfig:
    """Holds the upstream odds feed location and transport settings."""

    url: str = DEFAULT_FEED_URL
    http: HttpClientConfig = field(default_factory=_default_feed_http)


def get_feed_config(*, http: HttpClientConfig | None = None) -> FeedConfig:
    url = optional_env_var("ODDS_FEED_URL") or DEFAULT_FEED_URL
    return FeedConfig(url=url, http=http or _default_feed_http())
