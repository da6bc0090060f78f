"""Public interface for the betting odds feed adapter."""

from __future__ import annotations

from .client import FeedClient
from .parser import OddsParser, ParsedFeed
from .schema import BettingDataPayload, FeedEnvelope

__all__ = [
    "BettingDataPayload",
    "FeedClient",
    "FeedEnvelope",
    "OddsParser",
    "ParsedFeed",
]
