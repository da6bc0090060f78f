"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import FeedFetcher, SnapshotParser
from .persistence import CandidateStore

__all__ = [
    "CandidateStore",
    "FeedFetcher",
    "SnapshotParser",
]
