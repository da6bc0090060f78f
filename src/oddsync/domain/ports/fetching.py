"""Ports for fetching and decoding the external odds feed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from oddsync.domain.model import BettingSnapshot


@runtime_checkable
class FeedFetcher(Protocol):
    """Port returning the raw, unparsed feed document."""

    def fetch(self) -> str: ...


@runtime_checkable
class SnapshotParser(Protocol):
    """Port turning a raw feed document into a betting snapshot."""

    def parse(self, raw: str | bytes) -> BettingSnapshot: ...


__all__ = ["FeedFetcher", "SnapshotParser"]
