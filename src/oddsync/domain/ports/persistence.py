"""Ports for persisting candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from oddsync.domain.model import CandidateRecord


@runtime_checkable
class CandidateStore(Protocol):
    """Persistence contract for the candidate table.

    Implementations raise ``StorageError`` for any underlying failure and
    ``DuplicateCandidateError`` when an insert collides with an existing key.
    """

    def list_all(self) -> Sequence[CandidateRecord]: ...

    def update(self, last_name: str, win_probability: float) -> None: ...

    def insert(self, last_name: str, win_probability: float) -> None: ...


__all__ = ["CandidateStore"]
