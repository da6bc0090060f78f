"""Domain types for election odds ingestion."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from .errors import StorageError

BettingSnapshot: TypeAlias = "Mapping[str, object]"
"""Candidate key (case preserving) to the raw odds value found in the feed."""


class OutcomeKind(StrEnum):
    INSERTED = "inserted"
    UPDATED = "updated"
    FAILED = "failed"


class RunStatus(StrEnum):
    COMPLETE = "complete"
    ABORTED = "aborted"


@dataclass(eq=False)
class CandidateRecord:
    """Persisted candidate row; ``last_name`` is the reconciliation key."""

    last_name: str
    win_probability: float | None = None
    created_at: datetime | None = None
    id: int | None = None


@dataclass(slots=True, frozen=True)
class Outcome:
    """What happened to one candidate key during a run."""

    key: str
    kind: OutcomeKind
    win_probability: float | None = None
    reason: str | None = None

    @classmethod
    def inserted(cls, key: str, win_probability: float) -> Outcome:
        return cls(key=key, kind=OutcomeKind.INSERTED, win_probability=win_probability)

    @classmethod
    def updated(cls, key: str, win_probability: float) -> Outcome:
        return cls(key=key, kind=OutcomeKind.UPDATED, win_probability=win_probability)

    @classmethod
    def failed(cls, key: str, reason: str) -> Outcome:
        return cls(key=key, kind=OutcomeKind.FAILED, reason=reason)


@dataclass(slots=True)
class IngestionResult:
    """Ordered per-key outcomes of one pipeline run plus its overall status."""

    outcomes: list[Outcome] = field(default_factory=list)
    status: RunStatus = RunStatus.COMPLETE
    error: StorageError | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.COMPLETE

    def keys_with(self, kind: OutcomeKind) -> list[str]:
        return [outcome.key for outcome in self.outcomes if outcome.kind is kind]

    @property
    def inserted(self) -> list[str]:
        return self.keys_with(OutcomeKind.INSERTED)

    @property
    def updated(self) -> list[str]:
        return self.keys_with(OutcomeKind.UPDATED)

    @property
    def failed(self) -> list[str]:
        return self.keys_with(OutcomeKind.FAILED)
