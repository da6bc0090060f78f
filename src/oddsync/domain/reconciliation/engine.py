"""Reconcile a betting snapshot against the candidate store.

Matching happens against the store state loaded once at the start of the run.
Rows inserted earlier in the same run are not visible to later keys; since the
snapshot is keyed by candidate this only matters for concurrent writers, which
are handled by the run lock (same process) and the insert-conflict fallback
(other processes).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from oddsync.domain.errors import DuplicateCandidateError, NumericCoercionError, StorageError
from oddsync.domain.model import IngestionResult, Outcome, RunStatus

from .coercion import coerce_probability

if TYPE_CHECKING:
    from collections.abc import Iterable
    from contextlib import AbstractContextManager

    from oddsync.domain.model import BettingSnapshot, CandidateRecord
    from oddsync.domain.ports.persistence import CandidateStore

log = getLogger(__name__)

RUN_LOCK = threading.Lock()


@dataclass(slots=True)
class ReconciliationEngine:
    """Decide and execute update-or-insert for every candidate in a snapshot."""

    store: CandidateStore
    lock: AbstractContextManager[object] = field(default=RUN_LOCK)

    def reconcile(self, snapshot: BettingSnapshot) -> IngestionResult:
        with self.lock:
            return self._reconcile(snapshot)

    def _reconcile(self, snapshot: BettingSnapshot) -> IngestionResult:
        result = IngestionResult()
        try:
            existing = _index_by_last_name(self.store.list_all())
        except StorageError as exc:
            log.exception("Could not load candidates; aborting run")
            return _abort(result, exc)

        for key, raw_value in snapshot.items():
            try:
                probability = coerce_probability(key, raw_value)
            except NumericCoercionError as exc:
                log.warning("Skipping %s: %s", key, exc)
                result.outcomes.append(Outcome.failed(key, str(exc)))
                continue

            try:
                outcome = self._write(key, probability, exists=key in existing)
            except StorageError as exc:
                log.exception("Storage failure while writing %s; aborting run", key)
                return _abort(result, exc)
            result.outcomes.append(outcome)

        log.info(
            "Reconciled %s candidates: inserted=%s, updated=%s, failed=%s",
            len(result.outcomes),
            len(result.inserted),
            len(result.updated),
            len(result.failed),
        )
        return result

    def _write(self, key: str, probability: float, *, exists: bool) -> Outcome:
        if exists:
            log.debug("Updating %s -> %s", key, probability)
            self.store.update(key, probability)
            return Outcome.updated(key, probability)

        log.debug("Inserting %s -> %s", key, probability)
        try:
            self.store.insert(key, probability)
        except DuplicateCandidateError:
            log.info("%s was created by a concurrent run; updating instead", key)
            self.store.update(key, probability)
            return Outcome.updated(key, probability)
        return Outcome.inserted(key, probability)


def _index_by_last_name(records: Iterable[CandidateRecord]) -> dict[str, CandidateRecord]:
    # Exact, case-sensitive keys; first row wins when storage holds duplicates.
    index: dict[str, CandidateRecord] = {}
    for record in records:
        index.setdefault(record.last_name, record)
    return index


def _abort(result: IngestionResult, error: StorageError) -> IngestionResult:
    result.status = RunStatus.ABORTED
    result.error = error
    return result
