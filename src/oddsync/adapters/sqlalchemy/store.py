"""Candidate store backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from oddsync.domain.errors import DuplicateCandidateError, StorageError
from oddsync.domain.model import CandidateRecord

from .mappings import candidate_table, start_mappers

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session, sessionmaker

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyCandidateStore:
    """Each write runs in its own transaction, so completed writes survive an abort."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        start_mappers()
        self.session_factory = session_factory
        self._clock = clock

    def list_all(self) -> list[CandidateRecord]:
        stmt = select(CandidateRecord).order_by(candidate_table.c.id)
        try:
            with self.session_factory() as session:
                return list(session.scalars(stmt))
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not list candidates: {exc}") from exc

    def update(self, last_name: str, win_probability: float) -> None:
        stmt = (
            update(candidate_table)
            .where(candidate_table.c.last_name == last_name)
            .values(win_probability=win_probability)
        )
        try:
            with self.session_factory.begin() as session:
                matched = session.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not update candidate {last_name!r}: {exc}") from exc
        if not matched:
            log.warning("Update for %r matched no rows", last_name)

    def insert(self, last_name: str, win_probability: float) -> None:
        record = CandidateRecord(
            last_name=last_name,
            win_probability=win_probability,
            created_at=self._clock(),
        )
        try:
            with self.session_factory.begin() as session:
                session.add(record)
        except IntegrityError as exc:
            raise DuplicateCandidateError(last_name) from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not insert candidate {last_name!r}: {exc}") from exc
