from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.pool import StaticPool

from oddsync.adapters.sqlalchemy import SqlAlchemyCandidateStore, create_schema
from oddsync.adapters.sqlalchemy.database import build_session_factory
from tests.helpers.candidates import FIXED_NOW

if TYPE_CHECKING:
    from collections.abc import Iterator

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(scope="session")
def feed_document() -> str:
    return (DATA_DIR / "betting_data.xml").read_text(encoding="utf-8")


def _memory_engine() -> Engine:
    return create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = _memory_engine()
    create_schema(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def bare_sqlite_engine() -> Iterator[Engine]:
    """Engine without the candidate table, for storage failure paths."""

    engine = _memory_engine()
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def candidate_store(sqlite_engine: Engine) -> SqlAlchemyCandidateStore:
    return SqlAlchemyCandidateStore(build_session_factory(sqlite_engine), clock=lambda: FIXED_NOW)
