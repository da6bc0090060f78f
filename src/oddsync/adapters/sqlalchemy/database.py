"""Engine construction and schema bootstrap.

The engine is an explicitly owned resource: callers build it once, hand it to
the store and dispose it when done.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from oddsync.config.storage import DatabaseConfig, get_database_config
from oddsync.domain.errors import StorageError

from .mappings import create_all_tables, start_mappers
from .store import SqlAlchemyCandidateStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = getLogger(__name__)


def build_engine(config: DatabaseConfig | None = None) -> Engine:
    """Create an engine (and its connection pool) from configuration."""

    resolved = config or get_database_config()
    engine = create_engine(resolved.uri, future=True, **resolved.engine_options)
    log.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_schema(engine: Engine) -> None:
    """Ensure the candidate table exists."""

    start_mappers()
    try:
        create_all_tables(engine)
    except SQLAlchemyError as exc:
        raise StorageError(f"Could not create schema: {exc}") from exc


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def build_candidate_store(engine: Engine) -> SqlAlchemyCandidateStore:
    return SqlAlchemyCandidateStore(build_session_factory(engine))
