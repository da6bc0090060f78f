"""SQLAlchemy mapping metadata for the candidate table."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    CHAR,
    Column,
    DateTime,
    Dialect,
    Float,
    Integer,
    Table,
    TypeDecorator,
    orm,
)
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import configure_mappers

from oddsync.domain.model import CandidateRecord

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

LAST_NAME_LENGTH = 45
MYSQL_BINARY_COLLATION = "utf8mb4_bin"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}

candidate_table = Table(
    "candidate",
    mapper_registry.metadata,
    Column("candidate_id", Integer, key="id", primary_key=True, autoincrement=True),
    Column("created_at", UTCDateTime, nullable=False),
    Column(
        "lastname",
        # Candidate keys match exactly; MySQL defaults to a case-insensitive collation.
        CHAR(LAST_NAME_LENGTH).with_variant(
            mysql.CHAR(LAST_NAME_LENGTH, collation=MYSQL_BINARY_COLLATION), "mysql"
        ),
        key="last_name",
        nullable=False,
        unique=True,
    ),
    Column("win_probability", Float, nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model (idempotent)."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(CandidateRecord, candidate_table)
    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create the candidate table if it does not exist yet."""

    log.info("Ensuring table %r exists", candidate_table.name)
    mapper_registry.metadata.create_all(engine, checkfirst=True)
