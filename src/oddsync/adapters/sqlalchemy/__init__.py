"""SQLAlchemy adapter package for oddsync."""

from __future__ import annotations

from .database import build_candidate_store, build_engine, build_session_factory, create_schema
from .mappings import candidate_table, create_all_tables, mapper_registry, start_mappers
from .store import SqlAlchemyCandidateStore

__all__ = [
    "SqlAlchemyCandidateStore",
    "build_candidate_store",
    "build_engine",
    "build_session_factory",
    "candidate_table",
    "create_all_tables",
    "create_schema",
    "mapper_registry",
    "start_mappers",
]
