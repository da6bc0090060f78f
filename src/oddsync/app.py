"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from oddsync.adapters.feed import FeedClient, OddsParser
from oddsync.adapters.sqlalchemy import build_candidate_store, build_engine, create_schema
from oddsync.domain.reconciliation import RUN_LOCK, ReconciliationEngine

if TYPE_CHECKING:
    from collections.abc import Iterator
    from contextlib import AbstractContextManager

    from oddsync.adapters.feed import ParsedFeed
    from oddsync.config.storage import DatabaseConfig
    from oddsync.domain.model import CandidateRecord, IngestionResult
    from oddsync.domain.ports.fetching import FeedFetcher, SnapshotParser
    from oddsync.domain.ports.persistence import CandidateStore


log = getLogger(__name__)


@dataclass(slots=True)
class ElectionOddsPreview:
    """Parsed feed next to the current table contents, without writing anything."""

    feed: ParsedFeed
    candidates: list[CandidateRecord]


def sync_election_odds(
    *,
    store: CandidateStore,
    fetcher: FeedFetcher | None = None,
    parser: SnapshotParser | None = None,
    lock: AbstractContextManager[object] | None = None,
) -> IngestionResult:
    """Fetch the odds feed and reconcile it into the candidate store.

    Fetch, parse and schema errors propagate before the store is touched. Storage
    failures come back as an aborted result carrying the outcomes recorded so far.
    """

    effective_fetcher = fetcher or FeedClient()
    effective_parser = parser or OddsParser()

    log.info("Starting election odds sync")
    raw = effective_fetcher.fetch()
    snapshot = effective_parser.parse(raw)
    log.info("Feed contains %s candidates", len(snapshot))

    engine = ReconciliationEngine(store=store, lock=lock or RUN_LOCK)
    result = engine.reconcile(snapshot)

    log.info(
        "Finished election odds sync: status=%s, inserted=%s, updated=%s, failed=%s",
        result.status,
        len(result.inserted),
        len(result.updated),
        len(result.failed),
    )
    return result


def preview_election_odds(
    *,
    store: CandidateStore,
    fetcher: FeedFetcher | None = None,
    parser: OddsParser | None = None,
) -> ElectionOddsPreview:
    """Fetch and parse the feed and list the stored candidates."""

    effective_fetcher = fetcher or FeedClient()
    effective_parser = parser or OddsParser()

    feed = effective_parser.parse_feed(effective_fetcher.fetch())
    return ElectionOddsPreview(feed=feed, candidates=list(store.list_all()))


@contextmanager
def open_candidate_store(config: DatabaseConfig | None = None) -> Iterator[CandidateStore]:
    """Build the engine, ensure the schema and yield a store; dispose on exit."""

    engine = build_engine(config)
    try:
        create_schema(engine)
        yield build_candidate_store(engine)
    finally:
        engine.dispose()
