"""FastAPI surface exposing the sync pipeline as HTTP routes."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from oddsync.adapters.feed import FeedClient
from oddsync.adapters.sqlalchemy import build_candidate_store, build_engine, create_schema
from oddsync.app import preview_election_odds, sync_election_odds
from oddsync.config import configure_logging
from oddsync.domain.errors import IngestionError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from oddsync.config.storage import DatabaseConfig
    from oddsync.domain.model import CandidateRecord
    from oddsync.domain.ports.fetching import FeedFetcher
    from oddsync.domain.ports.persistence import CandidateStore

log = getLogger(__name__)

SUCCESS_BODY = {"success": 200}
ERROR_BODY = {"error": 400}


def _error_response() -> JSONResponse:
    return JSONResponse(status_code=400, content=ERROR_BODY)


def _serialize_candidate(record: CandidateRecord) -> dict[str, Any]:
    return {
        "candidate_id": record.id,
        "created_at": record.created_at.isoformat() if record.created_at else None,
        "lastname": record.last_name,
        "win_probability": record.win_probability,
    }


def create_app(
    *,
    store: CandidateStore | None = None,
    fetcher: FeedFetcher | None = None,
    database: DatabaseConfig | None = None,
) -> FastAPI:
    """Create the application.

    Without an injected ``store`` the lifespan builds the database engine, ensures
    the schema and disposes the engine on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if store is not None:
            yield
            return
        configure_logging()
        engine = build_engine(database)
        try:
            create_schema(engine)
            app.state.store = build_candidate_store(engine)
            yield
        finally:
            engine.dispose()

    app = FastAPI(title="oddsync", lifespan=lifespan)
    app.state.store = store
    app.state.fetcher = fetcher or FeedClient()

    @app.get("/", response_class=PlainTextResponse)
    def index() -> str:
        return "oddsync is running"

    @app.get("/electiondata")
    def election_data(request: Request) -> JSONResponse:
        try:
            preview = preview_election_odds(
                store=request.app.state.store,
                fetcher=request.app.state.fetcher,
            )
        except IngestionError:
            log.exception("Election data preview failed")
            return _error_response()

        return JSONResponse(
            status_code=200,
            content={
                "data": preview.feed.candidates,
                "time": preview.feed.time,
                "candidates": [_serialize_candidate(row) for row in preview.candidates],
            },
        )

    @app.get("/store-election-data")
    def store_election_data(request: Request) -> JSONResponse:
        try:
            result = sync_election_odds(
                store=request.app.state.store,
                fetcher=request.app.state.fetcher,
            )
        except IngestionError:
            log.exception("Election odds sync failed")
            return _error_response()

        if not result.succeeded:
            log.error("Election odds sync aborted: %s", result.error)
            return _error_response()
        return JSONResponse(status_code=200, content=SUCCESS_BODY)

    return app
