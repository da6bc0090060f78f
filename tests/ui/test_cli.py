from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

import pytest

from oddsync.domain.errors import FetchError
from oddsync.ui import cli
from tests.helpers.candidates import FakeCandidateStore, FakeFeedFetcher

if TYPE_CHECKING:
    from collections.abc import Iterator


def _install(
    monkeypatch: pytest.MonkeyPatch,
    store: FakeCandidateStore,
    fetcher: FakeFeedFetcher,
) -> None:
    @contextmanager
    def fake_open_candidate_store() -> Iterator[FakeCandidateStore]:
        yield store

    monkeypatch.setattr("oddsync.ui.cli.open_candidate_store", fake_open_candidate_store)
    monkeypatch.setattr("oddsync.app.FeedClient", lambda: fetcher)


def test_sync_command_stores_candidates(
    monkeypatch: pytest.MonkeyPatch,
    feed_document: str,
) -> None:
    store = FakeCandidateStore()
    _install(monkeypatch, store, FakeFeedFetcher(feed_document))

    cli.main(["sync"])

    assert [row.last_name for row in store.rows] == ["Biden", "Trump", "Harris", "Pence"]


def test_sync_command_exits_non_zero_on_abort(
    monkeypatch: pytest.MonkeyPatch,
    feed_document: str,
) -> None:
    _install(monkeypatch, FakeCandidateStore(fail_on_write=1), FakeFeedFetcher(feed_document))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync"])

    assert excinfo.value.code == 1


def test_sync_command_exits_non_zero_on_fetch_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, FakeCandidateStore(), FakeFeedFetcher(error=FetchError("down")))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync"])

    assert excinfo.value.code == 1


def test_preview_command_does_not_write(
    monkeypatch: pytest.MonkeyPatch,
    feed_document: str,
) -> None:
    store = FakeCandidateStore()
    fetcher = FakeFeedFetcher(feed_document)
    _install(monkeypatch, store, fetcher)

    cli.main(["preview"])

    assert fetcher.calls == 1
    assert store.writes == []


def test_init_db_command_opens_store(monkeypatch: pytest.MonkeyPatch) -> None:
    fetcher = FakeFeedFetcher()
    _install(monkeypatch, FakeCandidateStore(), fetcher)

    cli.main(["init-db"])

    assert fetcher.calls == 0


def test_unknown_command_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["explode"])

    assert excinfo.value.code == 2


def test_unexpected_error_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    @contextmanager
    def broken_open_candidate_store() -> Iterator[FakeCandidateStore]:
        raise RuntimeError("database unreachable")
        yield FakeCandidateStore()

    monkeypatch.setattr("oddsync.ui.cli.open_candidate_store", broken_open_candidate_store)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["init-db"])

    assert excinfo.value.code == 1
