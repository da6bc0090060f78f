from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from oddsync.domain.errors import FetchError
from oddsync.domain.model import CandidateRecord
from oddsync.ui.http import create_app
from tests.helpers.candidates import FakeCandidateStore, FakeFeedFetcher


def _client(store: FakeCandidateStore, fetcher: FakeFeedFetcher) -> TestClient:
    return TestClient(create_app(store=store, fetcher=fetcher))


def test_index_responds() -> None:
    client = _client(FakeCandidateStore(), FakeFeedFetcher())

    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.text


def test_store_election_data_returns_success(feed_document: str) -> None:
    store = FakeCandidateStore()
    client = _client(store, FakeFeedFetcher(feed_document))

    response = client.get("/store-election-data")

    assert response.status_code == 200
    assert response.json() == {"success": 200}
    assert [row.last_name for row in store.rows] == ["Biden", "Trump", "Harris", "Pence"]


def test_store_election_data_succeeds_with_per_key_failures() -> None:
    store = FakeCandidateStore()
    fetcher = FakeFeedFetcher("<BettingData><Smith>1</Smith><Jones>n/a</Jones></BettingData>")

    response = _client(store, fetcher).get("/store-election-data")

    assert response.status_code == 200
    assert [row.last_name for row in store.rows] == ["Smith"]


@pytest.mark.parametrize(
    "fetcher",
    [
        FakeFeedFetcher(error=FetchError("down")),
        FakeFeedFetcher("not xml at all"),
        FakeFeedFetcher("<Odds/>"),
    ],
)
def test_store_election_data_maps_pipeline_errors_to_400(fetcher: FakeFeedFetcher) -> None:
    response = _client(FakeCandidateStore(), fetcher).get("/store-election-data")

    assert response.status_code == 400
    assert response.json() == {"error": 400}


def test_store_election_data_maps_aborted_run_to_400(feed_document: str) -> None:
    store = FakeCandidateStore(fail_on_write=2)

    response = _client(store, FakeFeedFetcher(feed_document)).get("/store-election-data")

    assert response.status_code == 400
    assert response.json() == {"error": 400}
    assert [row.last_name for row in store.rows] == ["Biden"]


def test_election_data_previews_feed_and_rows(feed_document: str) -> None:
    store = FakeCandidateStore([CandidateRecord(last_name="Trump", win_probability=40.0)])

    response = _client(store, FakeFeedFetcher(feed_document)).get("/electiondata")

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"Biden": "62.5", "Trump": "35.8", "Harris": "0.9", "Pence": "0.6"}
    assert body["time"] == "Oct 16, 2020 12:00PM EST"
    assert body["candidates"][0]["lastname"] == "Trump"
    assert body["candidates"][0]["win_probability"] == 40.0
    assert store.writes == []


def test_election_data_maps_errors_to_400() -> None:
    fetcher = FakeFeedFetcher(error=FetchError("down"))

    response = _client(FakeCandidateStore(), fetcher).get("/electiondata")

    assert response.status_code == 400
    assert response.json() == {"error": 400}
