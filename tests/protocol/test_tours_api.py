from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from knights_tour.engine.square import str_to_square
from knights_tour.engine.tour import validate_tour
from knights_tour.protocol.http.app import create_app
from knights_tour.search.service import SearchResult, SearchService


def _client() -> TestClient:
    return TestClient(create_app())


def test_healthz_ok() -> None:
    r = _client().get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert "x-request-id" in r.headers


def test_request_id_is_echoed() -> None:
    r = _client().get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


def test_create_and_fetch_tour() -> None:
    client = _client()
    r = client.post("/api/tours", json={"start": "a1"})
    assert r.status_code == 200
    body = r.json()
    assert body["tour_id"]
    assert body["start"] == "a1"
    assert body["success"] is True
    assert body["nodes"] >= 64
    assert len(body["path"]) == 64
    assert body["path"][0] == "a1"
    validate_tour([str_to_square(s) for s in body["path"]], start=0)

    r2 = client.get(f"/api/tours/{body['tour_id']}")
    assert r2.status_code == 200
    assert r2.json() == body


def test_unknown_tour_404() -> None:
    r = _client().get("/api/tours/does-not-exist")
    assert r.status_code == 404
    err = r.json()["error"]
    assert err["code"] == "not_found"
    assert err["type"] == "client_error"
    assert err["request_id"]


def test_delete_tour() -> None:
    client = _client()
    tour_id = client.post("/api/tours", json={"start": "h8"}).json()["tour_id"]
    assert client.delete(f"/api/tours/{tour_id}").status_code == 204
    assert client.get(f"/api/tours/{tour_id}").status_code == 404
    assert client.delete(f"/api/tours/{tour_id}").status_code == 404


def test_invalid_start_is_422() -> None:
    r = _client().post("/api/tours", json={"start": "z9"})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any(fe["field"].endswith("start") for fe in err["field_errors"])


def test_missing_start_is_422() -> None:
    r = _client().post("/api/tours", json={})
    assert r.status_code == 422


def test_square_targets() -> None:
    r = _client().get("/api/squares/a1/targets")
    assert r.status_code == 200
    assert r.json() == {"square": "a1", "targets": ["c2", "b3"], "degree": 2}

    r2 = _client().get("/api/squares/d4/targets")
    assert r2.json()["degree"] == 8


def test_square_targets_bad_square_400() -> None:
    r = _client().get("/api/squares/k9/targets")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "bad_request"


def test_failed_search_hides_partial_path(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_tour(self: SearchService, start_sq: int) -> SearchResult:
        return SearchResult(start=start_sq, success=False, path=[start_sq, 10], nodes=2, time_ms=0)

    monkeypatch.setattr(SearchService, "search", no_tour)
    client = _client()
    r = client.post("/api/tours", json={"start": "a1"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is False
    assert body["path"] == []
    assert body["nodes"] == 2

    stored = client.get(f"/api/tours/{body['tour_id']}").json()
    assert stored["path"] == []
