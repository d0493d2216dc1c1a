# backend/tests/test_error_handling.py
from __future__ import annotations

import logging

from sqlalchemy.exc import OperationalError

from conftest import headers


def _store_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def _store_error_records(caplog) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "propertyhub.errors" and r.levelno >= logging.ERROR]


def test_stats_store_failure_is_500_not_zeros(client, monkeypatch, caplog):
    monkeypatch.setattr("propertyhub.routers.dashboard.compute_dashboard_stats", _store_down)

    with caplog.at_level(logging.ERROR, logger="propertyhub.errors"):
        r = client.get("/api/dashboard/stats", headers=headers("agent-a"))

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal storage error"}
    recs = _store_error_records(caplog)
    assert recs
    assert recs[-1].exc_info is not None
    assert "/api/dashboard/stats" in recs[-1].getMessage()


def test_listing_store_failure_is_500_not_empty(client, monkeypatch, caplog):
    monkeypatch.setattr("propertyhub.routers.properties.list_properties", _store_down)

    with caplog.at_level(logging.ERROR, logger="propertyhub.errors"):
        r = client.get("/api/properties", params={"city": "Austin"})

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal storage error"}
    assert _store_error_records(caplog)


def test_inverted_date_range_is_a_field_error(client):
    r = client.get(
        "/api/analytics",
        params={"startDate": "2026-03-01T00:00:00", "endDate": "2026-01-01T00:00:00"},
        headers=headers("agent-a"),
    )
    assert r.status_code == 400
    assert r.json() == {
        "detail": "Invalid request data",
        "errors": [{"field": "startDate", "message": "startDate must not be after endDate"}],
    }


def test_not_found_body_is_detail_only(client):
    r = client.get("/api/properties/31337")
    assert r.status_code == 404
    assert r.json() == {"detail": "Property not found"}


def test_error_bodies_are_documented(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorOut" in schema["components"]["schemas"]

    responses = schema["paths"]["/api/properties/{property_id}"]["put"]["responses"]
    for code in ("400", "401", "403", "404", "500"):
        assert responses[code]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorOut")
