# backend/tests/test_property_listing.py
from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from conftest import headers
from propertyhub.domain.listing_filters import PropertyFilters
from propertyhub.models import Property, PropertyStatus, PropertyType
from propertyhub.services.listing_queries import list_properties
from propertyhub.services.upserts import upsert_user

_T0 = datetime(2026, 1, 1, 12, 0, 0)


def _mk_property(db, n: int, **overrides) -> Property:
    data = {
        "title": f"Listing {n}",
        "description": "Nice place",
        "price": Decimal("250000"),
        "address": f"{n} Main St",
        "city": "Austin",
        "state": "TX",
        "zip_code": "78701",
        "bedrooms": 2,
        "bathrooms": Decimal("1.5"),
        "property_type": PropertyType.single_family,
        "status": PropertyStatus.for_sale,
        "created_at": _T0 + timedelta(minutes=n),
        "updated_at": _T0 + timedelta(minutes=n),
    }
    data.update(overrides)
    row = Property(**data)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def test_price_city_bedrooms_scenario(client, db):
    match = _mk_property(db, 1, price=Decimal("300000"), city="Austin", bedrooms=3)
    _mk_property(db, 2, price=Decimal("500000"), city="Austin", bedrooms=3)
    _mk_property(db, 3, price=Decimal("300000"), city="Dallas", bedrooms=3)
    _mk_property(db, 4, price=Decimal("300000"), city="Austin", bedrooms=2)

    r = client.get("/api/properties", params={"minPrice": 100000, "maxPrice": 400000, "city": "Austin", "bedrooms": 3})
    assert r.status_code == 200
    body = r.json()
    assert [x["id"] for x in body] == [match.id]
    assert Decimal(body[0]["price"]) == Decimal("300000")
    assert body[0]["zipCode"] == "78701"


def test_bedrooms_zero_is_at_least_not_ignored(db):
    for n, beds in enumerate((0, 1, 2), start=1):
        _mk_property(db, n, bedrooms=beds)

    assert len(list_properties(db, PropertyFilters(bedrooms=0))) == 3
    assert sorted(p.bedrooms for p in list_properties(db, PropertyFilters(bedrooms=1))) == [1, 2]
    assert [p.bedrooms for p in list_properties(db, PropertyFilters(bedrooms=3))] == []


def test_search_matches_any_text_field_case_insensitively(client, db):
    a = _mk_property(db, 1, title="Garden Cottage")
    b = _mk_property(db, 2, description="quiet GARDEN views")
    c = _mk_property(db, 3, address="9 Garden Row")
    _mk_property(db, 4, title="Loft", description="city", address="1 Elm")

    r = client.get("/api/properties", params={"search": "garden"})
    assert r.status_code == 200
    assert {x["id"] for x in r.json()} == {a.id, b.id, c.id}


def test_search_wildcards_are_literal(db):
    hit = _mk_property(db, 1, title="100% financed")
    _mk_property(db, 2, title="1000 sq ft")

    assert [p.id for p in list_properties(db, PropertyFilters(search="100%"))] == [hit.id]


def test_city_substring_and_state_exact(db):
    a = _mk_property(db, 1, city="Austin", state="TX")
    _mk_property(db, 2, city="Boston", state="MA")
    _mk_property(db, 3, city="Austin", state="Texas")

    rows = list_properties(db, PropertyFilters(city="aus", state="TX"))
    assert [p.id for p in rows] == [a.id]


def test_omitting_a_filter_never_shrinks_results(db):
    _mk_property(db, 1, status=PropertyStatus.for_rent, property_type=PropertyType.condo)
    _mk_property(db, 2, status=PropertyStatus.for_sale, property_type=PropertyType.condo)
    _mk_property(db, 3, status=PropertyStatus.for_rent, property_type=PropertyType.land)

    narrow = {p.id for p in list_properties(db, PropertyFilters(status="for_rent", property_type="condo"))}
    wider = {p.id for p in list_properties(db, PropertyFilters(status="for_rent"))}
    widest = {p.id for p in list_properties(db, PropertyFilters())}
    assert narrow <= wider <= widest
    assert len(narrow) == 1 and len(wider) == 2 and len(widest) == 3


def test_agent_filter(db):
    upsert_user(db, user_id="agent-a", email="a@demo.local")
    upsert_user(db, user_id="agent-b", email="b@demo.local")
    mine = _mk_property(db, 1, agent_id="agent-a")
    _mk_property(db, 2, agent_id="agent-b")

    assert [p.id for p in list_properties(db, PropertyFilters(agent_id="agent-a"))] == [mine.id]


def test_newest_first_and_pages_concatenate(client, db):
    ids = [_mk_property(db, n).id for n in range(1, 26)]
    newest_first = list(reversed(ids))

    full = client.get("/api/properties", params={"limit": 100}).json()
    assert [x["id"] for x in full] == newest_first

    paged: list[int] = []
    for offset in (0, 10, 20):
        page = client.get("/api/properties", params={"limit": 10, "offset": offset}).json()
        paged.extend(x["id"] for x in page)
    assert paged == newest_first

    # same request, same answer
    again = client.get("/api/properties", params={"limit": 10, "offset": 10}).json()
    assert [x["id"] for x in again] == newest_first[10:20]


def test_default_page_size_is_twelve(client, db):
    for n in range(1, 16):
        _mk_property(db, n)
    assert len(client.get("/api/properties").json()) == 12


def test_tied_timestamps_break_on_id(db):
    a = _mk_property(db, 1, created_at=_T0)
    b = _mk_property(db, 2, created_at=_T0)
    assert [p.id for p in list_properties(db, PropertyFilters())] == [b.id, a.id]


def test_get_one_and_missing(client, db):
    row = _mk_property(db, 1)
    r = client.get(f"/api/properties/{row.id}")
    assert r.status_code == 200
    assert r.json()["title"] == "Listing 1"

    r = client.get("/api/properties/999999")
    assert r.status_code == 404


def test_invalid_query_values_are_400(client):
    r = client.get("/api/properties", params={"bedrooms": -1})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "bedrooms"

    r = client.get("/api/properties", params={"propertyType": "castle"})
    assert r.status_code == 400


def test_listing_is_public_but_writes_need_identity(client):
    assert client.get("/api/properties").status_code == 200
    r = client.post("/api/properties", json={"title": "x"})
    assert r.status_code == 401


def test_dashboard_properties_lists_only_callers(client):
    h = headers("agent-a")
    payload = {
        "title": "Mine",
        "price": "1000",
        "address": "1 A St",
        "city": "Austin",
        "state": "TX",
        "zipCode": "78701",
        "propertyType": "condo",
    }
    assert client.post("/api/properties", json=payload, headers=h).status_code == 201
    client.post("/api/properties", json={**payload, "title": "Other"}, headers=headers("agent-b"))

    r = client.get("/api/dashboard/properties", headers=h)
    assert r.status_code == 200
    assert [x["title"] for x in r.json()] == ["Mine"]
