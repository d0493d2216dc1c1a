# backend/tests/test_listing_predicates.py
from __future__ import annotations

from decimal import Decimal

from propertyhub.domain.listing_filters import (
    OP_EQ,
    OP_GTE,
    OP_ICONTAINS,
    OP_ICONTAINS_ANY,
    OP_LTE,
    PropertyFilters,
    TutorialFilters,
    property_predicates,
    resolve_page,
    tutorial_predicates,
)
from propertyhub.models import PropertyType, TutorialDifficulty


def test_empty_filters_build_no_predicates():
    assert property_predicates(PropertyFilters()) == ()
    assert tutorial_predicates(TutorialFilters()) == ()


def test_zero_valued_bounds_still_filter():
    preds = property_predicates(PropertyFilters(bedrooms=0, min_price=Decimal("0")))
    ops = {(p.op, p.field, p.value) for p in preds}
    assert (OP_GTE, "bedrooms", 0) in ops
    assert (OP_GTE, "price", Decimal("0")) in ops


def test_price_range_and_bedrooms_are_bounds():
    preds = property_predicates(
        PropertyFilters(min_price=Decimal("100000"), max_price=Decimal("400000"), bedrooms=3)
    )
    by_field = {(p.field, p.op): p.value for p in preds}
    assert by_field[("price", OP_GTE)] == Decimal("100000")
    assert by_field[("price", OP_LTE)] == Decimal("400000")
    assert by_field[("bedrooms", OP_GTE)] == 3


def test_search_spans_title_description_address():
    (pred,) = property_predicates(PropertyFilters(search="garden"))
    assert pred.op == OP_ICONTAINS_ANY
    assert pred.fields == ("title", "description", "address")
    assert pred.value == "garden"


def test_blank_strings_are_absent():
    assert property_predicates(PropertyFilters(search="  ", city="", state=" ", agent_id="")) == ()
    assert tutorial_predicates(TutorialFilters(category="")) == ()


def test_city_is_substring_state_is_exact_enums_use_values():
    preds = property_predicates(PropertyFilters(city="aus", state="TX", property_type=PropertyType.condo))
    got = {p.field: (p.op, p.value) for p in preds}
    assert got["city"] == (OP_ICONTAINS, "aus")
    assert got["state"] == (OP_EQ, "TX")
    assert got["property_type"] == (OP_EQ, "condo")


def test_tutorial_predicates():
    preds = tutorial_predicates(TutorialFilters(difficulty=TutorialDifficulty.advanced, category="investing"))
    assert {(p.field, p.value) for p in preds} == {("difficulty", "advanced"), ("category", "investing")}


def test_resolve_page_defaults():
    assert resolve_page(None, None, default_limit=12) == (12, 0)
    assert resolve_page(5, -3, default_limit=12) == (5, 0)
    assert resolve_page(50, 100, default_limit=20) == (50, 100)
