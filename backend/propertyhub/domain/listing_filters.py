# backend/propertyhub/domain/listing_filters.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

# Predicate ops understood by services.listing_queries.compile_predicates
OP_EQ = "eq"
OP_GTE = "gte"
OP_LTE = "lte"
OP_ICONTAINS = "icontains"
OP_ICONTAINS_ANY = "icontains_any"  # OR across several columns

PROPERTY_SEARCH_FIELDS = ("title", "description", "address")


@dataclass(frozen=True)
class Predicate:
    """
    One filter term against a column (or, for icontains_any, a group of columns).

    Built up front as a plain tuple, then compiled into a single conjunction.
    """

    op: str
    fields: tuple[str, ...]
    value: Any

    @property
    def field(self) -> str:
        return self.fields[0]


@dataclass(frozen=True)
class PropertyFilters:
    search: Optional[str] = None
    property_type: Optional[str] = None
    status: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[Decimal] = None
    city: Optional[str] = None
    state: Optional[str] = None
    agent_id: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


@dataclass(frozen=True)
class TutorialFilters:
    difficulty: Optional[str] = None
    category: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


def _text(v: Optional[str]) -> Optional[str]:
    """Blank strings count as absent; anything else is kept verbatim."""
    if v is None:
        return None
    s = str(v)
    return s if s.strip() else None


def _enum_value(v: Any) -> Any:
    return getattr(v, "value", v)


def property_predicates(f: PropertyFilters) -> tuple[Predicate, ...]:
    """
    Absent fields add nothing. Numeric bounds are tested with `is not None`
    so that bedrooms=0 or minPrice=0 still produce a predicate.
    """
    preds: list[Predicate] = []

    search = _text(f.search)
    if search is not None:
        preds.append(Predicate(OP_ICONTAINS_ANY, PROPERTY_SEARCH_FIELDS, search))

    if f.property_type is not None:
        preds.append(Predicate(OP_EQ, ("property_type",), _enum_value(f.property_type)))
    if f.status is not None:
        preds.append(Predicate(OP_EQ, ("status",), _enum_value(f.status)))

    if f.min_price is not None:
        preds.append(Predicate(OP_GTE, ("price",), f.min_price))
    if f.max_price is not None:
        preds.append(Predicate(OP_LTE, ("price",), f.max_price))

    # at-least semantics, not exact match
    if f.bedrooms is not None:
        preds.append(Predicate(OP_GTE, ("bedrooms",), f.bedrooms))
    if f.bathrooms is not None:
        preds.append(Predicate(OP_GTE, ("bathrooms",), f.bathrooms))

    city = _text(f.city)
    if city is not None:
        preds.append(Predicate(OP_ICONTAINS, ("city",), city))

    state = _text(f.state)
    if state is not None:
        preds.append(Predicate(OP_EQ, ("state",), state))

    agent_id = _text(f.agent_id)
    if agent_id is not None:
        preds.append(Predicate(OP_EQ, ("agent_id",), agent_id))

    return tuple(preds)


def tutorial_predicates(f: TutorialFilters) -> tuple[Predicate, ...]:
    preds: list[Predicate] = []
    if f.difficulty is not None:
        preds.append(Predicate(OP_EQ, ("difficulty",), _enum_value(f.difficulty)))

    category = _text(f.category)
    if category is not None:
        preds.append(Predicate(OP_EQ, ("category",), category))
    return tuple(preds)


def resolve_page(limit: Optional[int], offset: Optional[int], *, default_limit: int) -> tuple[int, int]:
    """Missing limit -> per-collection default; missing/negative offset -> 0."""
    lim = default_limit if limit is None else int(limit)
    off = 0 if offset is None else max(0, int(offset))
    return lim, off
