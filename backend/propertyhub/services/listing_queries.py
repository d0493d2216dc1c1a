# backend/propertyhub/services/listing_queries.py
from __future__ import annotations

from typing import Sequence, TypeVar

from sqlalchemy import and_, desc, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from ..config import settings
from ..domain.listing_filters import (
    OP_EQ,
    OP_GTE,
    OP_ICONTAINS,
    OP_ICONTAINS_ANY,
    OP_LTE,
    Predicate,
    PropertyFilters,
    TutorialFilters,
    property_predicates,
    resolve_page,
    tutorial_predicates,
)
from ..models import Property, Tutorial

T = TypeVar("T")


def _like_pattern(term: str) -> str:
    # user input is matched literally, so LIKE wildcards are escaped
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _clause(model, p: Predicate) -> ColumnElement[bool]:
    if p.op == OP_EQ:
        return getattr(model, p.field) == p.value
    if p.op == OP_GTE:
        return getattr(model, p.field) >= p.value
    if p.op == OP_LTE:
        return getattr(model, p.field) <= p.value
    if p.op == OP_ICONTAINS:
        return getattr(model, p.field).ilike(_like_pattern(p.value), escape="\\")
    if p.op == OP_ICONTAINS_ANY:
        pattern = _like_pattern(p.value)
        return or_(*[getattr(model, f).ilike(pattern, escape="\\") for f in p.fields])
    raise ValueError(f"unknown predicate op: {p.op}")


def compile_predicates(model, preds: Sequence[Predicate]) -> list[ColumnElement[bool]]:
    return [_clause(model, p) for p in preds]


def run_listing(db: Session, model: type[T], preds: Sequence[Predicate], *, limit: int, offset: int) -> list[T]:
    """
    filter -> sort (created_at desc, id desc) -> offset -> limit.

    The id tie-break keeps pages stable when rows share a timestamp.
    """
    stmt = select(model)
    clauses = compile_predicates(model, preds)
    if clauses:
        stmt = stmt.where(and_(*clauses))

    stmt = stmt.order_by(desc(model.created_at), desc(model.id)).offset(offset).limit(limit)
    return list(db.scalars(stmt).all())


def list_properties(db: Session, filters: PropertyFilters) -> list[Property]:
    limit, offset = resolve_page(filters.limit, filters.offset, default_limit=settings.property_page_size)
    return run_listing(db, Property, property_predicates(filters), limit=limit, offset=offset)


def list_tutorials(db: Session, filters: TutorialFilters) -> list[Tutorial]:
    limit, offset = resolve_page(filters.limit, filters.offset, default_limit=settings.tutorial_page_size)
    return run_listing(db, Tutorial, tutorial_predicates(filters), limit=limit, offset=offset)


def list_properties_by_agent(db: Session, agent_id: str) -> list[Property]:
    return list(
        db.scalars(
            select(Property)
            .where(Property.agent_id == agent_id)
            .order_by(desc(Property.created_at), desc(Property.id))
        ).all()
    )
