# backend/propertyhub/routers/properties.py
from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import Principal, ensure_user, get_principal
from ..config import settings
from ..db import get_db
from ..domain.listing_filters import PropertyFilters
from ..models import Property, PropertyStatus, PropertyType
from ..schemas import PropertyCreate, PropertyOut, PropertyUpdate
from ..services.listing_queries import list_properties
from ..services.ownership import (
    PropertyAccessCheck,
    get_property_access_check,
    must_be_listing_agent,
    must_get_property,
    must_get_writable_property,
)

log = logging.getLogger("propertyhub.properties")

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=list[PropertyOut])
def get_properties(
    search: Optional[str] = Query(default=None),
    property_type: Optional[PropertyType] = Query(default=None, alias="propertyType"),
    status: Optional[PropertyStatus] = Query(default=None),
    min_price: Optional[Decimal] = Query(default=None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(default=None, alias="maxPrice", ge=0),
    bedrooms: Optional[int] = Query(default=None, ge=0),
    bathrooms: Optional[Decimal] = Query(default=None, ge=0),
    city: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    agent_id: Optional[str] = Query(default=None, alias="agentId"),
    limit: Optional[int] = Query(default=None, ge=1, le=settings.max_page_size),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Public listing search. Every present filter narrows the result (AND);
    results are newest first. A short page means there is nothing after it.
    """
    filters = PropertyFilters(
        search=search,
        property_type=property_type,
        status=status,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        city=city,
        state=state,
        agent_id=agent_id,
        limit=limit,
        offset=offset,
    )
    return list_properties(db, filters)


@router.get("/{property_id}", response_model=PropertyOut)
def get_property(property_id: int, db: Session = Depends(get_db)):
    return must_get_property(db, property_id=property_id)


@router.post("", response_model=PropertyOut, status_code=201)
def create_property(
    payload: PropertyCreate,
    db: Session = Depends(get_db),
    p: Principal = Depends(get_principal),
):
    must_be_listing_agent(ensure_user(db, p))

    now = datetime.utcnow()
    row = Property(**payload.model_dump(), created_at=now, updated_at=now)
    row.agent_id = p.user_id
    db.add(row)
    db.commit()
    db.refresh(row)

    log.info("property created", extra={"user_id": p.user_id, "property_id": row.id})
    return row


@router.put("/{property_id}", response_model=PropertyOut)
def update_property(
    property_id: int,
    payload: PropertyUpdate,
    db: Session = Depends(get_db),
    p: Principal = Depends(get_principal),
    check: PropertyAccessCheck = Depends(get_property_access_check),
):
    ensure_user(db, p)
    row = must_get_writable_property(db, property_id=property_id, caller_id=p.user_id, check=check, action="update")

    for k, v in payload.changes().items():
        setattr(row, k, v)
    row.updated_at = datetime.utcnow()

    db.add(row)
    db.commit()
    db.refresh(row)

    log.info("property updated", extra={"user_id": p.user_id, "property_id": row.id})
    return row


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    db: Session = Depends(get_db),
    p: Principal = Depends(get_principal),
    check: PropertyAccessCheck = Depends(get_property_access_check),
):
    ensure_user(db, p)
    row = must_get_writable_property(db, property_id=property_id, caller_id=p.user_id, check=check, action="delete")

    db.delete(row)
    db.commit()

    log.info("property deleted", extra={"user_id": p.user_id, "property_id": property_id})
    return {"message": "Property deleted successfully"}
