# backend/propertyhub/routers/analytics.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import Principal, ensure_user, get_principal
from ..db import get_db
from ..errors import InvalidInputError
from ..schemas import AnalyticsCreate, AnalyticsOut
from ..services.analytics import AnalyticsFilters, create_analytics, list_user_analytics, naive_utc
from ..services.ownership import must_get_property

log = logging.getLogger("propertyhub.analytics")

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=list[AnalyticsOut])
def get_analytics(
    metric_name: Optional[str] = Query(default=None, alias="metricName"),
    property_id: Optional[int] = Query(default=None, alias="propertyId"),
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
    p: Principal = Depends(get_principal),
):
    if start_date is not None and end_date is not None and naive_utc(start_date) > naive_utc(end_date):
        raise InvalidInputError(errors=[{"field": "startDate", "message": "startDate must not be after endDate"}])

    filters = AnalyticsFilters(
        metric_name=metric_name,
        property_id=property_id,
        start_date=start_date,
        end_date=end_date,
    )
    return list_user_analytics(db, user_id=p.user_id, filters=filters)


@router.post("", response_model=AnalyticsOut, status_code=201)
def post_analytics(
    payload: AnalyticsCreate,
    db: Session = Depends(get_db),
    p: Principal = Depends(get_principal),
):
    if payload.property_id is not None:
        must_get_property(db, property_id=payload.property_id)
    ensure_user(db, p)

    row = create_analytics(
        db,
        user_id=p.user_id,
        metric_name=payload.metric_name,
        metric_value=payload.metric_value,
        property_id=payload.property_id,
        metric_date=payload.metric_date,
        metadata=payload.metadata,
    )
    log.info("analytics appended", extra={"user_id": p.user_id, "metric_name": row.metric_name})
    return row
