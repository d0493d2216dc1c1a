# backend/propertyhub/services/analytics.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import and_, desc, select
from sqlalchemy.orm import Session

from ..models import AnalyticsRecord


def naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Columns hold naive UTC; aware inputs are converted, naive ones taken as UTC."""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class AnalyticsFilters:
    metric_name: Optional[str] = None
    property_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


def create_analytics(
    db: Session,
    *,
    user_id: str,
    metric_name: str,
    metric_value: Decimal,
    property_id: Optional[int] = None,
    metric_date: Optional[datetime] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> AnalyticsRecord:
    now = datetime.utcnow()
    row = AnalyticsRecord(
        user_id=user_id,
        property_id=property_id,
        metric_name=metric_name,
        metric_value=metric_value,
        metric_date=naive_utc(metric_date) or now,
        metadata_json=dict(metadata or {}),
        created_at=now,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_user_analytics(db: Session, *, user_id: str, filters: AnalyticsFilters) -> list[AnalyticsRecord]:
    """Caller's series, newest metric_date first. Date bounds are inclusive."""
    conds = [AnalyticsRecord.user_id == user_id]

    if filters.metric_name:
        conds.append(AnalyticsRecord.metric_name == filters.metric_name)
    if filters.property_id is not None:
        conds.append(AnalyticsRecord.property_id == filters.property_id)
    if filters.start_date is not None:
        conds.append(AnalyticsRecord.metric_date >= naive_utc(filters.start_date))
    if filters.end_date is not None:
        conds.append(AnalyticsRecord.metric_date <= naive_utc(filters.end_date))

    stmt = (
        select(AnalyticsRecord)
        .where(and_(*conds))
        .order_by(desc(AnalyticsRecord.metric_date), desc(AnalyticsRecord.id))
    )
    return list(db.scalars(stmt).all())
