# backend/propertyhub/services/dashboard_stats.py
from __future__ import annotations

from dataclasses import asdict, dataclass

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from ..config import settings
from ..models import AnalyticsRecord, Property

METRIC_MONTHLY_REVENUE = "monthly_revenue"
METRIC_OCCUPANCY_RATE = "occupancy_rate"
METRIC_AVG_RESPONSE_TIME = "avg_response_time"

STRATEGY_LATEST = "latest"
STRATEGY_AGGREGATE = "aggregate"


@dataclass(frozen=True)
class DashboardStats:
    total_properties: int
    total_revenue: float
    occupancy_rate: float
    avg_response_time: float

    def to_dict(self) -> dict:
        return asdict(self)


def count_agent_properties(db: Session, *, user_id: str) -> int:
    n = db.scalar(select(func.count(Property.id)).where(Property.agent_id == user_id))
    return int(n or 0)


def latest_metric_value(db: Session, *, user_id: str, metric_name: str) -> float:
    """Most recent record by metric_date, verbatim. No rows -> 0."""
    v = db.scalar(
        select(AnalyticsRecord.metric_value)
        .where(AnalyticsRecord.user_id == user_id, AnalyticsRecord.metric_name == metric_name)
        .order_by(desc(AnalyticsRecord.metric_date), desc(AnalyticsRecord.id))
        .limit(1)
    )
    return float(v) if v is not None else 0.0


def sum_metric_value(db: Session, *, user_id: str, metric_name: str) -> float:
    v = db.scalar(
        select(func.coalesce(func.sum(AnalyticsRecord.metric_value), 0)).where(
            AnalyticsRecord.user_id == user_id, AnalyticsRecord.metric_name == metric_name
        )
    )
    return float(v or 0)


def avg_metric_value(db: Session, *, user_id: str, metric_name: str) -> float:
    v = db.scalar(
        select(func.avg(AnalyticsRecord.metric_value)).where(
            AnalyticsRecord.user_id == user_id, AnalyticsRecord.metric_name == metric_name
        )
    )
    return float(v) if v is not None else 0.0


def compute_dashboard_stats(db: Session, *, user_id: str, strategy: str | None = None) -> DashboardStats:
    """
    Dashboard cards for one user.

    strategy "latest":    each metric is its most recent value.
    strategy "aggregate": revenue is summed over the series (a period total);
                          occupancy and response time are averaged (rates).

    Unknown users and users without rows get all zeros. User existence is not
    checked here.
    """
    strategy = (strategy or settings.dashboard_metric_strategy).strip().lower()

    if strategy == STRATEGY_LATEST:
        revenue = latest_metric_value(db, user_id=user_id, metric_name=METRIC_MONTHLY_REVENUE)
        occupancy = latest_metric_value(db, user_id=user_id, metric_name=METRIC_OCCUPANCY_RATE)
        response_time = latest_metric_value(db, user_id=user_id, metric_name=METRIC_AVG_RESPONSE_TIME)
    elif strategy == STRATEGY_AGGREGATE:
        revenue = sum_metric_value(db, user_id=user_id, metric_name=METRIC_MONTHLY_REVENUE)
        occupancy = avg_metric_value(db, user_id=user_id, metric_name=METRIC_OCCUPANCY_RATE)
        response_time = avg_metric_value(db, user_id=user_id, metric_name=METRIC_AVG_RESPONSE_TIME)
    else:
        raise ValueError(f"unknown dashboard metric strategy: {strategy}")

    return DashboardStats(
        total_properties=count_agent_properties(db, user_id=user_id),
        total_revenue=revenue,
        occupancy_rate=occupancy,
        avg_response_time=response_time,
    )
