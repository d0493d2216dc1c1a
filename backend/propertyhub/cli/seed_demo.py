# backend/propertyhub/cli/seed_demo.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from propertyhub.db import session_scope
from propertyhub.models import (
    AnalyticsRecord,
    Property,
    PropertyStatus,
    PropertyType,
    Tutorial,
    TutorialDifficulty,
    UserRole,
)
from propertyhub.services.upserts import upsert_user


@dataclass(frozen=True)
class SeedResult:
    user_id: str
    properties_created: int
    analytics_created: int
    tutorials_created: int


SAMPLE_PROPERTIES = [
    {
        "title": "Modern Downtown Condo",
        "description": "Bright corner unit with skyline views and a rooftop deck.",
        "price": Decimal("425000"),
        "address": "500 Congress Ave #1204",
        "city": "Austin",
        "state": "TX",
        "zip_code": "78701",
        "bedrooms": 2,
        "bathrooms": Decimal("2"),
        "square_footage": 1150,
        "property_type": PropertyType.condo,
        "status": PropertyStatus.for_sale,
        "amenities": ["gym", "rooftop", "parking"],
    },
    {
        "title": "Family Home Near Parks",
        "description": "Updated kitchen, fenced yard, walking distance to schools.",
        "price": Decimal("315000"),
        "address": "1812 Maple Ridge Dr",
        "city": "Round Rock",
        "state": "TX",
        "zip_code": "78664",
        "bedrooms": 4,
        "bathrooms": Decimal("2.5"),
        "square_footage": 2300,
        "property_type": PropertyType.single_family,
        "status": PropertyStatus.for_sale,
        "amenities": ["yard", "garage"],
    },
    {
        "title": "Garden Townhouse",
        "description": "Two-story townhouse with private patio.",
        "price": Decimal("2100"),
        "address": "77 Willow Ct",
        "city": "Austin",
        "state": "TX",
        "zip_code": "78745",
        "bedrooms": 3,
        "bathrooms": Decimal("1.5"),
        "square_footage": 1480,
        "property_type": PropertyType.townhouse,
        "status": PropertyStatus.for_rent,
        "amenities": ["patio", "washer_dryer"],
    },
]

SAMPLE_TUTORIALS = [
    ("Getting Started with Listings", TutorialDifficulty.beginner, "listings", 12, ["basics"]),
    ("Pricing a Property with Comparables", TutorialDifficulty.intermediate, "market_analysis", 25, ["pricing", "comps"]),
    ("Improving Occupancy Rates", TutorialDifficulty.intermediate, "property_management", 18, ["occupancy"]),
    ("Portfolio Cash Flow Modeling", TutorialDifficulty.advanced, "investing", 40, ["roi", "cash_flow"]),
]


def _seed_properties(db: Session, agent_id: str) -> int:
    existing = {t for t in db.scalars(select(Property.title).where(Property.agent_id == agent_id)).all()}
    n = 0
    for data in SAMPLE_PROPERTIES:
        if data["title"] in existing:
            continue
        db.add(Property(**data, agent_id=agent_id))
        n += 1
    db.commit()
    return n


def _seed_analytics(db: Session, user_id: str, months: int) -> int:
    if db.scalar(select(AnalyticsRecord.id).where(AnalyticsRecord.user_id == user_id).limit(1)):
        return 0

    now = datetime.utcnow()
    n = 0
    for i in range(months):
        at = now - timedelta(days=30 * (months - 1 - i))
        for name, value in (
            ("monthly_revenue", Decimal(18000 + 750 * i)),
            ("occupancy_rate", Decimal("91.5") + Decimal(i) / 2),
            ("avg_response_time", Decimal("2.4") - Decimal(i) / 10),
        ):
            db.add(AnalyticsRecord(user_id=user_id, metric_name=name, metric_value=value, metric_date=at))
            n += 1
    db.commit()
    return n


def _seed_tutorials(db: Session) -> int:
    existing = {t for t in db.scalars(select(Tutorial.title)).all()}
    n = 0
    for title, difficulty, category, minutes, tags in SAMPLE_TUTORIALS:
        if title in existing:
            continue
        db.add(Tutorial(title=title, difficulty=difficulty, category=category, duration=minutes, tags=tags))
        n += 1
    db.commit()
    return n


def seed_demo(
    *,
    user_id: str,
    user_email: str,
    role: str = "agent",
    months: int = 6,
    create_sample_properties: bool = True,
) -> SeedResult:
    """Idempotent: rerunning only fills in what is missing."""
    with session_scope() as db:
        user = upsert_user(db, user_id=user_id, email=user_email, role=UserRole(role))
        props = _seed_properties(db, str(user.id)) if create_sample_properties else 0
        metrics = _seed_analytics(db, str(user.id), months)
        tutorials = _seed_tutorials(db)
        return SeedResult(
            user_id=str(user.id),
            properties_created=props,
            analytics_created=metrics,
            tutorials_created=tutorials,
        )
