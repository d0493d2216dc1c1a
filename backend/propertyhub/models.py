# backend/propertyhub/models.py
from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


# -----------------------------
# Enumerated domain values
# -----------------------------
class UserRole(str, enum.Enum):
    user = "user"
    agent = "agent"
    manager = "manager"
    admin = "admin"
    vendor = "vendor"
    investor = "investor"


class PropertyStatus(str, enum.Enum):
    for_sale = "for_sale"
    for_rent = "for_rent"
    sold = "sold"
    rented = "rented"
    off_market = "off_market"


class PropertyType(str, enum.Enum):
    single_family = "single_family"
    condo = "condo"
    townhouse = "townhouse"
    multi_family = "multi_family"
    commercial = "commercial"
    land = "land"


class TutorialDifficulty(str, enum.Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class SubscriptionPlan(str, enum.Enum):
    starter = "starter"
    professional = "professional"
    enterprise = "enterprise"


def _pg_enum(enum_cls: type[enum.Enum], name: str) -> Enum:
    # store .value ("for_sale"), not the member name
    return Enum(enum_cls, name=name, values_callable=lambda e: [m.value for m in e])


# -----------------------------
# Users (rows mirror the identity provider's subject)
# -----------------------------
class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    role: Mapped[UserRole] = mapped_column(_pg_enum(UserRole, "user_role"), nullable=False, default=UserRole.user)
    subscription_plan: Mapped[Optional[SubscriptionPlan]] = mapped_column(
        _pg_enum(SubscriptionPlan, "subscription_plan"), nullable=True, default=SubscriptionPlan.starter
    )
    subscription_active: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    properties: Mapped[List["Property"]] = relationship(back_populates="agent")
    analytics: Mapped[List["AnalyticsRecord"]] = relationship(back_populates="user")
    tutorial_progress: Mapped[List["TutorialProgress"]] = relationship(back_populates="user")
    chat_messages: Mapped[List["ChatMessage"]] = relationship(back_populates="user")


# -----------------------------
# Listings
# -----------------------------
class Property(Base):
    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_properties_price_nonneg"),
        CheckConstraint("bedrooms >= 0", name="ck_properties_bedrooms_nonneg"),
        CheckConstraint("bathrooms >= 0", name="ck_properties_bathrooms_nonneg"),
        Index("ix_properties_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)

    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bathrooms: Mapped[Decimal] = mapped_column(Numeric(3, 1), nullable=False, default=Decimal("0"))
    square_footage: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    property_type: Mapped[PropertyType] = mapped_column(_pg_enum(PropertyType, "property_type"), nullable=False)
    status: Mapped[PropertyStatus] = mapped_column(
        _pg_enum(PropertyStatus, "property_status"), nullable=False, default=PropertyStatus.for_sale
    )

    image_urls: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)  # ordered
    amenities: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # fixed at creation; drives owner-or-admin writes
    agent_id: Mapped[Optional[str]] = mapped_column(String(255), ForeignKey("users.id"), nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    agent: Mapped[Optional["User"]] = relationship(back_populates="properties")
    analytics: Mapped[List["AnalyticsRecord"]] = relationship(back_populates="property")


# -----------------------------
# Analytics time series (append-only)
# -----------------------------
class AnalyticsRecord(Base):
    __tablename__ = "analytics"
    __table_args__ = (Index("ix_analytics_user_metric_date", "user_id", "metric_name", "metric_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    property_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("properties.id", ondelete="SET NULL"), nullable=True, index=True
    )

    metric_name: Mapped[str] = mapped_column(String(100), nullable=False)
    metric_value: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    metric_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    metadata_json: Mapped[dict[str, Any]] = mapped_column("metadata", JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    user: Mapped["User"] = relationship(back_populates="analytics")
    property: Mapped[Optional["Property"]] = relationship(back_populates="analytics")


# -----------------------------
# Tutorials
# -----------------------------
class Tutorial(Base):
    __tablename__ = "tutorials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    difficulty: Mapped[TutorialDifficulty] = mapped_column(
        _pg_enum(TutorialDifficulty, "tutorial_difficulty"), nullable=False, default=TutorialDifficulty.beginner
    )
    duration: Mapped[int] = mapped_column("duration_minutes", Integer, nullable=False, default=0)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    progress: Mapped[List["TutorialProgress"]] = relationship(back_populates="tutorial")


class TutorialProgress(Base):
    __tablename__ = "tutorial_progress"
    __table_args__ = (UniqueConstraint("user_id", "tutorial_id", name="uq_tutorial_progress_user_tutorial"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    tutorial_id: Mapped[int] = mapped_column(Integer, ForeignKey("tutorials.id"), nullable=False, index=True)

    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    progress_percent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    user: Mapped["User"] = relationship(back_populates="tutorial_progress")
    tutorial: Mapped["Tutorial"] = relationship(back_populates="progress")


# -----------------------------
# Chat widget log (append-only)
# -----------------------------
class ChatMessage(Base):
    __tablename__ = "ai_chat_messages"
    __table_args__ = (Index("ix_ai_chat_messages_user_created", "user_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), ForeignKey("users.id"), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    context: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    user: Mapped["User"] = relationship(back_populates="chat_messages")
