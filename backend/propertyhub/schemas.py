# backend/propertyhub/schemas.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .models import PropertyStatus, PropertyType, SubscriptionPlan, TutorialDifficulty, UserRole


class CamelModel(BaseModel):
    """JSON keys are camelCase on the wire; python attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# -------------------- Users --------------------

class UserOut(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: UserRole
    subscription_plan: Optional[SubscriptionPlan] = None
    subscription_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# -------------------- Properties --------------------

class PropertyCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)

    address: str = Field(min_length=1, max_length=500)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=50)
    zip_code: str = Field(min_length=1, max_length=20)

    bedrooms: int = Field(default=0, ge=0)
    bathrooms: Decimal = Field(default=Decimal("0"), ge=0, max_digits=3, decimal_places=1)
    square_footage: Optional[int] = Field(default=None, ge=0)

    property_type: PropertyType
    status: PropertyStatus = PropertyStatus.for_sale

    image_urls: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)


_NULLABLE_PROPERTY_FIELDS = {"description", "square_footage"}


class PropertyUpdate(CamelModel):
    """
    Partial update. Only keys present in the request body are applied.
    agentId is deliberately absent: ownership never transfers.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)

    address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    state: Optional[str] = Field(default=None, min_length=1, max_length=50)
    zip_code: Optional[str] = Field(default=None, min_length=1, max_length=20)

    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[Decimal] = Field(default=None, ge=0, max_digits=3, decimal_places=1)
    square_footage: Optional[int] = Field(default=None, ge=0)

    property_type: Optional[PropertyType] = None
    status: Optional[PropertyStatus] = None

    image_urls: Optional[list[str]] = None
    amenities: Optional[list[str]] = None

    @model_validator(mode="after")
    def _no_null_for_required_columns(self) -> "PropertyUpdate":
        for name in self.model_fields_set:
            if name not in _NULLABLE_PROPERTY_FIELDS and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class PropertyOut(PropertyCreate):
    id: int
    agent_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# -------------------- Analytics --------------------

class AnalyticsCreate(CamelModel):
    property_id: Optional[int] = None
    metric_name: str = Field(min_length=1, max_length=100)
    metric_value: Decimal = Field(max_digits=15, decimal_places=2)
    metric_date: Optional[datetime] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class AnalyticsOut(CamelModel):
    id: int
    user_id: str
    property_id: Optional[int] = None
    metric_name: str
    metric_value: Decimal
    metric_date: Optional[datetime] = None
    # ORM attribute is metadata_json; Base.metadata would shadow it
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("metadata_json", "metadata"),
    )
    created_at: Optional[datetime] = None


class DashboardStatsOut(CamelModel):
    total_properties: int = 0
    total_revenue: float = 0.0
    occupancy_rate: float = 0.0
    avg_response_time: float = 0.0


# -------------------- Tutorials --------------------

class TutorialOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    difficulty: TutorialDifficulty
    duration: int = 0
    category: str
    tags: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TutorialProgressUpsert(CamelModel):
    tutorial_id: int
    progress_percent: int = 0
    completed: bool = False

    @field_validator("progress_percent")
    @classmethod
    def _clamp_percent(cls, v: int) -> int:
        return max(0, min(100, int(v)))


class TutorialProgressOut(CamelModel):
    id: int
    user_id: str
    tutorial_id: int
    completed: bool
    progress_percent: int
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TutorialProgressWithTutorialOut(TutorialProgressOut):
    tutorial: TutorialOut


# -------------------- AI chat --------------------

class ChatIn(CamelModel):
    message: str = Field(min_length=1)
    context: Optional[dict[str, Any]] = None

    @field_validator("message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message is required")
        return v


class ChatOut(CamelModel):
    response: str


class ChatMessageOut(CamelModel):
    id: int
    user_id: str
    message: str
    response: str
    context: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None


# -------------------- Errors --------------------

class FieldErrorOut(BaseModel):
    field: str
    message: str


class ErrorOut(BaseModel):
    detail: str
    errors: list[FieldErrorOut] = Field(default_factory=list)
