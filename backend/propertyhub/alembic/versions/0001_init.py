"""init schema

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


USER_ROLE = sa.Enum("user", "agent", "manager", "admin", "vendor", "investor", name="user_role")
SUBSCRIPTION_PLAN = sa.Enum("starter", "professional", "enterprise", name="subscription_plan")
PROPERTY_TYPE = sa.Enum(
    "single_family", "condo", "townhouse", "multi_family", "commercial", "land", name="property_type"
)
PROPERTY_STATUS = sa.Enum("for_sale", "for_rent", "sold", "rented", "off_market", name="property_status")
TUTORIAL_DIFFICULTY = sa.Enum("beginner", "intermediate", "advanced", name="tutorial_difficulty")


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=255), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=True, unique=True),
        sa.Column("first_name", sa.String(length=120), nullable=True),
        sa.Column("last_name", sa.String(length=120), nullable=True),
        sa.Column("profile_image_url", sa.String(length=500), nullable=True),
        sa.Column("role", USER_ROLE, nullable=False, server_default="user"),
        sa.Column("subscription_plan", SUBSCRIPTION_PLAN, nullable=True, server_default="starter"),
        sa.Column("subscription_active", sa.Boolean(), nullable=True, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=False),
        sa.Column("state", sa.String(length=50), nullable=False),
        sa.Column("zip_code", sa.String(length=20), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("bathrooms", sa.Numeric(3, 1), nullable=False, server_default="0"),
        sa.Column("square_footage", sa.Integer(), nullable=True),
        sa.Column("property_type", PROPERTY_TYPE, nullable=False),
        sa.Column("status", PROPERTY_STATUS, nullable=False, server_default="for_sale"),
        sa.Column("image_urls", sa.JSON(), nullable=False),
        sa.Column("amenities", sa.JSON(), nullable=False),
        sa.Column("agent_id", sa.String(length=255), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("price >= 0", name="ck_properties_price_nonneg"),
        sa.CheckConstraint("bedrooms >= 0", name="ck_properties_bedrooms_nonneg"),
        sa.CheckConstraint("bathrooms >= 0", name="ck_properties_bathrooms_nonneg"),
    )
    op.create_index("ix_properties_agent_id", "properties", ["agent_id"])
    op.create_index("ix_properties_created_at", "properties", ["created_at"])

    op.create_table(
        "analytics",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=255), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.id", ondelete="SET NULL"), nullable=True),
        sa.Column("metric_name", sa.String(length=100), nullable=False),
        sa.Column("metric_value", sa.Numeric(15, 2), nullable=False),
        sa.Column("metric_date", sa.DateTime(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_analytics_user_id", "analytics", ["user_id"])
    op.create_index("ix_analytics_property_id", "analytics", ["property_id"])
    op.create_index("ix_analytics_user_metric_date", "analytics", ["user_id", "metric_name", "metric_date"])

    op.create_table(
        "tutorials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("video_url", sa.String(length=500), nullable=True),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("difficulty", TUTORIAL_DIFFICULTY, nullable=False, server_default="beginner"),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_tutorials_category", "tutorials", ["category"])

    op.create_table(
        "tutorial_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=255), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("tutorial_id", sa.Integer(), sa.ForeignKey("tutorials.id"), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("progress_percent", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "tutorial_id", name="uq_tutorial_progress_user_tutorial"),
    )
    op.create_index("ix_tutorial_progress_user_id", "tutorial_progress", ["user_id"])
    op.create_index("ix_tutorial_progress_tutorial_id", "tutorial_progress", ["tutorial_id"])

    op.create_table(
        "ai_chat_messages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=255), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("response", sa.Text(), nullable=False),
        sa.Column("context", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_ai_chat_messages_user_created", "ai_chat_messages", ["user_id", "created_at"])


def downgrade():
    op.drop_table("ai_chat_messages")
    op.drop_table("tutorial_progress")
    op.drop_table("tutorials")
    op.drop_table("analytics")
    op.drop_table("properties")
    op.drop_table("users")
    bind = op.get_bind()
    for enum in (TUTORIAL_DIFFICULTY, PROPERTY_STATUS, PROPERTY_TYPE, SUBSCRIPTION_PLAN, USER_ROLE):
        enum.drop(bind, checkfirst=True)
