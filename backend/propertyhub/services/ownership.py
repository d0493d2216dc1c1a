# backend/propertyhub/services/ownership.py
from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import AuthorizationError, NotFoundError
from ..models import Property, Tutorial, User, UserRole

PropertyAccessCheck = Callable[[Optional[User], Property], bool]


def must_get_property(db: Session, *, property_id: int) -> Property:
    row = db.scalar(select(Property).where(Property.id == property_id))
    if not row:
        raise NotFoundError("Property not found")
    return row


def must_get_tutorial(db: Session, *, tutorial_id: int) -> Tutorial:
    row = db.scalar(select(Tutorial).where(Tutorial.id == tutorial_id))
    if not row:
        raise NotFoundError("Tutorial not found")
    return row


def can_modify_property(caller: Optional[User], prop: Property) -> bool:
    """Owner-or-admin. An unassigned property (agent_id NULL) is admin-only."""
    if caller is None:
        return False
    if caller.role == UserRole.admin:
        return True
    return prop.agent_id is not None and prop.agent_id == caller.id


def get_property_access_check() -> PropertyAccessCheck:
    # FastAPI dependency; tests swap it via app.dependency_overrides
    return can_modify_property


def must_get_writable_property(
    db: Session,
    *,
    property_id: int,
    caller_id: str,
    check: PropertyAccessCheck,
    action: str = "modify",
) -> Property:
    """
    404 wins over 403: the property is read first, then the caller's user row
    (fresh role) is read for the capability check.
    """
    row = must_get_property(db, property_id=property_id)
    caller = db.get(User, caller_id)
    if not check(caller, row):
        raise AuthorizationError(f"Unauthorized to {action} this property")
    return row


LISTING_ROLES = (UserRole.agent, UserRole.admin)


def must_be_listing_agent(caller: Optional[User]) -> User:
    """Only agents and admins list properties."""
    if caller is None or caller.role not in LISTING_ROLES:
        raise AuthorizationError("Only agents and admins can create properties")
    return caller
