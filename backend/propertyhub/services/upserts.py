# backend/propertyhub/services/upserts.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import TutorialProgress, User, UserRole

log = logging.getLogger("propertyhub.upserts")

USER_MUTABLE_FIELDS = ("email", "first_name", "last_name", "profile_image_url")
PROGRESS_MUTABLE_FIELDS = ("progress_percent", "completed", "completed_at")


def _now() -> datetime:
    return datetime.utcnow()


def _dialect_insert(db: Session, model):
    name = db.get_bind().dialect.name
    if name == "postgresql":
        return postgresql.insert(model)
    if name == "sqlite":
        return sqlite.insert(model)
    return None


def _upsert(
    db: Session,
    model,
    *,
    conflict_cols: Sequence[str],
    values: dict[str, Any],
    update_fields: Sequence[str],
    keep_on_null: Sequence[str] = (),
) -> None:
    """
    INSERT ... ON CONFLICT (conflict_cols) DO UPDATE in one statement.

    Fields named in keep_on_null are only overwritten by non-null values.

    Dialects without that primitive fall back to a locked read + write inside
    the current transaction, retried once if a concurrent insert wins the
    unique constraint.
    """
    ins = _dialect_insert(db, model)
    if ins is not None:
        stmt = ins.values(**values)
        cols = model.__table__.c
        set_ = {
            k: func.coalesce(getattr(stmt.excluded, k), cols[k]) if k in keep_on_null else getattr(stmt.excluded, k)
            for k in update_fields
        }
        stmt = stmt.on_conflict_do_update(index_elements=list(conflict_cols), set_=set_)
        db.execute(stmt)
        return

    key = {c: values[c] for c in conflict_cols}
    for attempt in (1, 2):
        row = db.scalar(select(model).filter_by(**key).with_for_update())
        if row is not None:
            for k in update_fields:
                if k in keep_on_null and values[k] is None:
                    continue
                setattr(row, k, values[k])
            db.flush()
            return
        try:
            with db.begin_nested():
                db.add(model(**values))
            return
        except IntegrityError:
            if attempt == 2:
                raise
            log.info("upsert race on %s %s, retrying as update", model.__tablename__, key)


def _reload(db: Session, model, **key):
    # core statements bypass the identity map; refresh any cached instance
    return db.scalar(select(model).filter_by(**key).execution_options(populate_existing=True))


def email_held_by_other(db: Session, *, user_id: str, email: Optional[str]) -> bool:
    if not email:
        return False
    holder = db.scalar(select(User.id).where(User.email == email, User.id != user_id).limit(1))
    return holder is not None


def upsert_user(
    db: Session,
    *,
    user_id: str,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    profile_image_url: Optional[str] = None,
    role: UserRole = UserRole.user,
    commit: bool = True,
) -> User:
    """
    Insert the identity-provider subject, or refresh its profile fields.

    Only supplied (non-null) profile fields overwrite an existing row, so a
    caller that knows just the id never blanks a stored profile. role and
    subscription fields are only written on insert. An email already held by
    another user is not applied.
    """
    if email_held_by_other(db, user_id=user_id, email=email):
        log.warning("email already registered to another user, not applied", extra={"user_id": user_id})
        email = None

    now = _now()
    values: dict[str, Any] = {
        "id": user_id,
        "email": email,
        "first_name": first_name,
        "last_name": last_name,
        "profile_image_url": profile_image_url,
        "role": role,
        "created_at": now,
        "updated_at": now,
    }
    _upsert(
        db,
        User,
        conflict_cols=("id",),
        values=values,
        update_fields=USER_MUTABLE_FIELDS + ("updated_at",),
        keep_on_null=USER_MUTABLE_FIELDS,
    )
    if commit:
        db.commit()
    return _reload(db, User, id=user_id)


def upsert_tutorial_progress(
    db: Session,
    *,
    user_id: str,
    tutorial_id: int,
    progress_percent: int,
    completed: bool,
    commit: bool = True,
) -> TutorialProgress:
    """
    At most one row per (user, tutorial).

    completed_at is "now" exactly when completed is true and null otherwise,
    so resubmitting an incomplete state clears an earlier completion.
    progress_percent is recorded as given.
    """
    now = _now()
    values: dict[str, Any] = {
        "user_id": user_id,
        "tutorial_id": int(tutorial_id),
        "progress_percent": int(progress_percent),
        "completed": bool(completed),
        "completed_at": now if completed else None,
        "created_at": now,
        "updated_at": now,
    }
    _upsert(
        db,
        TutorialProgress,
        conflict_cols=("user_id", "tutorial_id"),
        values=values,
        update_fields=PROGRESS_MUTABLE_FIELDS + ("updated_at",),
    )
    if commit:
        db.commit()
    return _reload(db, TutorialProgress, user_id=user_id, tutorial_id=int(tutorial_id))
