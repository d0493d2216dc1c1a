# backend/propertyhub/auth.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import jwt
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .errors import UnauthenticatedError
from .models import User, UserRole
from .services.upserts import USER_MUTABLE_FIELDS, email_held_by_other, upsert_user


@dataclass(frozen=True)
class Principal:
    """
    Who is calling, as resolved from the session token or dev headers.

    Profile fields are whatever the identity source supplied (None = not
    supplied). role is the stored role when the user row exists, otherwise the
    role a first insert would use.
    """

    user_id: str
    role: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

    def supplied_profile(self) -> dict[str, str]:
        return {k: getattr(self, k) for k in USER_MUTABLE_FIELDS if getattr(self, k) is not None}


def _role_value(role: Any) -> str:
    return role.value if isinstance(role, UserRole) else str(role)


# -------------------------
# Session token (issued by the identity provider)
# -------------------------
def decode_session_token(token: str) -> dict[str, Any]:
    options = {"require": ["sub", "exp"]}
    try:
        if settings.session_jwt_audience:
            return jwt.decode(
                token,
                settings.session_jwt_secret,
                algorithms=["HS256"],
                audience=settings.session_jwt_audience,
                options=options,
            )
        return jwt.decode(
            token,
            settings.session_jwt_secret,
            algorithms=["HS256"],
            options={**options, "verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError("Session expired")
    except jwt.InvalidTokenError:
        raise UnauthenticatedError("Invalid session token")


def _token_from_request(request: Request, authorization: Optional[str]) -> Optional[str]:
    token = request.cookies.get(settings.session_cookie_name) if settings.session_cookie_name else None
    if not token and authorization and str(authorization).lower().startswith("bearer "):
        token = str(authorization).split(" ", 1)[1].strip()
    return token or None


def _principal_from_claims(db: Session, claims: dict[str, Any]) -> Principal:
    sub = str(claims.get("sub") or "").strip()
    if not sub:
        raise UnauthenticatedError("Session token missing sub")

    row = db.get(User, sub)
    return Principal(
        user_id=sub,
        role=_role_value(row.role) if row is not None else UserRole.user.value,
        email=claims.get("email") or None,
        first_name=claims.get("first_name") or None,
        last_name=claims.get("last_name") or None,
        profile_image_url=claims.get("profile_image_url") or None,
    )


def _principal_from_dev_headers(db: Session, request: Request) -> Principal:
    user_id = (request.headers.get(settings.dev_header_user_id) or "").strip()
    if not user_id:
        raise UnauthenticatedError(f"Missing {settings.dev_header_user_id} for dev auth")

    email = (request.headers.get(settings.dev_header_user_email) or "").strip().lower() or None
    role_hint = (request.headers.get(settings.dev_header_user_role) or "user").strip().lower()

    row = db.get(User, user_id)
    if row is not None:
        # the hint never changes a stored role
        role = _role_value(row.role)
    else:
        role = role_hint if role_hint in UserRole.__members__ else UserRole.user.value
    return Principal(user_id=user_id, role=role, email=email)


# -------------------------
# get_principal
# -------------------------
def get_principal(
    request: Request,
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> Principal:
    """
    Resolution order:
      1) session cookie or Authorization: Bearer <token> (HS256, shared secret)
      2) dev identity headers (ONLY if settings.auth_mode == "dev")

    Read-only: dependencies run before request validation, so nothing is
    written here. Handlers call ensure_user() once the request is known good.
    """
    token = _token_from_request(request, authorization)
    if token:
        return _principal_from_claims(db, decode_session_token(token))

    if settings.auth_mode == "dev":
        return _principal_from_dev_headers(db, request)

    raise UnauthenticatedError("Not authenticated")


def ensure_user(db: Session, p: Principal) -> User:
    """
    The caller's user row, provisioned on first sight.

    An existing row is only written when the identity source supplied a
    profile value that differs from what is stored. An email held by another
    user never counts as a difference.
    """
    supplied = p.supplied_profile()
    row = db.get(User, p.user_id)
    if row is not None:
        changed = {k: v for k, v in supplied.items() if getattr(row, k) != v}
        if "email" in changed and email_held_by_other(db, user_id=p.user_id, email=changed["email"]):
            changed.pop("email")
        if not changed:
            return row

    return upsert_user(db, user_id=p.user_id, role=UserRole(p.role), **supplied)
