# backend/propertyhub/routers/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import Principal, ensure_user, get_principal
from ..db import get_db
from ..schemas import UserOut

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/user", response_model=UserOut)
def current_user(db: Session = Depends(get_db), p: Principal = Depends(get_principal)):
    """Sign-in landing call: provisions the caller on first sight, refreshes a changed profile."""
    return ensure_user(db, p)
