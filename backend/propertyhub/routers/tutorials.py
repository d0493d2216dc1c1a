# backend/propertyhub/routers/tutorials.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import desc, select
from sqlalchemy.orm import Session, selectinload

from ..auth import Principal, ensure_user, get_principal
from ..config import settings
from ..db import get_db
from ..domain.listing_filters import TutorialFilters
from ..models import TutorialDifficulty, TutorialProgress
from ..schemas import (
    TutorialOut,
    TutorialProgressOut,
    TutorialProgressUpsert,
    TutorialProgressWithTutorialOut,
)
from ..services.listing_queries import list_tutorials
from ..services.ownership import must_get_tutorial
from ..services.upserts import upsert_tutorial_progress

log = logging.getLogger("propertyhub.tutorials")

router = APIRouter(prefix="/tutorials", tags=["tutorials"])


@router.get("", response_model=list[TutorialOut])
def get_tutorials(
    difficulty: Optional[TutorialDifficulty] = Query(default=None),
    category: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=settings.max_page_size),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    filters = TutorialFilters(difficulty=difficulty, category=category, limit=limit, offset=offset)
    return list_tutorials(db, filters)


@router.get("/progress/me", response_model=list[TutorialProgressWithTutorialOut])
def my_progress(db: Session = Depends(get_db), p: Principal = Depends(get_principal)):
    """Caller's progress rows with the tutorial embedded, most recently touched first."""
    q = (
        select(TutorialProgress)
        .where(TutorialProgress.user_id == p.user_id)
        .options(selectinload(TutorialProgress.tutorial))
        .order_by(desc(TutorialProgress.updated_at), desc(TutorialProgress.id))
    )
    return list(db.scalars(q).all())


@router.post("/progress", response_model=TutorialProgressOut)
def post_progress(
    payload: TutorialProgressUpsert,
    db: Session = Depends(get_db),
    p: Principal = Depends(get_principal),
):
    must_get_tutorial(db, tutorial_id=payload.tutorial_id)
    ensure_user(db, p)

    row = upsert_tutorial_progress(
        db,
        user_id=p.user_id,
        tutorial_id=payload.tutorial_id,
        progress_percent=payload.progress_percent,
        completed=payload.completed,
    )
    log.info("tutorial progress saved", extra={"user_id": p.user_id, "tutorial_id": payload.tutorial_id})
    return row


@router.get("/{tutorial_id}", response_model=TutorialOut)
def get_tutorial(tutorial_id: int, db: Session = Depends(get_db)):
    return must_get_tutorial(db, tutorial_id=tutorial_id)
