# backend/propertyhub/routers/ai_chat.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import Principal, ensure_user, get_principal
from ..config import settings
from ..db import get_db
from ..schemas import ChatIn, ChatMessageOut, ChatOut
from ..services.chat import chat_history, reply_and_record

router = APIRouter(prefix="/ai/chat", tags=["ai"])


@router.get("/history", response_model=list[ChatMessageOut])
def history(
    limit: Optional[int] = Query(default=None, ge=1, le=settings.max_page_size),
    db: Session = Depends(get_db),
    p: Principal = Depends(get_principal),
):
    return chat_history(db, user_id=p.user_id, limit=limit or settings.chat_history_limit)


@router.post("", response_model=ChatOut)
def send(payload: ChatIn, db: Session = Depends(get_db), p: Principal = Depends(get_principal)):
    ensure_user(db, p)
    row = reply_and_record(db, user_id=p.user_id, message=payload.message, context=payload.context)
    return ChatOut(response=row.response)
