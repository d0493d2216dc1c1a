# backend/propertyhub/services/chat.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..domain.chat_responses import canned_response
from ..models import ChatMessage


def reply_and_record(
    db: Session,
    *,
    user_id: str,
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> ChatMessage:
    row = ChatMessage(
        user_id=user_id,
        message=message,
        response=canned_response(message),
        context=dict(context or {}),
        created_at=datetime.utcnow(),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def chat_history(db: Session, *, user_id: str, limit: int) -> list[ChatMessage]:
    return list(
        db.scalars(
            select(ChatMessage)
            .where(ChatMessage.user_id == user_id)
            .order_by(desc(ChatMessage.created_at), desc(ChatMessage.id))
            .limit(limit)
        ).all()
    )
