# backend/propertyhub/db.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import settings


class Base(DeclarativeBase):
    pass


def _connect_args(url: str) -> dict:
    # TestClient and uvicorn hand the session to worker threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.database_url),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Iterator[Session]:
    """
    Request-scoped session.

    A failed statement leaves the transaction aborted on Postgres, so any
    exception rolls back before it propagates to the error handlers.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Same contract as get_db, for the CLI and scripts."""
    yield from get_db()


def create_schema() -> None:
    """Create tables straight from the models. Migrations are the normal path."""
    from . import models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=engine)


def drop_schema() -> None:
    from . import models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
