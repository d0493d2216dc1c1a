# backend/tests/conftest.py
from __future__ import annotations

import os
import tempfile

# settings are read at import time, so the test database is chosen first
_DB_DIR = tempfile.mkdtemp(prefix="propertyhub-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["APP_ENV"] = "test"
os.environ["AUTH_MODE"] = "dev"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from propertyhub.db import SessionLocal, create_schema, drop_schema  # noqa: E402
from propertyhub.main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_schema():
    drop_schema()
    create_schema()
    yield


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


def headers(user_id: str, role: str = "agent") -> dict[str, str]:
    return {
        "X-User-Id": user_id,
        "X-User-Email": f"{user_id}@demo.local",
        "X-User-Role": role,
    }
