# backend/tests/test_tutorial_progress.py
from __future__ import annotations

from sqlalchemy import func, select

from conftest import headers
from propertyhub.models import Tutorial, TutorialDifficulty, TutorialProgress
from propertyhub.services.upserts import upsert_tutorial_progress, upsert_user


def _mk_tutorial(db, title: str = "Pricing 101", **kw) -> Tutorial:
    row = Tutorial(
        title=title,
        difficulty=kw.pop("difficulty", TutorialDifficulty.beginner),
        category=kw.pop("category", "market_analysis"),
        duration=kw.pop("duration", 15),
        tags=kw.pop("tags", ["pricing"]),
        **kw,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _progress_rows(db, user_id: str, tutorial_id: int) -> int:
    return db.scalar(
        select(func.count(TutorialProgress.id)).where(
            TutorialProgress.user_id == user_id, TutorialProgress.tutorial_id == tutorial_id
        )
    )


def test_same_submission_twice_leaves_one_row(db):
    upsert_user(db, user_id="u1", email="u1@demo.local")
    t = _mk_tutorial(db)

    first = upsert_tutorial_progress(db, user_id="u1", tutorial_id=t.id, progress_percent=40, completed=False)
    second = upsert_tutorial_progress(db, user_id="u1", tutorial_id=t.id, progress_percent=40, completed=False)

    assert first.id == second.id
    assert _progress_rows(db, "u1", t.id) == 1
    assert second.progress_percent == 40
    assert second.completed_at is None


def test_completion_sets_and_then_clears_timestamp(db):
    upsert_user(db, user_id="u1", email="u1@demo.local")
    t = _mk_tutorial(db)

    done = upsert_tutorial_progress(db, user_id="u1", tutorial_id=t.id, progress_percent=100, completed=True)
    assert done.completed is True
    assert done.completed_at is not None

    reopened = upsert_tutorial_progress(db, user_id="u1", tutorial_id=t.id, progress_percent=80, completed=False)
    assert reopened.completed is False
    assert reopened.completed_at is None
    assert _progress_rows(db, "u1", t.id) == 1


def test_store_records_percent_as_given(db):
    upsert_user(db, user_id="u1", email="u1@demo.local")
    t = _mk_tutorial(db)
    row = upsert_tutorial_progress(db, user_id="u1", tutorial_id=t.id, progress_percent=150, completed=False)
    assert row.progress_percent == 150


def test_progress_is_per_user(db):
    upsert_user(db, user_id="u1", email="u1@demo.local")
    upsert_user(db, user_id="u2", email="u2@demo.local")
    t = _mk_tutorial(db)

    upsert_tutorial_progress(db, user_id="u1", tutorial_id=t.id, progress_percent=10, completed=False)
    upsert_tutorial_progress(db, user_id="u2", tutorial_id=t.id, progress_percent=90, completed=False)
    assert _progress_rows(db, "u1", t.id) == 1
    assert _progress_rows(db, "u2", t.id) == 1


def test_progress_endpoint_clamps_and_upserts(client, db):
    t = _mk_tutorial(db)
    h = headers("learner", role="user")

    r = client.post("/api/tutorials/progress", json={"tutorialId": t.id, "progressPercent": 150}, headers=h)
    assert r.status_code == 200
    assert r.json()["progressPercent"] == 100

    r = client.post(
        "/api/tutorials/progress",
        json={"tutorialId": t.id, "progressPercent": 100, "completed": True},
        headers=h,
    )
    assert r.json()["completed"] is True
    assert r.json()["completedAt"] is not None

    mine = client.get("/api/tutorials/progress/me", headers=h).json()
    assert len(mine) == 1
    assert mine[0]["tutorial"]["title"] == "Pricing 101"


def test_progress_for_unknown_tutorial_is_404(client):
    r = client.post("/api/tutorials/progress", json={"tutorialId": 9999}, headers=headers("learner"))
    assert r.status_code == 404


def test_tutorial_listing_filters(client, db):
    a = _mk_tutorial(db, "Basics", difficulty=TutorialDifficulty.beginner, category="listings")
    _mk_tutorial(db, "Deep dive", difficulty=TutorialDifficulty.advanced, category="listings")
    _mk_tutorial(db, "Comps", difficulty=TutorialDifficulty.beginner, category="market_analysis")

    r = client.get("/api/tutorials", params={"difficulty": "beginner", "category": "listings"})
    assert r.status_code == 200
    assert [x["id"] for x in r.json()] == [a.id]
    assert r.json()[0]["duration"] == 15

    assert len(client.get("/api/tutorials").json()) == 3
    assert client.get(f"/api/tutorials/{a.id}").json()["title"] == "Basics"
    assert client.get("/api/tutorials/9999").status_code == 404
