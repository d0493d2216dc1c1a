# backend/tests/test_seed_demo.py
from __future__ import annotations

from propertyhub.cli.seed_demo import SAMPLE_PROPERTIES, SAMPLE_TUTORIALS, seed_demo
from propertyhub.services.dashboard_stats import compute_dashboard_stats


def test_seed_is_idempotent(db):
    first = seed_demo(user_id="demo-agent", user_email="agent@demo.local", months=3)
    assert first.properties_created == len(SAMPLE_PROPERTIES)
    assert first.tutorials_created == len(SAMPLE_TUTORIALS)
    assert first.analytics_created == 9

    second = seed_demo(user_id="demo-agent", user_email="agent@demo.local", months=3)
    assert (second.properties_created, second.analytics_created, second.tutorials_created) == (0, 0, 0)

    stats = compute_dashboard_stats(db, user_id="demo-agent", strategy="latest")
    assert stats.total_properties == len(SAMPLE_PROPERTIES)
    assert stats.total_revenue == 19500.0
