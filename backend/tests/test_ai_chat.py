# backend/tests/test_ai_chat.py
from __future__ import annotations

from conftest import headers
from propertyhub.domain.chat_responses import DEFAULT_RESPONSE, canned_response


def test_keyword_table():
    assert canned_response("How do I raise my OCCUPANCY?").startswith("Occupancy rate is calculated")
    assert canned_response("what counts as income").startswith("Property revenue includes")
    assert canned_response("roof repair backlog").startswith("Effective maintenance management")
    assert canned_response("local market trends").startswith("Market analysis involves")
    assert canned_response("what is a good roi").startswith("ROI (Return on Investment)")
    assert canned_response("hello there") == DEFAULT_RESPONSE


def test_first_matching_topic_wins():
    # mentions both occupancy and revenue
    assert canned_response("revenue vs occupancy").startswith("Occupancy rate is calculated")


def test_chat_round_trip_and_history(client):
    h = headers("agent-a")
    r = client.post("/api/ai/chat", json={"message": "vacancy help", "context": {"page": "dashboard"}}, headers=h)
    assert r.status_code == 200
    assert r.json()["response"].startswith("Occupancy rate is calculated")

    client.post("/api/ai/chat", json={"message": "hi"}, headers=h)
    client.post("/api/ai/chat", json={"message": "not mine"}, headers=headers("agent-b"))

    hist = client.get("/api/ai/chat/history", headers=h).json()
    assert [m["message"] for m in hist] == ["hi", "vacancy help"]
    assert hist[1]["context"] == {"page": "dashboard"}

    limited = client.get("/api/ai/chat/history", params={"limit": 1}, headers=h).json()
    assert [m["message"] for m in limited] == ["hi"]


def test_blank_message_is_rejected(client):
    r = client.post("/api/ai/chat", json={"message": "   "}, headers=headers("agent-a"))
    assert r.status_code == 400
    assert r.json()["errors"][0]["message"] == "Message is required"
