# backend/propertyhub/domain/chat_responses.py
from __future__ import annotations

DEFAULT_RESPONSE = "I'm here to help with your real estate questions!"

# First matching row wins; order matters when a message hits several topics.
KEYWORD_RESPONSES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("occupancy", "vacancy"),
        "Occupancy rate is calculated as (occupied units / total units) × 100. A healthy occupancy rate for "
        "rental properties is typically 90-95%. Would you like me to show you tutorials on improving "
        "occupancy rates?",
    ),
    (
        ("revenue", "income"),
        "Property revenue includes rental income, fees, and other income sources. Key metrics to track are "
        "gross rental yield, net rental yield, and cash flow. I can help you understand these calculations "
        "better.",
    ),
    (
        ("maintenance", "repair"),
        "Effective maintenance management involves preventive scheduling, vendor relationships, and quick "
        "response times. The average response time for maintenance requests should be 24-48 hours for "
        "non-emergency items.",
    ),
    (
        ("market", "analysis"),
        "Market analysis involves studying comparable properties, rental rates, vacancy rates, and local "
        "economic factors. I can guide you through creating comprehensive market reports.",
    ),
    (
        ("roi", "return"),
        "ROI (Return on Investment) for real estate is calculated as (Annual Rental Income - Annual Expenses) "
        "/ Total Investment × 100. A good ROI for rental properties is typically 8-12%.",
    ),
)


def canned_response(message: str) -> str:
    text = (message or "").lower()
    for keywords, response in KEYWORD_RESPONSES:
        if any(k in text for k in keywords):
            return response
    return DEFAULT_RESPONSE
