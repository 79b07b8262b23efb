"""Unit tests for UI helper functions."""

from client.app.adapters.fixtures import DEMO_ITINERARY, demo_trips
from client.app.itinerary.costs import summarize_costs
from client.app.itinerary.parser import parse_itinerary
from client.app.models.common import TripStatus
from client.app.models.events import ChatMessage
from client.app.models.trip import Trip
from ui.helpers import build_cost_panel, build_day_cards, build_message_feed, build_trip_cards


def test_build_day_cards_empty() -> None:
    """Test day cards with no days."""
    assert build_day_cards([]) == []


def test_build_day_cards_groups_sections() -> None:
    """Test lines grouped under time-slot headers."""
    cards = build_day_cards(parse_itinerary(DEMO_ITINERARY), "Barcelona, Spain")

    assert [card["day"] for card in cards] == [1, 2]
    day1 = cards[0]
    assert day1["title"] == "Arrival in Barcelona"
    assert day1["cost"] == 35.0
    assert [s["label"] for s in day1["sections"]] == [None, "Morning Activity", "Lunch"]
    assert day1["sections"][1]["time"] == "10:00 AM"
    assert day1["sections"][1]["bullets"] == ["Walk through the Gothic Quarter"]
    assert day1["sections"][2]["details"] == [{"label": "Cost", "value": "$35"}]
    assert "Gothic Quarter" in day1["places"]


def test_build_day_cards_place_fallback() -> None:
    """Test map places fall back to the destination."""
    days = parse_itinerary("Day 1: Rest\nCost: $0")

    cards = build_day_cards(days, "Madeira")

    assert cards[0]["places"] == ["Madeira"]


def test_build_cost_panel() -> None:
    """Test budget panel formatting."""
    days = parse_itinerary(DEMO_ITINERARY)
    summary = summarize_costs(days, budget=1500)

    panel = build_cost_panel(summary)

    assert panel["total"] == "$105.00"
    assert panel["budget"] == "$1,500.00"
    assert panel["remaining"] == "$1,395.00"
    assert panel["over_budget"] is False
    assert panel["per_day"] == {1: "$35.00", 2: "$70.00"}


def test_build_cost_panel_without_budget() -> None:
    """Test panel when the trip has no budget."""
    panel = build_cost_panel(summarize_costs([]))

    assert panel["budget"] is None
    assert panel["remaining"] is None


def test_build_trip_cards_active_first() -> None:
    """Test trip ordering and labels."""
    trips = [
        Trip(id=3, destination="Oslo", duration=1),
        *demo_trips(),
    ]

    cards = build_trip_cards(trips, selected_id=3)

    assert [c["id"] for c in cards] == [1, 3]
    assert cards[0]["status"] == TripStatus.active.value
    assert cards[0]["title"] == "Barcelona Adventure"
    assert cards[0]["duration"] == "7 days"
    assert cards[1]["title"] == "Oslo Trip"
    assert cards[1]["duration"] == "1 day"
    assert cards[1]["selected"] is True
    assert cards[1]["has_itinerary"] is False


def test_build_message_feed() -> None:
    """Test conversation log formatting."""
    feed = build_message_feed(
        [
            ChatMessage(role="user", content="Any rain?"),
            ChatMessage(role="assistant", content="Sunny all week."),
        ]
    )

    assert feed == ["You: Any rain?", "Assistant: Sunny all week."]
