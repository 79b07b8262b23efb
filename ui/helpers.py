"""Helper functions for UI - render-ready views of client state."""

from typing import Any

from client.app.itinerary.classifier import classify_day
from client.app.itinerary.locations import extract_locations
from client.app.models.events import ChatMessage
from client.app.models.itinerary import CostSummary, Day, DetailLine, HeaderLine
from client.app.models.trip import Trip


def build_day_cards(days: list[Day], destination: str | None = None) -> list[dict[str, Any]]:
    """Build one card per day with lines grouped under time-slot sections.

    Args:
        days: Parsed itinerary days
        destination: Trip destination, used for the map fallback

    Returns:
        List of card dicts with number, title, cost, sections and map places.
        Lines before the first section header land in an untitled section;
        detail lines attach to the section they follow.
    """
    cards = []
    for day in days:
        sections: list[dict[str, Any]] = []
        current: dict[str, Any] = {"label": None, "time": None, "details": [], "bullets": []}

        for line in classify_day(day):
            if isinstance(line, HeaderLine):
                if current["label"] or current["details"] or current["bullets"]:
                    sections.append(current)
                current = {"label": line.label, "time": line.time, "details": [], "bullets": []}
                if line.text:
                    current["bullets"].append(line.text)
            elif isinstance(line, DetailLine):
                current["details"].append({"label": line.label, "value": line.value})
            else:
                current["bullets"].append(line.text)

        if current["label"] or current["details"] or current["bullets"]:
            sections.append(current)

        cards.append(
            {
                "day": day.number,
                "title": day.title,
                "cost": day.total_cost,
                "sections": sections,
                "places": extract_locations(day.activities, destination),
            }
        )
    return cards


def build_cost_panel(summary: CostSummary, currency: str = "$") -> dict[str, Any]:
    """Build the budget panel.

    Args:
        summary: Cost summary of the itinerary
        currency: Symbol used for display

    Returns:
        Dict with formatted total, budget, remaining and over-budget flag
    """

    def fmt(amount: float | None) -> str | None:
        return None if amount is None else f"{currency}{amount:,.2f}"

    return {
        "total": fmt(summary.total),
        "budget": fmt(summary.budget),
        "remaining": fmt(summary.remaining),
        "over_budget": summary.over_budget,
        "per_day": {number: fmt(total) for number, total in summary.day_totals.items()},
    }


def build_trip_cards(trips: list[Trip], selected_id: int | None = None) -> list[dict[str, Any]]:
    """Build trip list cards, active trips first."""
    ordered = sorted(trips, key=lambda t: (t.status.value != "active", t.id))
    return [
        {
            "id": trip.id,
            "title": trip.title or f"{trip.destination} Trip",
            "destination": trip.destination,
            "duration": f"{trip.duration} day{'s' if trip.duration != 1 else ''}",
            "status": trip.status.value,
            "selected": trip.id == selected_id,
            "has_itinerary": bool(trip.itinerary and trip.itinerary.strip()),
        }
        for trip in ordered
    ]


def build_message_feed(messages: list[ChatMessage]) -> list[str]:
    """Format the assistant conversation log."""
    feed = []
    for message in messages:
        speaker = "You" if message.role == "user" else "Assistant"
        feed.append(f"{speaker}: {message.content}")
    return feed
