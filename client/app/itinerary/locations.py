"""Heuristic place-name extraction for map lookups.

No geocoding happens here; the names only seed a lookup in the places
service.
"""

import re

from client.app.itinerary.classifier import classify_line
from client.app.itinerary.parser import clean_activity_line
from client.app.models.itinerary import DetailLine, HeaderLine

MAX_LOCATIONS = 5
MAX_NAME_CHARS = 50
FALLBACK_PLACE = "City Center"

LEADING_VERB_RE = re.compile(
    r"^(?:visit|explore|see|discover|tour|walk\s+through|experience)\b\s*(?:the\s+)?",
    re.IGNORECASE,
)
PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
DASH_CLAUSE_RE = re.compile(r"\s+[-–—]\s+.*$")
CURRENCY_RE = re.compile(r"\$\d[\d,]*(?:\.\d{2})?")
CUTOFF_RE = re.compile(r"[,.]|\b(?:and|or)\b", re.IGNORECASE)

# Detail labels whose value names a place
PLACE_DETAIL_LABELS = frozenset({"Activity", "Venue"})


def _candidate_text(activity: str) -> str | None:
    line = classify_line(activity)
    if isinstance(line, HeaderLine):
        return line.text or None
    if isinstance(line, DetailLine):
        return line.value if line.label in PLACE_DETAIL_LABELS else None
    return clean_activity_line(line.text)


def place_name(activity: str) -> str | None:
    """Reduce one activity line to a short place name, or None."""
    text = _candidate_text(activity)
    if not text:
        return None

    text = LEADING_VERB_RE.sub("", text.strip(), count=1)
    text = PARENTHETICAL_RE.sub("", text)
    text = DASH_CLAUSE_RE.sub("", text)
    text = CURRENCY_RE.sub("", text)
    text = CUTOFF_RE.split(text, maxsplit=1)[0]
    text = " ".join(text.split())

    if 0 < len(text) < MAX_NAME_CHARS:
        return text
    return None


def extract_locations(activities: list[str], destination: str | None = None) -> list[str]:
    """Extract up to five place names from a day's activities.

    Args:
        activities: Activity lines of one day, in order
        destination: Trip destination used when nothing survives extraction

    Returns:
        Distinct place names in first-seen order; never empty
    """
    locations: list[str] = []
    seen: set[str] = set()

    for activity in activities:
        name = place_name(activity)
        if name is None or name.lower() in seen:
            continue
        seen.add(name.lower())
        locations.append(name)
        if len(locations) == MAX_LOCATIONS:
            break

    if not locations:
        fallback = (destination or "").strip()
        return [fallback if 0 < len(fallback) < MAX_NAME_CHARS else FALLBACK_PLACE]

    return locations
