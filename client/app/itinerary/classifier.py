"""Activity line classifier: one itinerary line -> header / detail / plain."""

import re

from client.app.itinerary.parser import clean_activity_line
from client.app.models.itinerary import ActivityLine, Day, DetailLine, HeaderLine, PlainLine

SECTION_LABELS = (
    "Morning Activity",
    "Afternoon Activity",
    "Evening Activity",
    "Breakfast",
    "Lunch",
    "Dinner",
)

ATTRIBUTE_LABELS = (
    "Activity",
    "Venue",
    "Address",
    "Cost",
    "Price Range",
    "Note",
    "Duration",
)

_CANONICAL = {label.lower(): label for label in SECTION_LABELS + ATTRIBUTE_LABELS}

# "Morning Activity (9:00 AM): City walk", "Lunch:", "Dinner"
HEADER_RE = re.compile(
    r"^(" + "|".join(re.escape(label) for label in SECTION_LABELS) + r")"
    r"\s*(?:\(([^)]*)\))?\s*(?::\s*(.*))?$",
    re.IGNORECASE,
)

# "Cost: $25", "Price Range: $$"
DETAIL_RE = re.compile(
    r"^(" + "|".join(re.escape(label) for label in ATTRIBUTE_LABELS) + r")\s*:\s*(.*)$",
    re.IGNORECASE,
)


def classify_line(line: str) -> ActivityLine:
    """Classify a single activity line.

    Total over all strings: anything that is neither a section header nor a
    known attribute is returned unchanged as plain text.
    """
    candidate = clean_activity_line(line)

    match = HEADER_RE.match(candidate)
    if match:
        label, time, text = match.groups()
        return HeaderLine(
            label=_CANONICAL[label.lower()],
            time=time.strip() if time and time.strip() else None,
            text=(text or "").strip(),
        )

    match = DETAIL_RE.match(candidate)
    if match:
        label, value = match.groups()
        return DetailLine(label=_CANONICAL[label.lower()], value=value.strip())

    return PlainLine(text=line)


def classify_day(day: Day) -> list[ActivityLine]:
    """Classify every activity of a day, preserving order."""
    return [classify_line(activity) for activity in day.activities]
