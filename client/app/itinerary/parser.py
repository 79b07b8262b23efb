"""Itinerary text parser: free-form model output -> ordered Day records.

Pure functions with no I/O. Every input yields a structural result:
text with no recognisable day header collapses into a single synthesized
day rather than raising.
"""

import re

from client.app.models.itinerary import DEFAULT_DAY_TITLE, Day

FALLBACK_DAY_TITLE = "Full Itinerary"
FALLBACK_MIN_LINE_CHARS = 10

# "Day 3: Title", "**Day 3**: Title", "🌟 Day 3 - Title", "Itinerary - Day 2-7: Title".
# "Day N" may sit anywhere in the line but must end it or be followed by a separator.
DAY_HEADER_RE = re.compile(
    r"(?<![A-Za-z0-9])day\s+(\d+)(?:\s*[-–]\s*\d+)?"
    r"(?=\s*[*_]*\s*(?:[:\-–—.]|$))"
    r"\s*[*_]*\s*(?:[:\-–—.]\s*)?(.*)$",
    re.IGNORECASE,
)

# "Lunch:", "Morning Activity (9:00 AM):"; up to three words before the colon
SECTION_LABEL_RE = re.compile(r"^[^\s:]+(?:\s+[^\s:]+){0,2}\s*(?:\([^)]*\))?\s*:$")

# Bullets ("-", "*", "•"), numbering ("1.", "2)") and bold markers at line start
LEADING_MARKER_RE = re.compile(r"^\s*(?:[-*•]+|\d+[.)](?=\s))?\s*")

# "$40", "$1,250", "$19.99"
COST_RE = re.compile(r"\$(\d{1,3}(?:,\d{3})+|\d+)(?:\.(\d{2}))?")


def match_day_header(line: str) -> tuple[int, str] | None:
    """Return (day number, title) if ``line`` opens a new day.

    The title is empty when the header carries none. Day 0 is not a header.
    """
    match = DAY_HEADER_RE.search(line)
    if match is None:
        return None

    number = int(match.group(1))
    if number < 1:
        return None

    title = match.group(2).replace("**", "").replace("__", "").strip(" *_:-–—")
    return number, title


def clean_activity_line(line: str) -> str:
    """Strip leading bullet, number and bold markers from an activity line."""
    cleaned = LEADING_MARKER_RE.sub("", line, count=1)
    return cleaned.replace("**", "").strip()


def extract_cost(line: str) -> float | None:
    """Return the first dollar amount in ``line``, or None."""
    match = COST_RE.search(line)
    if match is None:
        return None

    whole, cents = match.groups()
    amount = whole.replace(",", "")
    if cents:
        amount = f"{amount}.{cents}"
    return float(amount)


def _is_section_label(cleaned: str) -> bool:
    return SECTION_LABEL_RE.match(cleaned) is not None


def _fallback_day(lines: list[str]) -> Day:
    day = Day(number=1, title=FALLBACK_DAY_TITLE)
    for line in lines:
        if len(line) <= FALLBACK_MIN_LINE_CHARS:
            continue
        cleaned = clean_activity_line(line)
        if not cleaned or _is_section_label(cleaned):
            continue
        day.activities.append(cleaned)
        cost = extract_cost(line)
        if cost is not None:
            day.total_cost += cost
    return day


def parse_itinerary(text: str | None) -> list[Day]:
    """Parse raw itinerary text into days.

    Args:
        text: Itinerary as produced by the language model

    Returns:
        Days sorted by number. Lines before the first day header are ignored.
        A repeated day number keeps its first occurrence only; the later
        block (title, activities and cost) is discarded. Input with no day
        header yields one "Full Itinerary" day; blank input yields [].
    """
    if not text or not text.strip():
        return []

    lines = [line.strip() for line in text.splitlines() if line.strip()]

    days: list[Day] = []
    current: Day | None = None

    for line in lines:
        header = match_day_header(line)
        if header is not None:
            if current is not None:
                days.append(current)
            number, title = header
            current = Day(number=number, title=title or DEFAULT_DAY_TITLE)
            continue

        if current is None:
            continue

        cleaned = clean_activity_line(line)
        if cleaned:
            current.activities.append(cleaned)

        cost = extract_cost(line)
        if cost is not None:
            current.total_cost += cost

    if current is not None:
        days.append(current)

    seen: set[int] = set()
    unique: list[Day] = []
    for day in days:
        if day.number in seen:
            continue
        seen.add(day.number)
        unique.append(day)

    if not unique:
        return [_fallback_day(lines)]

    return sorted(unique, key=lambda d: d.number)
