"""Test activity line classification."""

import random

import pytest

from client.app.itinerary.classifier import classify_day, classify_line
from client.app.models.itinerary import Day, DetailLine, HeaderLine, PlainLine


def test_header_with_time_slot() -> None:
    """Test time-slot header with parenthesised time."""
    line = classify_line("Morning Activity (9:00 AM): City walk")

    assert isinstance(line, HeaderLine)
    assert line.label == "Morning Activity"
    assert line.time == "9:00 AM"
    assert line.text == "City walk"


def test_cost_detail() -> None:
    """Test attribute line."""
    line = classify_line("Cost: $25")

    assert isinstance(line, DetailLine)
    assert line.label == "Cost"
    assert line.value == "$25"


@pytest.mark.parametrize(
    "raw,label",
    [
        ("Lunch:", "Lunch"),
        ("Dinner", "Dinner"),
        ("- **Breakfast**: Pastries", "Breakfast"),
        ("evening activity (8 PM)", "Evening Activity"),
    ],
)
def test_header_variants(raw: str, label: str) -> None:
    """Test bare, bulleted, bold and lowercase headers."""
    line = classify_line(raw)

    assert isinstance(line, HeaderLine)
    assert line.label == label


def test_header_without_time_has_none() -> None:
    """Test header time is None when absent or empty."""
    assert classify_line("Lunch: Tapas bar").time is None
    assert classify_line("Afternoon Activity (): Beach").time is None


@pytest.mark.parametrize(
    "raw,label,value",
    [
        ("Venue: Mercado de San Miguel", "Venue", "Mercado de San Miguel"),
        ("* Address: 1 Main St", "Address", "1 Main St"),
        ("price range: $$", "Price Range", "$$"),
        ("Note:", "Note", ""),
        ("Duration: 2 hours", "Duration", "2 hours"),
    ],
)
def test_detail_variants(raw: str, label: str, value: str) -> None:
    """Test every attribute label is recognised."""
    line = classify_line(raw)

    assert isinstance(line, DetailLine)
    assert line.label == label
    assert line.value == value


@pytest.mark.parametrize(
    "raw",
    [
        "Visit the old town",
        "Lunch at a seaside tavern",
        "Costumes museum tour",
        "",
        "   ",
        "$40 dinner",
    ],
)
def test_plain_lines_returned_unchanged(raw: str) -> None:
    """Test that anything else is plain text with the original line."""
    line = classify_line(raw)

    assert isinstance(line, PlainLine)
    assert line.text == raw


def test_classify_is_total_over_random_strings() -> None:
    """Test that classification never raises and always yields a variant."""
    rng = random.Random(1234)
    alphabet = "abcdefghijklmnopqrstuvwxyz ():$*-#0123456789AMPM"
    for _ in range(300):
        raw = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 40)))
        line = classify_line(raw)
        assert isinstance(line, (HeaderLine, DetailLine, PlainLine))


def test_classify_day_preserves_order() -> None:
    """Test day classification keeps activity order."""
    day = Day(
        number=1,
        title="Old Town",
        activities=["Morning Activity (9:00 AM):", "Visit the cathedral", "Cost: $12"],
    )

    lines = classify_day(day)

    assert [line.kind for line in lines] == ["header", "plain", "detail"]
