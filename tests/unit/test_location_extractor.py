"""Test place name extraction for map lookups."""

from client.app.itinerary.locations import (
    FALLBACK_PLACE,
    MAX_LOCATIONS,
    MAX_NAME_CHARS,
    extract_locations,
    place_name,
)


def test_verb_parenthetical_and_conjunction() -> None:
    """Test leading verb, parenthetical and "and" truncation."""
    locations = extract_locations(
        ["Visit the Eiffel Tower (iconic landmark)", "Relax at a cafe and people-watch"]
    )

    assert locations == ["Eiffel Tower", "Relax at a cafe"]


def test_at_most_five_locations() -> None:
    """Test the location cap."""
    activities = [f"Explore Plaza {n}" for n in range(1, 9)]

    locations = extract_locations(activities)

    assert len(locations) == MAX_LOCATIONS
    assert locations[0] == "Plaza 1"


def test_names_are_bounded() -> None:
    """Test every name is non-empty and shorter than the limit."""
    activities = [
        "See " + "very long name " * 6,
        "Tour the Sagrada Familia - book ahead $30",
        "  ",
    ]

    locations = extract_locations(activities)

    assert locations == ["Sagrada Familia"]
    assert all(0 < len(name) < MAX_NAME_CHARS for name in locations)


def test_duplicates_removed_case_insensitively() -> None:
    """Test first-seen wins when names repeat."""
    locations = extract_locations(["Visit Park Guell", "Explore park guell, again"])

    assert locations == ["Park Guell"]


def test_fallback_to_destination() -> None:
    """Test destination fallback when nothing survives."""
    assert extract_locations(["Cost: $40", "Note: bring cash"], "Lisbon, Portugal") == [
        "Lisbon, Portugal"
    ]


def test_fallback_placeholder() -> None:
    """Test placeholder when there is neither a name nor a usable destination."""
    assert extract_locations([]) == [FALLBACK_PLACE]
    assert extract_locations([], "   ") == [FALLBACK_PLACE]
    assert extract_locations([], "x" * MAX_NAME_CHARS) == [FALLBACK_PLACE]


def test_header_and_detail_lines() -> None:
    """Test section header text and venue details contribute names."""
    assert place_name("Morning Activity (9:00 AM): Visit the Picasso Museum") == "Picasso Museum"
    assert place_name("Venue: Mercado de San Miguel") == "Mercado de San Miguel"
    assert place_name("Lunch:") is None
    assert place_name("Cost: $25") is None


def test_currency_stripped() -> None:
    """Test amounts do not leak into names."""
    assert place_name("Boat tour $45") == "Boat tour"
