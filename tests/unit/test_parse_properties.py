"""Property-based tests for itinerary parsing and cost aggregation."""

import random

from client.app.itinerary.costs import summarize_costs
from client.app.itinerary.locations import MAX_LOCATIONS, MAX_NAME_CHARS, extract_locations
from client.app.itinerary.parser import parse_itinerary


def generate_itinerary(seed: int) -> tuple[str, dict[int, float]]:
    """Generate itinerary text with fixed seed, plus expected per-day totals.

    Day numbers may repeat; only the first block of each number counts.
    """
    rng = random.Random(seed)
    lines = ["Here is your trip plan!"]
    expected: dict[int, float] = {}

    for _ in range(rng.randint(1, 8)):
        number = rng.randint(1, 6)
        lines.append(f"**Day {number}: Block {rng.randint(0, 99)}**")
        block_total = 0.0
        for i in range(rng.randint(0, 5)):
            if rng.random() < 0.6:
                amount = rng.randint(1, 300)
                block_total += amount
                lines.append(f"- Stop {i} at the market ${amount}")
            else:
                lines.append(f"- Stroll past square {i}")
        if number not in expected:
            expected[number] = block_total

    return "\n".join(lines), expected


def test_day_numbers_unique_and_sorted() -> None:
    """Test that parsed day numbers are unique and ascending."""
    for seed in range(50):
        text, expected = generate_itinerary(seed)
        days = parse_itinerary(text)

        numbers = [day.number for day in days]
        assert numbers == sorted(set(numbers))
        assert numbers == sorted(expected)


def test_day_totals_match_first_occurrence() -> None:
    """Test that each day's cost comes from its first block only."""
    for seed in range(50):
        text, expected = generate_itinerary(seed)
        days = parse_itinerary(text)

        assert {day.number: day.total_cost for day in days} == expected


def test_summary_consistent_with_days() -> None:
    """Test trip total equals the sum of day totals and remaining is non-negative."""
    rng = random.Random(7)
    for seed in range(50):
        text, _ = generate_itinerary(seed)
        days = parse_itinerary(text)
        budget = float(rng.randint(0, 1500))

        summary = summarize_costs(days, budget)

        assert summary.total == sum(summary.day_totals.values())
        assert summary.remaining is not None and summary.remaining >= 0
        assert summary.over_budget == (summary.total > budget)


def test_locations_always_bounded() -> None:
    """Test location extraction bounds on every generated day."""
    for seed in range(30):
        text, _ = generate_itinerary(seed)
        for day in parse_itinerary(text):
            locations = extract_locations(day.activities, "Porto")
            assert 1 <= len(locations) <= MAX_LOCATIONS
            assert all(0 < len(name) < MAX_NAME_CHARS for name in locations)
