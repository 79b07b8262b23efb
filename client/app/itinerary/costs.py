"""Cost aggregation over parsed days.

A fold over already-parsed data: no hidden state, safe to recompute at any
time from the days alone.
"""

from collections.abc import Iterable

from client.app.itinerary.parser import extract_cost
from client.app.models.itinerary import CostSummary, Day


def day_total(day: Day) -> float:
    """Estimated cost of a day, as accumulated by the parser."""
    return day.total_cost


def recompute_day_total(day: Day) -> float:
    """Re-derive a day's cost from its activity text.

    Used after local edits, where activities change without a re-parse.
    """
    total = 0.0
    for activity in day.activities:
        cost = extract_cost(activity)
        if cost is not None:
            total += cost
    return total


def trip_total(days: Iterable[Day]) -> float:
    """Sum of per-day totals."""
    return sum((day_total(day) for day in days), 0.0)


def budget_remaining(budget: float | None, total: float) -> float | None:
    """Budget left after ``total``, floored at zero. None without a budget."""
    if budget is None:
        return None
    return max(0.0, budget - total)


def summarize_costs(days: list[Day], budget: float | None = None) -> CostSummary:
    """Build the per-day and trip-level cost summary.

    Args:
        days: Parsed itinerary days
        budget: Trip budget in the itinerary's currency, if known

    Returns:
        CostSummary with day totals keyed by day number
    """
    total = trip_total(days)
    return CostSummary(
        day_totals={day.number: day_total(day) for day in days},
        total=total,
        budget=budget,
        remaining=budget_remaining(budget, total),
        over_budget=budget is not None and total > budget,
    )
