"""Itinerary models - structured days parsed from free text."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

DEFAULT_DAY_TITLE = "Exploration Day"


class Day(BaseModel):
    """One day of a parsed itinerary."""

    number: int = Field(..., ge=1, description="Ordering key, unique per itinerary")
    title: str = DEFAULT_DAY_TITLE
    activities: list[str] = Field(default_factory=list, description="Raw lines in document order")
    total_cost: float = 0.0


class HeaderLine(BaseModel):
    """A named time-slot section, e.g. "Morning Activity (9:00 AM):"."""

    kind: Literal["header"] = "header"
    label: str
    time: str | None = None
    text: str = ""  # Whatever followed the colon


class DetailLine(BaseModel):
    """A key:value attribute of the enclosing header, e.g. "Cost: $40"."""

    kind: Literal["detail"] = "detail"
    label: str
    value: str


class PlainLine(BaseModel):
    """Free narrative text."""

    kind: Literal["plain"] = "plain"
    text: str


ActivityLine = Annotated[HeaderLine | DetailLine | PlainLine, Field(discriminator="kind")]


class CostSummary(BaseModel):
    """Estimated cost of a parsed itinerary against the trip budget."""

    day_totals: dict[int, float]
    total: float
    budget: float | None = None
    remaining: float | None = None
    over_budget: bool = False
