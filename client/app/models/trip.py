"""Trip models - records exchanged with the trip directory and itinerary source."""

import json
from datetime import date
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from client.app.models.common import TripStatus


def normalize_itinerary(value: Any) -> str | None:
    """Reduce a stored itinerary to its raw text.

    The backend stores itineraries as plain text, as an object
    ``{"itinerary": text, "model": ...}``, or as that object JSON-encoded.
    Anything else yields None.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        return normalize_itinerary(value.get("itinerary"))
    if not isinstance(value, str):
        return None

    stripped = value.strip()
    if stripped.startswith("{"):
        try:
            decoded = json.loads(stripped)
        except json.JSONDecodeError:
            return value
        if isinstance(decoded, dict):
            return normalize_itinerary(decoded.get("itinerary"))
    return value


def _coerce_date(value: Any) -> Any:
    # MySQL DATE columns come back as full ISO timestamps
    if isinstance(value, str):
        value = value.strip()
        return value[:10] or None
    return value


class Trip(BaseModel):
    """A trip as returned by the trip directory.

    Unknown fields (booking data, reminders, interests) are preserved so that
    shallow merges from push updates never drop them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    status: TripStatus = TripStatus.planning
    title: str | None = None
    destination: str
    duration: int = Field(..., ge=1)
    budget: float | None = None
    start_date: date | None = Field(
        default=None, validation_alias=AliasChoices("startDate", "start_date")
    )
    end_date: date | None = Field(
        default=None, validation_alias=AliasChoices("endDate", "end_date")
    )
    itinerary: str | None = None

    @field_validator("itinerary", mode="before")
    @classmethod
    def normalize_itinerary_payload(cls, v: Any) -> str | None:
        """Accept any of the backend's itinerary encodings."""
        return normalize_itinerary(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def trim_timestamps(cls, v: Any) -> Any:
        return _coerce_date(v)

    def merged(self, updates: dict[str, Any]) -> "Trip":
        """Return a copy with ``updates`` shallow-overwriting this trip's fields."""
        data = self.model_dump()
        data.update(updates)
        return Trip.model_validate(data)


class ItineraryRequest(BaseModel):
    """Trip details sent to the itinerary source."""

    model_config = ConfigDict(populate_by_name=True)

    destination: str = Field(..., min_length=1)
    duration: int = Field(..., ge=1)
    budget: float | None = None
    start_date: date | None = Field(default=None, alias="startDate")
    end_date: date | None = Field(default=None, alias="endDate")
    travel_style: str = Field(default="moderate", alias="travelStyle")
    interests: list[str] = Field(default_factory=list)


class GeneratedTrip(BaseModel):
    """Result of itinerary generation: the new trip and its raw itinerary text."""

    trip_id: int
    status: TripStatus = TripStatus.planning
    destination: str
    duration: int = Field(..., ge=1)
    budget: float | None = None
    start_date: date | None = None
    end_date: date | None = None
    itinerary_text: str = ""

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "GeneratedTrip":
        """Build from the ``data`` member of a generate-itinerary response."""
        trip_data = data.get("tripData") or {}
        trip_id = data.get("tripId", trip_data.get("id"))
        itinerary = normalize_itinerary(data.get("itinerary", trip_data.get("itinerary")))
        return cls(
            trip_id=trip_id,
            status=trip_data.get("status", TripStatus.planning),
            destination=trip_data.get("destination", ""),
            duration=trip_data.get("duration", 1),
            budget=trip_data.get("budget"),
            start_date=_coerce_date(trip_data.get("startDate")),
            end_date=_coerce_date(trip_data.get("endDate")),
            itinerary_text=itinerary or "",
        )

    def to_trip(self) -> Trip:
        """Snapshot used before the trip directory confirms the new trip."""
        return Trip(
            id=self.trip_id,
            status=self.status,
            title=f"{self.destination} Trip",
            destination=self.destination,
            duration=self.duration,
            budget=self.budget,
            start_date=self.start_date,
            end_date=self.end_date,
            itinerary=self.itinerary_text,
        )


class BookedFlight(BaseModel):
    """A flight offer saved against a trip."""

    id: int
    trip_id: int
    offer_id: str | None = None
    origin: str
    destination: str
    departure_date: date | None = None
    return_date: date | None = None
    price: float | None = None
    currency: str = "USD"
    airline: str | None = None
    airline_name: str | None = None
    status: str = "selected"

    @field_validator("departure_date", "return_date", mode="before")
    @classmethod
    def trim_timestamps(cls, v: Any) -> Any:
        return _coerce_date(v)
