"""Common types and enums shared across all models."""

from enum import Enum


class TripStatus(str, Enum):
    """Server-authoritative trip lifecycle status."""

    planning = "planning"
    upcoming = "upcoming"
    active = "active"
    completed = "completed"


class ViewName(str, Enum):
    """Sub-view shown by the trip view state machine."""

    create = "create"
    trips = "trips"
    itinerary = "itinerary"
    flights = "flights"
    hotels = "hotels"
    activities = "activities"
    manage = "manage"


# Views that cannot render without a resolvable trip
TRIP_SCOPED_VIEWS = frozenset(
    {ViewName.itinerary, ViewName.flights, ViewName.hotels, ViewName.activities}
)

# Booking views that return to the itinerary
BOOKING_VIEWS = frozenset({ViewName.flights, ViewName.hotels, ViewName.activities})
