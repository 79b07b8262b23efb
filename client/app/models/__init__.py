"""Models package - re-exports for convenience."""

from client.app.models.common import (
    BOOKING_VIEWS,
    TRIP_SCOPED_VIEWS,
    TripStatus,
    ViewName,
)
from client.app.models.events import (
    AssistantReplyEvent,
    ChatMessage,
    LocationContextEvent,
    NearbyPlace,
    PushEvent,
    TripUpdatedEvent,
)
from client.app.models.itinerary import (
    ActivityLine,
    CostSummary,
    Day,
    DetailLine,
    HeaderLine,
    PlainLine,
)
from client.app.models.trip import BookedFlight, GeneratedTrip, ItineraryRequest, Trip

__all__ = [
    # Common
    "TripStatus",
    "ViewName",
    "TRIP_SCOPED_VIEWS",
    "BOOKING_VIEWS",
    # Itinerary
    "Day",
    "ActivityLine",
    "HeaderLine",
    "DetailLine",
    "PlainLine",
    "CostSummary",
    # Trip
    "Trip",
    "ItineraryRequest",
    "GeneratedTrip",
    "BookedFlight",
    # Events
    "ChatMessage",
    "NearbyPlace",
    "AssistantReplyEvent",
    "TripUpdatedEvent",
    "LocationContextEvent",
    "PushEvent",
]
