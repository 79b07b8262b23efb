"""Push event models - server-originated messages folded into client state."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

MessageRole = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    """One entry of the assistant conversation log."""

    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    model: str | None = None


class NearbyPlace(BaseModel):
    """A place recommendation derived from the traveller's location."""

    model_config = ConfigDict(extra="allow")

    name: str
    address: str | None = None
    rating: float | None = None
    category: str | None = Field(default=None, validation_alias=AliasChoices("category", "type"))


class AssistantReplyEvent(BaseModel):
    """Assistant reply delivered over the push channel."""

    kind: Literal["assistant_reply"] = "assistant_reply"
    content: str
    model: str | None = None
    success: bool = True


class TripUpdatedEvent(BaseModel):
    """Shallow field update for one trip."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["trip_updated"] = "trip_updated"
    trip_id: int = Field(..., alias="tripId")
    updates: dict[str, Any] = Field(default_factory=dict)


class LocationContextEvent(BaseModel):
    """Nearby places (and weather) for the traveller's current position."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["location_context"] = "location_context"
    nearby_places: list[NearbyPlace] = Field(default_factory=list, alias="nearbyRecommendations")
    weather: dict[str, Any] | None = None


PushEvent = Annotated[
    AssistantReplyEvent | TripUpdatedEvent | LocationContextEvent,
    Field(discriminator="kind"),
]
