"""Realtime sync adapter: the single owner of inbound push-event folding."""

import logging
from collections.abc import Callable
from typing import Any, Protocol

from pydantic import ValidationError

from client.app.models.events import (
    AssistantReplyEvent,
    ChatMessage,
    LocationContextEvent,
    NearbyPlace,
    PushEvent,
    TripUpdatedEvent,
)
from client.app.utils.metrics import PrometheusStateMetrics

logger = logging.getLogger(__name__)

# Socket event names used by the backend
AI_RESPONSE = "ai_response"
TRIP_UPDATED = "trip_updated"
LOCATION_CONTEXT = "location_context"
AI_CHAT = "ai_chat"

DEFAULT_ASSISTANT_FALLBACK = "I'm having trouble right now. Please try again in a moment."


class TripUpdateSink(Protocol):
    """Receiver of shallow trip-field updates."""

    def apply_trip_update(self, trip_id: int, updates: dict[str, Any]) -> bool:
        """Merge ``updates`` into the trip; return False if nothing matched."""
        ...


class PushChannel(Protocol):
    """Socket-like push channel (python-socketio Client compatible)."""

    connected: bool

    def on(self, event: str, handler: Callable[..., Any]) -> Any: ...

    def emit(self, event: str, data: Any = None) -> Any: ...


def _decode_places(raw: Any) -> list[NearbyPlace]:
    places: list[NearbyPlace] = []
    for item in raw or []:
        try:
            places.append(NearbyPlace.model_validate(item))
        except ValidationError:
            logger.warning(f"[realtime] dropping malformed nearby place: {item!r}")
    return places


def event_from_payload(name: str, payload: dict[str, Any]) -> PushEvent | None:
    """Decode a raw socket payload into a push event.

    Returns None for unknown event names and undecodable payloads.
    """
    if name == AI_RESPONSE:
        if payload.get("success"):
            data = payload.get("data") or {}
            return AssistantReplyEvent(
                content=data.get("message", ""),
                model=data.get("model"),
            )
        return AssistantReplyEvent(
            content=payload.get("fallback") or DEFAULT_ASSISTANT_FALLBACK,
            success=False,
        )

    if name == TRIP_UPDATED:
        try:
            return TripUpdatedEvent.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"[realtime] undecodable {TRIP_UPDATED} payload: {e}")
            return None

    if name == LOCATION_CONTEXT:
        return LocationContextEvent(
            nearby_places=_decode_places(payload.get("nearbyRecommendations")),
            weather=payload.get("weather"),
        )

    logger.debug(f"[realtime] ignoring unknown event {name!r}")
    return None


class RealtimeSyncAdapter:
    """Folds push events into client state.

    Assistant replies append to the message log in receipt order; no pairing
    with outstanding user messages is attempted. Location context replaces
    the nearby places. Trip updates are merged through the sink so the trip
    list and the selected snapshot change together.
    """

    def __init__(self, sink: TripUpdateSink, metrics: PrometheusStateMetrics | None = None) -> None:
        self._sink = sink
        self._metrics = metrics or PrometheusStateMetrics()
        self._bound: set[int] = set()
        self.messages: list[ChatMessage] = []
        self.nearby_places: list[NearbyPlace] = []
        self.weather: dict[str, Any] | None = None

    def on_push_event(self, event: PushEvent) -> None:
        """Fold one event into state."""
        self._metrics.inc_push_event(event.kind)

        if isinstance(event, AssistantReplyEvent):
            self.messages.append(
                ChatMessage(role="assistant", content=event.content, model=event.model)
            )
        elif isinstance(event, TripUpdatedEvent):
            if not self._sink.apply_trip_update(event.trip_id, event.updates):
                logger.info(f"[realtime] trip_updated for unknown trip_id={event.trip_id}")
        elif isinstance(event, LocationContextEvent):
            self.nearby_places = list(event.nearby_places)
            self.weather = event.weather

    def on_payload(self, name: str, payload: dict[str, Any]) -> None:
        """Decode and fold a raw socket payload."""
        event = event_from_payload(name, payload)
        if event is not None:
            self.on_push_event(event)

    def bind(self, channel: PushChannel) -> None:
        """Register one handler per event name on ``channel``.

        Binding the same channel again is a no-op.
        """
        if id(channel) in self._bound:
            return
        self._bound.add(id(channel))

        for name in (AI_RESPONSE, TRIP_UPDATED, LOCATION_CONTEXT):
            channel.on(name, self._handler_for(name))

    def _handler_for(self, name: str) -> Callable[[dict[str, Any]], None]:
        def handler(payload: dict[str, Any]) -> None:
            self.on_payload(name, payload)

        return handler

    def add_user_message(self, content: str) -> ChatMessage:
        """Record an outgoing user message in the log."""
        message = ChatMessage(role="user", content=content)
        self.messages.append(message)
        return message

    def send_chat(
        self,
        channel: PushChannel | None,
        content: str,
        context: dict[str, Any] | None = None,
    ) -> bool:
        """Log a user message and emit it on the channel.

        Returns:
            False when no connected channel is available; the message is still
            logged but no reply will arrive
        """
        self.add_user_message(content)

        if channel is None or not getattr(channel, "connected", False):
            logger.info("[realtime] push channel unavailable, chat message not sent")
            return False

        channel.emit(AI_CHAT, {"message": content, "context": context or {}})
        return True
