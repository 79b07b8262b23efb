"""Shared pytest fixtures for all test suites."""

import pytest

from client.app.config import Settings
from client.app.models.common import TripStatus
from client.app.models.trip import Trip
from client.app.state.machine import TripViewStateMachine
from client.app.state.selection import TripSelectionStore
from client.app.state.storage import InMemoryKeyValueStore

SAMPLE_ITINERARY = (
    "**Day 1: Arrival**\n"
    "* Visit the old town\n"
    "* Cost: $40\n"
    "**Day 2: Museums**\n"
    "* Explore the art museum (free on Sundays)\n"
    "* Lunch: Tapas bar - $25\n"
)


@pytest.fixture
def settings() -> Settings:
    """Settings with in-memory storage and a test API base URL."""
    return Settings(
        _env_file=None,
        storage_backend="memory",
        api_base_url="http://testserver/api",
        api_token="test-token",
    )


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    """Empty durable store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def selection(kv_store: InMemoryKeyValueStore, settings: Settings) -> TripSelectionStore:
    """Selection store over the in-memory durable store."""
    return TripSelectionStore(kv_store, settings)


@pytest.fixture
def machine(selection: TripSelectionStore) -> TripViewStateMachine:
    """Fresh state machine."""
    return TripViewStateMachine(selection)


def build_trip(
    trip_id: int,
    status: TripStatus = TripStatus.planning,
    destination: str = "Lisbon, Portugal",
    itinerary: str | None = SAMPLE_ITINERARY,
    budget: float | None = 500.0,
) -> Trip:
    """Helper to create test trip."""
    return Trip(
        id=trip_id,
        status=status,
        title=f"{destination} Trip",
        destination=destination,
        duration=3,
        budget=budget,
        itinerary=itinerary,
    )


@pytest.fixture
def make_trip():
    """Factory fixture for trips."""
    return build_trip
