"""Async driver connecting the trip view state machine to the backend API.

The machine queues commands; the controller executes them and feeds each
result (or failure) back into the machine.
"""

import logging

from client.app.adapters.api import TripApiClient, TripApiError
from client.app.adapters.fixtures import demo_trips
from client.app.config import Settings, get_settings
from client.app.models.common import ViewName
from client.app.models.trip import ItineraryRequest
from client.app.state.machine import (
    ActivateTrip,
    Command,
    DeactivateTrip,
    RefreshTripFlights,
    RefreshTrips,
    ReloadTrip,
    SaveDay,
    TripViewStateMachine,
)

logger = logging.getLogger(__name__)


class TripController:
    """Executes state machine commands against the trip API."""

    def __init__(
        self,
        machine: TripViewStateMachine,
        api: TripApiClient,
        settings: Settings | None = None,
    ) -> None:
        self.machine = machine
        self.api = api
        self._settings = settings or get_settings()

    async def load(self) -> ViewName:
        """Initial trip load and start transition.

        When the trip directory is unreachable the machine starts on demo
        trips (if enabled) in degraded mode, without touching the persisted
        selection; a later successful refresh resumes it.
        """
        try:
            trips = await self.api.list_trips()
        except TripApiError as e:
            fallback = demo_trips() if self._settings.demo_fallback else []
            logger.warning(f"[controller] initial load failed, starting with {len(fallback)} demo trips")
            view = self.machine.start(fallback, authoritative=False)
            self.machine.on_collaborator_failure(e.operation, e.reason)
            return view

        view = self.machine.start(trips)
        await self.run_pending()
        return view

    async def generate(self, request: ItineraryRequest) -> ViewName:
        """Generate an itinerary and show the new trip."""
        try:
            generated = await self.api.generate_itinerary(request)
        except TripApiError as e:
            self.machine.on_collaborator_failure(e.operation, e.reason)
            return self.machine.state

        logger.info(f"[controller] generated trip_id={generated.trip_id} for {generated.destination}")
        view = self.machine.on_itinerary_generated(generated)
        await self.run_pending()
        return view

    async def refresh(self) -> None:
        """Reload the trip list (also the recovery path after a failed load)."""
        self.machine.request_refresh()
        await self.run_pending()

    async def run_pending(self) -> None:
        """Execute queued commands until the machine issues no more."""
        while commands := self.machine.drain_commands():
            for command in commands:
                await self._execute(command)

    async def _execute(self, command: Command) -> None:
        machine = self.machine

        if isinstance(command, SaveDay):
            try:
                await self.api.update_day(
                    command.trip_id, command.day_number, command.title, list(command.activities)
                )
            except TripApiError as e:
                machine.on_day_save_failed(command.trip_id, command.day_number, e.reason)
                return
            machine.on_day_saved(command.trip_id, command.day_number)
            return

        try:
            if isinstance(command, RefreshTrips):
                trips = await self.api.list_trips()
                machine.on_trips_refreshed(trips, ticket=command.ticket)
            elif isinstance(command, ReloadTrip):
                trip = await self.api.get_trip(command.trip_id)
                machine.on_trip_reloaded(trip, ticket=command.ticket)
            elif isinstance(command, RefreshTripFlights):
                flights = await self.api.get_trip_flights(command.trip_id)
                machine.on_flights_loaded(command.trip_id, flights)
            elif isinstance(command, ActivateTrip):
                await self.api.activate_trip(command.trip_id)
                machine.request_refresh()
            elif isinstance(command, DeactivateTrip):
                await self.api.deactivate_trip(command.trip_id)
                machine.request_refresh()
        except TripApiError as e:
            machine.on_collaborator_failure(e.operation, e.reason)
