"""Trip view state machine.

Decides which sub-view is shown and keeps the selected trip snapshot
consistent with the trip list across refreshes, push updates and local
edits. Performs no I/O: requests to collaborators are queued as commands
and their results re-enter through the ``on_*`` methods.

Views:
    create      itinerary generation form
    trips       trip list
    itinerary   parsed day-by-day itinerary of the selected trip
    flights     flight booking for the selected trip
    hotels      hotel booking for the selected trip
    activities  activity booking for the selected trip
    manage      trip management (activation, edits)

The four trip-scoped views are guarded on every entry: without a
resolvable trip the machine falls back to ``create``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from client.app.itinerary.costs import recompute_day_total, summarize_costs
from client.app.itinerary.locations import extract_locations
from client.app.itinerary.parser import (
    FALLBACK_DAY_TITLE,
    clean_activity_line,
    parse_itinerary,
)
from client.app.models.common import BOOKING_VIEWS, TRIP_SCOPED_VIEWS, TripStatus, ViewName
from client.app.models.events import PushEvent
from client.app.models.itinerary import DEFAULT_DAY_TITLE, CostSummary, Day
from client.app.models.trip import BookedFlight, GeneratedTrip, Trip
from client.app.state.realtime import RealtimeSyncAdapter
from client.app.state.selection import TripSelectionStore
from client.app.utils.logging import StructuredStateLogger
from client.app.utils.metrics import PrometheusStateMetrics

logger = logging.getLogger(__name__)


# Commands issued to collaborators
@dataclass(frozen=True)
class RefreshTrips:
    """Reload the full trip list."""

    ticket: int


@dataclass(frozen=True)
class ReloadTrip:
    """Reload a single trip."""

    trip_id: int
    ticket: int


@dataclass(frozen=True)
class RefreshTripFlights:
    """Reload flights booked against a trip."""

    trip_id: int


@dataclass(frozen=True)
class SaveDay:
    """Persist an edited day."""

    trip_id: int
    day_number: int
    title: str
    activities: tuple[str, ...]


@dataclass(frozen=True)
class ActivateTrip:
    trip_id: int


@dataclass(frozen=True)
class DeactivateTrip:
    trip_id: int


Command = RefreshTrips | ReloadTrip | RefreshTripFlights | SaveDay | ActivateTrip | DeactivateTrip


class EditStatus(str, Enum):
    """Durability of a local day edit."""

    pending = "pending"  # Save in flight
    saved = "saved"  # Save acknowledged, awaiting a reload that reflects it


@dataclass
class DayEdit:
    """Optimistic overlay for one day of one trip."""

    trip_id: int
    day: Day
    status: EditStatus = EditStatus.pending
    saved_at_ticket: int | None = None


class TripViewStateMachine:
    """Explicit finite-state machine over trip views."""

    def __init__(
        self,
        selection: TripSelectionStore,
        metrics: PrometheusStateMetrics | None = None,
        state_logger: StructuredStateLogger | None = None,
    ) -> None:
        self.selection = selection
        self._metrics = metrics or PrometheusStateMetrics()
        self._log = state_logger or StructuredStateLogger()
        self.realtime = RealtimeSyncAdapter(self, metrics=self._metrics)

        self._trips: list[Trip] = []
        self._snapshot: Trip | None = None
        self._commands: list[Command] = []

        self._ticket_seq = 0
        self._applied_ticket = 0
        # Started on placeholder trips; the selection store is held
        self._provisional = False
        # trip_id -> last ticket issued before the trip was created locally
        self._optimistic: dict[int, int] = {}
        self._edits: dict[tuple[int, int], DayEdit] = {}
        self._parse_cache: tuple[int, str | None, list[Day]] | None = None

        self.flights: dict[int, list[BookedFlight]] = {}
        self.degraded = False
        self.degraded_reason: str | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> ViewName:
        """Current view.

        A trip-scoped view reads as ``create`` whenever its trip does not
        resolve, including before the first trip load.
        """
        view = self._current_view()
        if view in TRIP_SCOPED_VIEWS and self._resolve() is None:
            return ViewName.create
        return view

    @property
    def trips(self) -> list[Trip]:
        """Latest trip list (copy)."""
        return list(self._trips)

    @property
    def selected_trip_id(self) -> int | None:
        return self.selection.get_selected()

    @property
    def selected_trip(self) -> Trip | None:
        """Snapshot of the selected trip; None until reconciliation resolves it."""
        trip_id = self.selection.get_selected()
        if self._snapshot is None or self._snapshot.id != trip_id:
            return None
        return self._snapshot

    @property
    def days(self) -> list[Day]:
        """Parsed days of the selected trip with pending local edits applied."""
        trip = self.selected_trip
        if trip is None:
            return []

        days = {day.number: day for day in self._parsed_days(trip)}
        for (trip_id, number), edit in self._edits.items():
            if trip_id == trip.id:
                days[number] = edit.day.model_copy(deep=True)
        return sorted(days.values(), key=lambda d: d.number)

    @property
    def cost_summary(self) -> CostSummary:
        """Estimated cost of the selected trip's itinerary against its budget."""
        trip = self.selected_trip
        return summarize_costs(self.days, trip.budget if trip else None)

    def locations_for_day(self, number: int) -> list[str]:
        """Place names to seed the map lookup for one day."""
        trip = self.selected_trip
        destination = trip.destination if trip else None
        for day in self.days:
            if day.number == number:
                return extract_locations(day.activities, destination)
        return extract_locations([], destination)

    def day_edit_status(self, number: int) -> EditStatus | None:
        """Status of an unconfirmed local edit to a day of the selected trip."""
        trip_id = self.selection.get_selected()
        if trip_id is None:
            return None
        edit = self._edits.get((trip_id, number))
        return edit.status if edit else None

    def drain_commands(self) -> list[Command]:
        """Hand queued commands to the caller and clear the queue."""
        commands, self._commands = self._commands, []
        return commands

    # ------------------------------------------------------------------
    # Transition entry points
    # ------------------------------------------------------------------

    def start(self, trips: list[Trip], authoritative: bool = True) -> ViewName:
        """Initial transition after the first trip load.

        A persisted selection that resolves in ``trips`` resumes its persisted
        view. Otherwise an active trip opens its itinerary, and with no active
        trip the machine enters ``create`` with no selection.

        Args:
            trips: Initial trip list
            authoritative: False when ``trips`` is placeholder data (the trip
                directory was unreachable). The selection store is then held,
                so nothing persisted is overwritten, and the first successful
                refresh repeats this resolution against the real list.
        """
        if not authoritative:
            self.selection.hold()
        self._provisional = not authoritative
        self._replace_trips(trips)
        self._applied_ticket = self._ticket_seq
        return self._resume_selection()

    def select_trip(self, trip_id: int | None) -> None:
        """Change the selection.

        If the current view is trip-scoped and the new selection does not
        resolve, the guard redirects to ``create``.
        """
        self._select(trip_id)
        view = self._current_view()
        if view in TRIP_SCOPED_VIEWS and self._resolve() is None:
            self._enter(view, "selection changed")

    def set_view(self, view: ViewName) -> ViewName:
        """Request a view; returns the view actually entered."""
        return self._enter(view, "requested")

    def open_trip(self, trip_id: int) -> ViewName:
        """Trip list card selected: select it and show its itinerary."""
        self._select(trip_id)
        return self._enter(ViewName.itinerary, "trip opened")

    def manage_active_trip(self) -> ViewName:
        """Shortcut from ``create`` to managing the active trip."""
        active = next((t for t in self._trips if t.status == TripStatus.active), None)
        if active is None:
            logger.info("[machine] manage requested with no active trip")
            return self.state
        self._select(active.id)
        return self._enter(ViewName.manage, "manage active trip")

    def on_itinerary_generated(self, generated: GeneratedTrip) -> ViewName:
        """A new trip came back from the itinerary source.

        The trip is added to the list optimistically, selected, and shown;
        a refresh is issued to confirm it.
        """
        self._leave_provisional()
        trip = generated.to_trip()
        self._optimistic[trip.id] = self._ticket_seq
        self._upsert(trip)
        self._select(trip.id)
        view = self._enter(ViewName.itinerary, "itinerary generated")
        self.request_refresh()
        return view

    def request_refresh(self) -> int:
        """Queue a trip list refresh; returns its ticket."""
        ticket = self._next_ticket()
        self._commands.append(RefreshTrips(ticket=ticket))
        return ticket

    def on_trips_refreshed(self, trips: list[Trip], ticket: int | None = None) -> bool:
        """Apply a refreshed trip list.

        Args:
            trips: Trip list from the trip directory
            ticket: Ticket of the refresh request; None for an unsolicited list

        Returns:
            False if the completion was superseded and ignored
        """
        if ticket is not None and ticket < self._applied_ticket:
            logger.info(
                f"[machine] ignoring superseded refresh ticket={ticket} "
                f"applied={self._applied_ticket}"
            )
            return False

        effective = ticket if ticket is not None else self._next_ticket()
        self._applied_ticket = max(self._applied_ticket, effective)

        if self._provisional:
            # First real list after a degraded start
            self._leave_provisional()
            self._replace_trips(trips)
            self._clear_degraded()
            self._resume_selection()
            return True

        incoming = {trip.id for trip in trips}
        merged = list(trips)
        for trip_id, created_before in list(self._optimistic.items()):
            if trip_id in incoming:
                del self._optimistic[trip_id]
            elif effective > created_before:
                # Requested after the create and still missing
                logger.warning(f"[machine] optimistic trip_id={trip_id} not confirmed, dropping")
                del self._optimistic[trip_id]
            else:
                optimistic = self._find(trip_id)
                if optimistic is not None:
                    merged.append(optimistic)

        self._replace_trips(merged)
        self._confirm_edits(incoming, effective)
        self._clear_degraded()
        self._reconcile()
        return True

    def on_trip_reloaded(self, trip: Trip, ticket: int | None = None) -> bool:
        """Apply a single reloaded trip (after a day save)."""
        if ticket is not None and ticket < self._applied_ticket:
            logger.info(f"[machine] ignoring superseded reload trip_id={trip.id} ticket={ticket}")
            return False

        effective = ticket if ticket is not None else self._next_ticket()
        self._optimistic.pop(trip.id, None)
        self._upsert(trip)
        self._confirm_edits({trip.id}, effective)
        self._clear_degraded()
        self._reconcile()
        return True

    def on_push_event(self, event: PushEvent) -> None:
        """Fold a push event through the realtime adapter."""
        self.realtime.on_push_event(event)

    def apply_trip_update(self, trip_id: int, updates: dict[str, Any]) -> bool:
        """Shallow-merge server-pushed fields into the trip and its snapshot."""
        trip = self._find(trip_id)
        if trip is None:
            return False
        try:
            merged = trip.merged(updates)
        except ValidationError as e:
            logger.warning(f"[machine] rejecting update for trip_id={trip_id}: {e}")
            return False

        self._upsert(merged)
        if self.selection.get_selected() == trip_id:
            self._snapshot = merged
        return True

    def on_flights_loaded(self, trip_id: int, flights: list[BookedFlight]) -> None:
        self.flights[trip_id] = list(flights)

    # ------------------------------------------------------------------
    # Local edits and trip actions
    # ------------------------------------------------------------------

    def edit_day(self, number: int, title: str | None, activities: list[str]) -> bool:
        """Optimistically replace a day of the selected trip and queue its save.

        The edit stays pending until a reload issued after the save
        acknowledgement reflects it.

        Returns:
            False if no trip is selected or the trips are placeholders
        """
        trip = self._resolve()
        if trip is None or self._provisional:
            return False

        cleaned = [clean_activity_line(a) for a in activities]
        day = Day(
            number=number,
            title=(title or "").strip() or DEFAULT_DAY_TITLE,
            activities=[a for a in cleaned if a],
        )
        day.total_cost = recompute_day_total(day)

        self._edits[(trip.id, number)] = DayEdit(trip_id=trip.id, day=day)
        self._commands.append(
            SaveDay(
                trip_id=trip.id,
                day_number=number,
                title=day.title,
                activities=tuple(day.activities),
            )
        )
        return True

    def on_day_saved(self, trip_id: int, number: int) -> None:
        """Save acknowledged: mark the edit saved and queue a confirming reload."""
        edit = self._edits.get((trip_id, number))
        if edit is None:
            return
        edit.status = EditStatus.saved
        edit.saved_at_ticket = self._ticket_seq
        self._commands.append(ReloadTrip(trip_id=trip_id, ticket=self._next_ticket()))

    def on_day_save_failed(self, trip_id: int, number: int, error: str) -> None:
        """Save rejected: drop the overlay so the server text shows again."""
        self._edits.pop((trip_id, number), None)
        self.on_collaborator_failure("save_day", error)

    def activate_trip(self, trip_id: int) -> None:
        """Ask the server to make ``trip_id`` the active trip.

        Status is never changed locally; the follow-up refresh carries it.
        """
        self._commands.append(ActivateTrip(trip_id=trip_id))

    def deactivate_trip(self, trip_id: int) -> None:
        self._commands.append(DeactivateTrip(trip_id=trip_id))

    def on_collaborator_failure(self, operation: str, error: str) -> None:
        """Enter degraded mode; the current view stays renderable."""
        self.degraded = True
        self.degraded_reason = f"{operation}: {error}"
        self._metrics.inc_collaborator_failure(operation)
        self._log.log_collaborator_failure(operation, error)
        if self.selection.get_view() is None:
            self._enter(ViewName.create, "degraded start")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resume_selection(self) -> ViewName:
        saved_id = self.selection.get_selected()
        saved_trip = self._find(saved_id)
        if saved_trip is not None:
            self._snapshot = saved_trip
            return self._enter(self.selection.get_view() or ViewName.itinerary, "resumed selection")

        active = next((t for t in self._trips if t.status == TripStatus.active), None)
        if active is not None:
            self._select(active.id)
            return self._enter(ViewName.itinerary, "active trip")

        self._select(None)
        return self._enter(ViewName.create, "no active trip")

    def _leave_provisional(self) -> None:
        if self._provisional:
            self._provisional = False
            self.selection.release()

    def _current_view(self) -> ViewName:
        return self.selection.get_view() or ViewName.create

    def _next_ticket(self) -> int:
        self._ticket_seq += 1
        return self._ticket_seq

    def _find(self, trip_id: int | None) -> Trip | None:
        if trip_id is None:
            return None
        return next((t for t in self._trips if t.id == trip_id), None)

    def _resolve(self) -> Trip | None:
        return self._find(self.selection.get_selected())

    def _select(self, trip_id: int | None) -> None:
        self.selection.set_selected(trip_id)
        self._snapshot = self._find(trip_id)

    def _replace_trips(self, trips: list[Trip]) -> None:
        self._trips = list(trips)

    def _upsert(self, trip: Trip) -> None:
        for i, existing in enumerate(self._trips):
            if existing.id == trip.id:
                self._trips[i] = trip
                return
        self._trips.append(trip)

    def _reconcile(self) -> None:
        # Re-derive the snapshot from the latest list, never keep a stale one
        self._snapshot = self._resolve()
        view = self._current_view()
        if view in TRIP_SCOPED_VIEWS and self._snapshot is None:
            self._enter(view, "trip no longer available")

    def _confirm_edits(self, trip_ids: set[int], ticket: int) -> None:
        for key, edit in list(self._edits.items()):
            if (
                edit.trip_id in trip_ids
                and edit.status == EditStatus.saved
                and edit.saved_at_ticket is not None
                and ticket > edit.saved_at_ticket
            ):
                del self._edits[key]

    def _clear_degraded(self) -> None:
        self.degraded = False
        self.degraded_reason = None

    def _parsed_days(self, trip: Trip) -> list[Day]:
        cache = self._parse_cache
        if cache is None or cache[0] != trip.id or cache[1] != trip.itinerary:
            days = parse_itinerary(trip.itinerary)
            if not days:
                self._metrics.inc_parse("empty")
            elif len(days) == 1 and days[0].title == FALLBACK_DAY_TITLE:
                self._metrics.inc_parse("fallback")
            else:
                self._metrics.inc_parse("parsed")
            cache = (trip.id, trip.itinerary, days)
            self._parse_cache = cache
        return [day.model_copy(deep=True) for day in cache[2]]

    def _enter(self, view: ViewName, reason: str) -> ViewName:
        previous = self.selection.get_view()
        trip_id = self.selection.get_selected()

        if view in TRIP_SCOPED_VIEWS:
            trip = self._resolve()
            if trip is None:
                self._log.log_guard_redirect(view, trip_id)
                self._metrics.inc_guard_redirect(view.value)
                view = ViewName.create
                reason = f"{reason}; no resolvable trip"
            else:
                self._snapshot = trip
                if (
                    previous in BOOKING_VIEWS
                    and view == ViewName.itinerary
                    and not self._provisional
                ):
                    self._commands.append(RefreshTripFlights(trip_id=trip.id))

        self.selection.set_view(view)
        if previous != view:
            self._metrics.inc_transition(previous.value if previous else "start", view.value)
            self._log.log_transition(previous, view, trip_id, reason)
        return view
