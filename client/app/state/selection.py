"""Trip selection store: the single writer of the selected trip and view.

Reads are served from an in-memory mirror; every write goes straight through
to the durable key-value store so a restart resumes the same selection.
While held (degraded start on placeholder data) writes stay in memory.
"""

import logging

from client.app.config import Settings, get_settings
from client.app.models.common import ViewName
from client.app.state.storage import KeyValueStore

logger = logging.getLogger(__name__)


class TripSelectionStore:
    """Selected trip id and current view, mirrored from durable storage."""

    def __init__(self, store: KeyValueStore, settings: Settings | None = None) -> None:
        """Initialize from whatever the durable store holds.

        Args:
            store: Durable key-value store
            settings: Settings providing the storage keys (default: cached settings)
        """
        settings = settings or get_settings()
        self._store = store
        self._trip_key = settings.selected_trip_key
        self._view_key = settings.view_key
        self._selected: int | None = self._load_selected()
        self._view: ViewName | None = self._load_view()
        self._held = False

    def _load_selected(self) -> int | None:
        raw = self._store.get(self._trip_key)
        if raw is None:
            return None
        try:
            trip_id = int(raw)
        except ValueError:
            logger.warning(f"[selection] discarding unreadable {self._trip_key}={raw!r}")
            self._store.remove(self._trip_key)
            return None
        return trip_id

    def _load_view(self) -> ViewName | None:
        raw = self._store.get(self._view_key)
        if raw is None:
            return None
        try:
            return ViewName(raw)
        except ValueError:
            logger.warning(f"[selection] discarding unknown {self._view_key}={raw!r}")
            self._store.remove(self._view_key)
            return None

    @property
    def held(self) -> bool:
        return self._held

    def hold(self) -> None:
        """Stop writing through; changes stay in memory until release()."""
        self._held = True

    def release(self) -> None:
        """Resume writing through, dropping in-memory changes made while held."""
        self._held = False
        self._selected = self._load_selected()
        self._view = self._load_view()

    def get_selected(self) -> int | None:
        """Currently selected trip id."""
        return self._selected

    def set_selected(self, trip_id: int | None) -> None:
        """Select a trip (persisted) or clear the selection (key removed)."""
        self._selected = trip_id
        if self._held:
            return
        if trip_id is None:
            self._store.remove(self._trip_key)
        else:
            self._store.set(self._trip_key, str(trip_id))

    def get_view(self) -> ViewName | None:
        """Last chosen view, or None if never set."""
        return self._view

    def set_view(self, view: ViewName) -> None:
        """Persist the view independently of the selection."""
        self._view = view
        if not self._held:
            self._store.set(self._view_key, view.value)
