"""HTTP client for the trip directory and itinerary source."""

import logging
from typing import Any

import httpx

from client.app.config import Settings, get_settings
from client.app.models.trip import BookedFlight, GeneratedTrip, ItineraryRequest, Trip

logger = logging.getLogger(__name__)


class TripApiError(Exception):
    """Backend unreachable or returned an error envelope."""

    def __init__(self, operation: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason
        self.status_code = status_code


class TripApiClient:
    """Async client for the backend's ``/api`` routes.

    Responses use the envelope ``{"success": bool, "data": ..., "error": str}``.
    No retries: a failure raises TripApiError and the caller decides.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize API client.

        Args:
            settings: Settings with base URL, token and timeout (default: cached settings)
            client: Optional httpx client (for testing with mocks)
        """
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._settings.api_timeout_s)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if not self._settings.api_token:
            return {}
        return {"Authorization": f"Bearer {self._settings.api_token}"}

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self._settings.api_base_url.rstrip('/')}{path}"
        try:
            response = await self._client.request(
                method, url, json=json, params=params, headers=self._headers()
            )
        except httpx.HTTPError as e:
            raise TripApiError(operation, f"{type(e).__name__}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            reason = body.get("error") if isinstance(body, dict) else None
            raise TripApiError(
                operation,
                reason or f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        if not isinstance(body, dict) or not body.get("success", False):
            reason = body.get("error") if isinstance(body, dict) else None
            raise TripApiError(operation, reason or "unsuccessful response", response.status_code)

        logger.debug(f"[api] {operation} {method} {path} -> {response.status_code}")
        return body.get("data")

    async def list_trips(self, limit: int | None = None) -> list[Trip]:
        """Fetch the user's trips."""
        limit = limit or self._settings.trips_page_limit
        data = await self._request("list_trips", "GET", "/trips", params={"limit": limit})
        return [Trip.model_validate(item) for item in data or []]

    async def get_trip(self, trip_id: int) -> Trip:
        """Fetch a single trip."""
        data = await self._request("get_trip", "GET", f"/trips/{trip_id}")
        return Trip.model_validate(data)

    async def generate_itinerary(self, request: ItineraryRequest) -> GeneratedTrip:
        """Create a trip with a generated itinerary."""
        data = await self._request(
            "generate_itinerary",
            "POST",
            "/ai/generate-itinerary",
            json=request.model_dump(mode="json", by_alias=True),
        )
        return GeneratedTrip.from_response(data or {})

    async def update_day(
        self, trip_id: int, day_number: int, title: str, activities: list[str]
    ) -> None:
        """Replace one day of a trip's itinerary."""
        await self._request(
            "update_day",
            "PUT",
            f"/trips/{trip_id}/days/{day_number}",
            json={"title": title, "activities": activities},
        )

    async def activate_trip(self, trip_id: int) -> None:
        await self._request("activate_trip", "PATCH", f"/trips/{trip_id}/activate")

    async def deactivate_trip(self, trip_id: int) -> None:
        await self._request("deactivate_trip", "PATCH", f"/trips/{trip_id}/deactivate")

    async def get_trip_flights(self, trip_id: int) -> list[BookedFlight]:
        """Fetch flights booked against a trip."""
        data = await self._request("get_trip_flights", "GET", f"/trips/{trip_id}/flights")
        return [BookedFlight.model_validate(item) for item in data or []]
