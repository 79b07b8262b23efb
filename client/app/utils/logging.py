"""Structured logging for view-state transitions."""

import logging
from typing import Any

from client.app.models.common import ViewName

logger = logging.getLogger(__name__)


class StructuredStateLogger:
    """Structured logger for the trip view state machine."""

    def log_transition(
        self,
        source: ViewName | None,
        target: ViewName,
        trip_id: int | None,
        reason: str,
    ) -> None:
        """Log a view change with structured data."""
        log_data: dict[str, Any] = {
            "from_view": source.value if source else None,
            "to_view": target.value,
            "trip_id": trip_id,
            "reason": reason,
        }
        source_name = source.value if source else "start"
        logger.info(
            f"View transition: {source_name} -> {target.value} ({reason})",
            extra={"structured": log_data},
        )

    def log_guard_redirect(self, requested: ViewName, trip_id: int | None) -> None:
        """Log a trip-scoped view entered without a resolvable trip."""
        log_data: dict[str, Any] = {
            "requested_view": requested.value,
            "trip_id": trip_id,
            "outcome": "redirect_create",
        }
        logger.warning(
            f"View guard: {requested.value} has no resolvable trip, redirecting to create",
            extra={"structured": log_data},
        )

    def log_collaborator_failure(self, operation: str, error: str) -> None:
        """Log a failed collaborator call that put the client in degraded mode."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "outcome": "degraded",
            "error_reason": error,
        }
        logger.warning(
            f"Collaborator failure: {operation} - {error}",
            extra={"structured": log_data},
        )
