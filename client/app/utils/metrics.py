"""Prometheus metrics for the client core."""

from prometheus_client import Counter

view_transitions_total = Counter(
    "view_transitions_total",
    "Total view transitions",
    ["from_view", "to_view"],
)

view_guard_redirects_total = Counter(
    "view_guard_redirects_total",
    "Trip-scoped views redirected to create for lack of a trip",
    ["requested_view"],
)

push_events_total = Counter(
    "push_events_total",
    "Push events folded into client state",
    ["kind"],
)

collaborator_failures_total = Counter(
    "collaborator_failures_total",
    "Failed collaborator calls",
    ["operation"],
)

itinerary_parses_total = Counter(
    "itinerary_parses_total",
    "Itinerary parses by outcome",
    ["outcome"],
)


class PrometheusStateMetrics:
    """Prometheus-based state metrics implementation."""

    def inc_transition(self, from_view: str, to_view: str) -> None:
        """Increment transition counter."""
        view_transitions_total.labels(from_view=from_view, to_view=to_view).inc()

    def inc_guard_redirect(self, requested_view: str) -> None:
        """Increment guard redirect counter."""
        view_guard_redirects_total.labels(requested_view=requested_view).inc()

    def inc_push_event(self, kind: str) -> None:
        """Increment push event counter."""
        push_events_total.labels(kind=kind).inc()

    def inc_collaborator_failure(self, operation: str) -> None:
        """Increment collaborator failure counter."""
        collaborator_failures_total.labels(operation=operation).inc()

    def inc_parse(self, outcome: str) -> None:
        """Increment parse outcome counter (parsed, fallback, empty)."""
        itinerary_parses_total.labels(outcome=outcome).inc()
