"""Demo trips shown when the trip directory cannot be reached."""

from datetime import date

from client.app.models.common import TripStatus
from client.app.models.trip import Trip

DEMO_ITINERARY = (
    "**Day 1: Arrival in Barcelona**\n"
    "* Check into hotel in the Gothic Quarter\n"
    "* Morning Activity (10:00 AM): Walk through the Gothic Quarter\n"
    "* Lunch: Tapas at La Boqueria\n"
    "* Cost: $35\n"
    "**Day 2: Gaudí Day**\n"
    "* Visit the Sagrada Familia (book ahead)\n"
    "* Cost: $30\n"
    "* Afternoon Activity: Park Güell\n"
    "* Dinner: Seafood paella in Barceloneta\n"
    "* Price Range: $40-$60\n"
)


def demo_trips() -> list[Trip]:
    """Return the demo trip list."""
    return [
        Trip(
            id=1,
            title="Barcelona Adventure",
            destination="Barcelona, Spain",
            duration=7,
            budget=1500,
            status=TripStatus.active,
            start_date=date(2024, 3, 15),
            end_date=date(2024, 3, 22),
            itinerary=DEMO_ITINERARY,
        )
    ]
