"""Export JSON schemas for Trip, Day and push events."""

import json
from pathlib import Path

from pydantic import TypeAdapter

from client.app.models import ActivityLine, Day, PushEvent, Trip


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    schemas = {
        "Trip": Trip.model_json_schema(),
        "Day": Day.model_json_schema(),
        "ActivityLine": TypeAdapter(ActivityLine).json_schema(),
        "PushEvent": TypeAdapter(PushEvent).json_schema(),
    }

    for name, schema in schemas.items():
        path = schemas_dir / f"{name}.schema.json"
        with open(path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Exported {name} schema to {path}")


if __name__ == "__main__":
    main()
