"""JSON schema validation for provider payloads and record-store rows."""
import json
from functools import lru_cache
from pathlib import Path

import jsonschema

from core import config


def load_schema(schema_path: Path) -> dict:
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=None)
def named_schema(name: str) -> dict:
    """Load `core/schemas/<name>.schema.json` once."""
    return load_schema(config.SCHEMAS_DIR / f"{name}.schema.json")


def validate(data: dict, schema: dict) -> list[str]:
    """Return list of validation error messages, empty if valid."""
    try:
        jsonschema.validate(instance=data, schema=schema)
        return []
    except jsonschema.ValidationError as e:
        return [e.message]
    except jsonschema.SchemaError as e:
        return [f"Schema error: {e.message}"]
