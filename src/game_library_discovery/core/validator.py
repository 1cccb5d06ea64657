"""JSON Schema validation for emitted catalogs.

This module loads the packaged catalog schema and validates the entries
the command layer receives.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .types import CatalogEntry

# game_library_discovery/core/validator.py -> game_library_discovery/schemas/
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "catalog.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the JSON schema from disk.

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_catalog(entries: list[CatalogEntry]) -> None:
    """Validate a catalog against the JSON Schema.

    Args:
        entries: Catalog entries to validate

    Raises:
        ValidationError: If the catalog doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    jsonschema.validate(instance=entries, schema=load_schema())


def validate_catalog_with_error_details(
    entries: list[CatalogEntry],
) -> tuple[bool, str | None]:
    """Validate a catalog and return a readable error message.

    Args:
        entries: Catalog entries to validate

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_catalog(entries)
        return True, None
    except ValidationError as e:
        return False, describe_entry_error(e, entries)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"


def describe_entry_error(error: ValidationError, entries: list[CatalogEntry]) -> str:
    """Name the catalog entry and field a validation error refers to.

    Example:
        "Entry 3 (epic, 'Fortnite') field source: 'gog' is not one of ..."
    """
    path = list(error.path)
    if not path or not isinstance(path[0], int):
        return f"Catalog validation error: {error.message}"

    index = path[0]
    entry = entries[index] if index < len(entries) else {}
    label = f"Entry {index}"
    if isinstance(entry, dict):
        label += f" ({entry.get('source', '?')}, {entry.get('display_name', '?')!r})"

    field_path = ".".join(str(p) for p in path[1:])
    if field_path:
        return f"{label} field {field_path}: {error.message}"
    return f"{label}: {error.message}"
