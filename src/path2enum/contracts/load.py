"""Load and validate JSON instances against the bundled schemas.

Usage::

    from path2enum.contracts.load import validate_instance, validate_file

    validate_instance(result.to_dict(), "compiled_set.schema.json")
    validate_file(Path("out/icons.json"))
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"
COMPILED_SET_SCHEMA = "compiled_set.schema.json"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/path2enum/data/schemas/`` relative to this file
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("path2enum") / SCHEMA_DIR / name) as p:
        return p


def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str = COMPILED_SET_SCHEMA) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.  JSON Schema cannot
    express cross-item uniqueness of one property, so distinct identifiers
    and paths are checked here as well.
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=instance, schema=schema)
    if schema_name == COMPILED_SET_SCHEMA:
        _check_unique_entries(instance)


def _check_unique_entries(instance: dict[str, Any]) -> None:
    for key in ("identifier", "logical_path"):
        values = [entry[key] for entry in instance["entries"]]
        if len(values) != len(set(values)):
            raise jsonschema.ValidationError(f"entries[].{key} values must be unique")
    identifiers = [entry["identifier"] for entry in instance["entries"]]
    if identifiers != sorted(identifiers):
        raise jsonschema.ValidationError("entries must be sorted by identifier")


def validate_file(instance_path: Path, schema_name: str = COMPILED_SET_SCHEMA) -> None:
    """Load a JSON file and validate it against the named schema."""
    instance = json.loads(instance_path.read_text(encoding="utf-8"))
    validate_instance(instance, schema_name)
