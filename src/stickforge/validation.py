"""Validation utilities for StickForge export documents."""

from __future__ import annotations

import json
from pathlib import Path

import jsonschema

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "baked.schema.json"


def schema_path() -> Path:
    return _SCHEMA_PATH


def validate_baked_json(data: dict[str, object]) -> None:
    """Validate a baked export dict against baked.schema.json.

    Parameters
    ----------
    data:
        The export document to validate.

    Raises
    ------
    jsonschema.ValidationError
        If the data does not conform to the schema.
    """
    schema = json.loads(_SCHEMA_PATH.read_text())
    jsonschema.validate(data, schema)
