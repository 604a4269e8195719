"""Schema helpers for the viewer settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_DRAG_THRESHOLD,
    DEFAULT_ROWS_PER_PAGE,
    DEFAULT_VISIBLE_COLS,
    DEMO_TOTAL_COLS,
    DEMO_TOTAL_ROWS,
    SETTINGS_SCHEMA_ID,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "turbogrid/settings.schema.json",
    "type": "object",
    "required": ["schema", "viewport", "demo"],
    "properties": {
        "schema": {"const": SETTINGS_SCHEMA_ID},
        "viewport": {
            "type": "object",
            "properties": {
                "rows_per_page": {"type": "integer", "minimum": 1},
                "visible_cols": {"type": "integer", "minimum": 1},
                "drag_threshold": {"type": "integer", "minimum": 0},
            },
            "additionalProperties": True,
        },
        "demo": {
            "type": "object",
            "properties": {
                "total_rows": {"type": "integer", "minimum": 0},
                "total_cols": {"type": "integer", "minimum": 0},
                "latency_ms": {"type": "number", "minimum": 0},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": SETTINGS_SCHEMA_ID,
    "viewport": {
        "rows_per_page": DEFAULT_ROWS_PER_PAGE,
        "visible_cols": DEFAULT_VISIBLE_COLS,
        "drag_threshold": DEFAULT_DRAG_THRESHOLD,
    },
    "demo": {
        "total_rows": DEMO_TOTAL_ROWS,
        "total_cols": DEMO_TOTAL_COLS,
        "latency_ms": 0,
    },
}

_SECTIONS = ("viewport", "demo")

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults"]
