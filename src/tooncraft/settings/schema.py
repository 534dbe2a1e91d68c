"""Schema helpers for the editor settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as JSONSchemaValidationError

from ..config import (
    DEFAULT_SAMPLING,
    EXECUTOR_AUTO,
    EXECUTOR_ENV,
    EXECUTORS,
    LOG_LEVEL_ENV,
    OUTPUT_FORMAT,
    OUTPUT_SUFFIXES,
    PAN_SENSITIVITY,
    SAMPLING_MODES,
)
from ..errors import SettingsValidationError

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "tooncraft/settings.schema.json",
    "type": "object",
    "required": ["schema", "editor", "export", "logging"],
    "properties": {
        "schema": {"const": "tooncraft/settings@1"},
        "editor": {
            "type": "object",
            "properties": {
                "pan_sensitivity": {"type": "number", "exclusiveMinimum": 0},
                "sampling": {"type": "string", "enum": list(SAMPLING_MODES)},
                "executor": {"type": "string", "enum": list(EXECUTORS)},
            },
            "additionalProperties": True,
        },
        "export": {
            "type": "object",
            "properties": {
                "format": {"type": "string", "enum": list(OUTPUT_SUFFIXES)},
            },
            "additionalProperties": True,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                },
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "tooncraft/settings@1",
    "editor": {
        "pan_sensitivity": PAN_SENSITIVITY,
        "sampling": DEFAULT_SAMPLING,
        "executor": EXECUTOR_AUTO,
    },
    "export": {
        "format": OUTPUT_FORMAT,
    },
    "logging": {
        "level": "WARNING",
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_SECTIONS = ("editor", "export", "logging")


def _apply_env_overrides(merged: dict[str, Any]) -> None:
    level = os.environ.get(LOG_LEVEL_ENV)
    if level:
        merged["logging"]["level"] = level.strip().upper()
    executor = os.environ.get(EXECUTOR_ENV)
    if executor:
        merged["editor"]["executor"] = executor.strip().lower()


def merge_with_defaults(data: dict[str, Any] | None, *, use_env: bool = False) -> dict[str, Any]:
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
    if use_env:
        _apply_env_overrides(merged)
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


@dataclass(frozen=True)
class EditorSettings:
    """Resolved settings consumed by an editing session."""

    pan_sensitivity: float = PAN_SENSITIVITY
    sampling: str = DEFAULT_SAMPLING
    executor: str = EXECUTOR_AUTO
    export_format: str = OUTPUT_FORMAT
    log_level: str = "WARNING"

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> EditorSettings:
        editor = data.get("editor", {})
        return cls(
            pan_sensitivity=float(editor.get("pan_sensitivity", PAN_SENSITIVITY)),
            sampling=str(editor.get("sampling", DEFAULT_SAMPLING)),
            executor=str(editor.get("executor", EXECUTOR_AUTO)),
            export_format=str(data.get("export", {}).get("format", OUTPUT_FORMAT)),
            log_level=str(data.get("logging", {}).get("level", "WARNING")),
        )

    @classmethod
    def defaults(cls) -> EditorSettings:
        try:
            merged = merge_with_defaults(None, use_env=True)
        except JSONSchemaValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        return cls.from_mapping(merged)


__all__ = [
    "DEFAULT_SETTINGS",
    "EditorSettings",
    "SETTINGS_SCHEMA",
    "merge_with_defaults",
    "validate_settings",
]
