"""Settings file management with validation and change notifications."""

from __future__ import annotations

import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema.exceptions import ValidationError as JSONSchemaValidationError
from PySide6.QtCore import QObject, Signal, Slot

from ..config import SETTINGS_DIR_NAME
from ..errors import SettingsLoadError, SettingsValidationError
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, EditorSettings, merge_with_defaults


def default_settings_path() -> Path:
    """Return the default settings.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / SETTINGS_DIR_NAME / "settings.json"
        return Path.home() / "AppData" / "Roaming" / SETTINGS_DIR_NAME / "settings.json"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / SETTINGS_DIR_NAME / "settings.json"
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / SETTINGS_DIR_NAME / "settings.json"
    return Path.home() / ".config" / SETTINGS_DIR_NAME / "settings.json"


def _read_payload(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    try:
        payload = read_json(path)
    except (OSError, ValueError) as exc:
        raise SettingsLoadError(f"{path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise SettingsLoadError(f"{path}: expected a JSON object")
    return payload


def load_editor_settings(path: Path | None = None) -> EditorSettings:
    """Return the settings stored at *path* (or the default location).

    A missing file yields the defaults.  Nothing is written back, and the
    environment overrides are applied on top of the file.
    """

    payload = _read_payload(path or default_settings_path())
    try:
        merged = merge_with_defaults(payload, use_env=True)
    except JSONSchemaValidationError as exc:
        raise SettingsValidationError(exc.message) from exc
    return EditorSettings.from_mapping(merged)


class SettingsManager(QObject):
    """Load, validate and persist editor settings.

    Environment overrides (``TOONCRAFT_LOG_LEVEL``, ``TOONCRAFT_EXECUTOR``) are
    applied when values are read and never written back to disk.
    """

    settingsChanged = Signal(str, object)

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the settings JSON from disk, creating defaults if missing."""

        path = self._path or default_settings_path()
        self._path = path
        payload = _read_payload(path)
        try:
            self._data = merge_with_defaults(payload)
        except JSONSchemaValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()

    def _effective(self) -> dict[str, Any]:
        try:
            return merge_with_defaults(self._data, use_env=True)
        except JSONSchemaValidationError as exc:
            raise SettingsValidationError(exc.message) from exc

    @Slot(str, result="QVariant")
    @Slot(str, "QVariant", result="QVariant")
    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target: Any = self._effective()
        for part in key.split("."):
            if not isinstance(target, dict) or part not in target:
                return default
            target = target[part]
        return target

    @Slot(str, "QVariant")
    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value* and persist the change."""

        if isinstance(value, Path):
            value = str(value)

        candidate = deepcopy(self._data)
        parts = key.split(".")
        target: dict[str, Any] = candidate
        for part in parts[:-1]:
            branch = target.get(part)
            if not isinstance(branch, dict):
                branch = {}
                target[part] = branch
            target = branch
        target[parts[-1]] = value
        try:
            self._data = merge_with_defaults(candidate)
        except JSONSchemaValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()
        self.settingsChanged.emit(key, value)

    def editor_settings(self) -> EditorSettings:
        """Return the resolved settings snapshot used by editing sessions."""

        return EditorSettings.from_mapping(self._effective())

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _write(self) -> None:
        path = self._path or default_settings_path()
        self._path = path
        write_json(path, self._data)


__all__ = ["SettingsManager", "default_settings_path", "load_editor_settings"]
