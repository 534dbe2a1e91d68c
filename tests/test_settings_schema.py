import pytest
from jsonschema.exceptions import ValidationError as JSONSchemaValidationError

from tooncraft.errors import SettingsValidationError
from tooncraft.settings.schema import DEFAULT_SETTINGS, EditorSettings, merge_with_defaults


def test_merge_keeps_unspecified_defaults():
    merged = merge_with_defaults({"editor": {"sampling": "nearest"}})
    assert merged["editor"]["sampling"] == "nearest"
    assert merged["editor"]["pan_sensitivity"] == 1.5
    assert merged["export"] == DEFAULT_SETTINGS["export"]


def test_merge_does_not_mutate_defaults():
    merge_with_defaults({"editor": {"executor": "numpy"}})
    assert DEFAULT_SETTINGS["editor"]["executor"] == "auto"


def test_merge_rejects_invalid_values():
    with pytest.raises(JSONSchemaValidationError):
        merge_with_defaults({"editor": {"pan_sensitivity": 0}})
    with pytest.raises(JSONSchemaValidationError):
        merge_with_defaults({"export": {"format": "GIF"}})


def test_environment_applies_only_when_requested(monkeypatch):
    monkeypatch.setenv("TOONCRAFT_EXECUTOR", "NumPy")
    assert merge_with_defaults(None)["editor"]["executor"] == "auto"
    assert merge_with_defaults(None, use_env=True)["editor"]["executor"] == "numpy"


def test_editor_settings_defaults():
    settings = EditorSettings.defaults()
    assert settings == EditorSettings()
    assert settings.sampling == "bilinear"
    assert settings.export_format == "PNG"


def test_editor_settings_rejects_bad_environment(monkeypatch):
    monkeypatch.setenv("TOONCRAFT_LOG_LEVEL", "chatty")
    with pytest.raises(SettingsValidationError):
        EditorSettings.defaults()
