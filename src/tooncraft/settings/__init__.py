"""Editor settings.  :class:`SettingsManager` lives in ``.manager`` (requires Qt)."""

from .schema import DEFAULT_SETTINGS, EditorSettings, merge_with_defaults, validate_settings

__all__ = ["DEFAULT_SETTINGS", "EditorSettings", "merge_with_defaults", "validate_settings"]
