"""Custom exception hierarchy for tooncraft."""

from __future__ import annotations


class ToonCraftError(Exception):
    """Base class for all custom errors raised by tooncraft."""


# --- 3-layer hierarchy ---

class DomainError(ToonCraftError):
    """Base class for domain-level errors."""


class InfrastructureError(ToonCraftError):
    """Base class for infrastructure-level errors."""


class ApplicationError(ToonCraftError):
    """Base class for application-level errors."""


# --- Domain errors ---

class ValidationError(DomainError, ValueError):
    """Raised when an input lies outside its domain (zoom, dimensions, ranges)."""


# --- Infrastructure errors ---

class DecodeError(InfrastructureError):
    """Raised when source bytes cannot be interpreted as a raster."""


class EncodeError(InfrastructureError):
    """Raised when the output raster cannot be encoded."""


# --- Application errors ---

class RenderError(ApplicationError):
    """Raised when the computed crop is degenerate or the output cannot be allocated."""


class SessionBusyError(ApplicationError):
    """Raised when the session is mutated while a save is in flight."""


class SessionClosedError(ApplicationError):
    """Raised when a saved or cancelled session is used again."""


# --- Settings ---

class SettingsError(ToonCraftError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
