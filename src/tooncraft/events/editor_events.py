"""Events published by an editing session."""

from __future__ import annotations

from dataclasses import dataclass

from .bus import Event


@dataclass(kw_only=True)
class EditSavedEvent(Event):
    """Emitted after a session produced its output image."""

    width: int
    height: int
    format: str
    byte_count: int


@dataclass(kw_only=True)
class EditCancelledEvent(Event):
    """Emitted when the user discards a session without saving."""
