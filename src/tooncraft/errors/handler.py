"""Central reporting for failures surfaced to the user.

The handler logs a failure at the level matching its severity, publishes an
:class:`ErrorOccurredEvent` so other listeners (a status bar, a history log)
can react, and forwards ERROR/CRITICAL messages to an optional UI callback.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from ..events.bus import Event, EventBus


class ErrorSeverity(Enum):
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: dict[str, Any] = field(default_factory=dict)


class ErrorHandler:
    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]) -> None:
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        details = dict(context or {})
        self._logger.log(
            severity.value,
            "%s: %s",
            type(error).__name__,
            error,
            extra={"context": details},
        )
        self._events.publish(ErrorOccurredEvent(error=error, severity=severity, context=details))

        if self._ui_callback is not None and severity.value >= logging.ERROR:
            self._ui_callback(str(error), severity)
