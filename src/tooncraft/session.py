"""Editing session: owns the crop and adjustment state between open and save."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .core.aspect import AspectInput, parse_aspect_ratio
from .core.crop_mapper import apply_pan_delta, map_crop
from .core.export import ViewportInput, resolve_viewport, encode_raster, render_raster
from .core.filters.presets import apply_preset
from .errors import SessionBusyError, SessionClosedError, ToonCraftError
from .errors.handler import ErrorHandler, ErrorSeverity
from .events.bus import EventBus
from .events.editor_events import EditCancelledEvent, EditSavedEvent
from .models.types import (
    AdjustmentState,
    CropState,
    EncodedImage,
    OutputRaster,
    SourceImage,
    SourceRect,
)
from .settings.schema import EditorSettings

_LOGGER = logging.getLogger(__name__)


class EditSession:
    """Hold the interactive state for one image from "open editor" to save/cancel.

    The session is the only owner of its :class:`CropState` and
    :class:`AdjustmentState`; both are immutable value objects that are
    replaced on every change and handed to the pure mapper and pipeline.
    Once :meth:`save` succeeds or :meth:`cancel` is called the session is
    closed and every further call raises :class:`SessionClosedError`.
    """

    def __init__(
        self,
        source: SourceImage,
        *,
        settings: Optional[EditorSettings] = None,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self._source = source
        self._settings = settings or EditorSettings.defaults()
        self._events = event_bus
        if error_handler is None and event_bus is not None:
            error_handler = ErrorHandler(_LOGGER, event_bus)
        self._errors = error_handler
        self._crop = CropState()
        self._adjustments = AdjustmentState.identity()
        self._lock = threading.Lock()
        self._saving = False
        self._closed = False

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def source(self) -> SourceImage:
        return self._source

    @property
    def crop(self) -> CropState:
        return self._crop

    @property
    def adjustments(self) -> AdjustmentState:
        return self._adjustments

    @property
    def is_open(self) -> bool:
        return not self._closed

    @property
    def is_saving(self) -> bool:
        return self._saving

    def _check_mutable(self) -> None:
        if self._closed:
            raise SessionClosedError("the editing session has already been closed")
        if self._saving:
            raise SessionBusyError("cannot change the edit while it is being saved")

    # ------------------------------------------------------------------
    # Crop interaction
    # ------------------------------------------------------------------
    def set_aspect_ratio(self, value: AspectInput) -> CropState:
        """Lock the crop to *value* and reset pan and zoom."""

        ratio = parse_aspect_ratio(value)
        with self._lock:
            self._check_mutable()
            self._crop = self._crop.with_aspect_ratio(ratio)
            return self._crop

    def set_zoom(self, zoom: float) -> CropState:
        with self._lock:
            self._check_mutable()
            self._crop = self._crop.with_zoom(zoom)
            return self._crop

    def pan_by(self, dx: float, dy: float) -> CropState:
        """Accumulate a screen-space drag of ``(dx, dy)`` pixels."""

        with self._lock:
            self._check_mutable()
            self._crop = apply_pan_delta(self._crop, dx, dy, self._settings.pan_sensitivity)
            return self._crop

    def reset_crop(self) -> CropState:
        with self._lock:
            self._check_mutable()
            self._crop = CropState(aspect_ratio=self._crop.aspect_ratio)
            return self._crop

    # ------------------------------------------------------------------
    # Adjustments
    # ------------------------------------------------------------------
    def set_adjustment(self, name: str, value: float) -> AdjustmentState:
        with self._lock:
            self._check_mutable()
            self._adjustments = self._adjustments.with_value(name, value)
            return self._adjustments

    def apply_preset(self, name: str) -> AdjustmentState:
        """Reset every adjustment to identity, then apply the preset's values."""

        state = apply_preset(name)
        with self._lock:
            self._check_mutable()
            self._adjustments = state
            return self._adjustments

    def reset_adjustments(self) -> AdjustmentState:
        with self._lock:
            self._check_mutable()
            self._adjustments = AdjustmentState.identity()
            return self._adjustments

    # ------------------------------------------------------------------
    # Preview / save
    # ------------------------------------------------------------------
    def preview_rect(self, viewport: ViewportInput = None) -> SourceRect:
        """Return the source rectangle the current state selects."""

        if self._closed:
            raise SessionClosedError("the editing session has already been closed")
        geometry = resolve_viewport(viewport)
        return map_crop(
            self._source.width,
            self._source.height,
            geometry.width,
            geometry.height,
            self._crop,
        )

    def preview(self, viewport: ViewportInput = None) -> OutputRaster:
        if self._closed:
            raise SessionClosedError("the editing session has already been closed")
        return render_raster(
            self._source,
            self._crop,
            self._adjustments,
            viewport,
            sampling=self._settings.sampling,
            executor=self._settings.executor,
        )

    def save(self, viewport: ViewportInput = None) -> EncodedImage:
        """Render the current state and close the session.

        The crop and adjustments are snapshotted when the call starts; edits
        are rejected with :class:`SessionBusyError` until it returns.  On
        failure the error is reported, the session stays open with its state
        untouched, and the exception propagates to the caller.
        """

        with self._lock:
            self._check_mutable()
            self._saving = True
            crop = self._crop
            adjustments = self._adjustments

        try:
            raster = render_raster(
                self._source,
                crop,
                adjustments,
                viewport,
                sampling=self._settings.sampling,
                executor=self._settings.executor,
            )
            encoded = encode_raster(raster, self._settings.export_format)
        except ToonCraftError as exc:
            self._report(exc, crop, adjustments)
            raise
        finally:
            with self._lock:
                self._saving = False

        with self._lock:
            self._closed = True
        if self._events is not None:
            self._events.publish(EditSavedEvent(
                width=encoded.width,
                height=encoded.height,
                format=encoded.format,
                byte_count=len(encoded.data),
            ))
        return encoded

    def cancel(self) -> None:
        """Discard the session without producing an image."""

        with self._lock:
            self._check_mutable()
            self._closed = True
        if self._events is not None:
            self._events.publish(EditCancelledEvent())

    def _report(self, error: ToonCraftError, crop: CropState, adjustments: AdjustmentState) -> None:
        context = {
            "crop": crop,
            "adjustments": adjustments.as_mapping(),
            "source_size": (self._source.width, self._source.height),
        }
        if self._errors is not None:
            self._errors.handle(error, ErrorSeverity.ERROR, context)
        else:
            _LOGGER.error("Saving edit failed: %s", error)
