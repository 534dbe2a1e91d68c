"""Facade module coordinating image adjustment executors.

This module provides the public API for the colour pipeline, selecting the
executor requested by the caller (or the environment) and falling back to the
NumPy implementation when the JIT kernel cannot run.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Optional, Union

import numpy as np

from ...config import (
    EXECUTOR_AUTO,
    EXECUTOR_ENV,
    EXECUTOR_JIT,
    EXECUTOR_NUMPY,
    EXECUTORS,
)
from ...errors import ValidationError
from ...models.types import AdjustmentState
from .jit_executor import JIT_AVAILABLE, apply_adjustments_jit
from .numpy_executor import apply_adjustments_array
from .utils import PixelBuffer, _prepare_pixel_view

_LOGGER = logging.getLogger(__name__)

Adjustments = Union[AdjustmentState, Mapping[str, float]]


def resolve_executor(requested: Optional[str] = None) -> str:
    """Return the concrete executor name (``"jit"`` or ``"numpy"``) to use."""

    name = requested or os.environ.get(EXECUTOR_ENV) or EXECUTOR_AUTO
    name = name.strip().lower()
    if name not in EXECUTORS:
        raise ValidationError(f"unknown executor {name!r}; expected one of {', '.join(EXECUTORS)}")
    if name == EXECUTOR_AUTO:
        return EXECUTOR_JIT if JIT_AVAILABLE else EXECUTOR_NUMPY
    if name == EXECUTOR_JIT and not JIT_AVAILABLE:
        _LOGGER.warning("JIT executor requested but unavailable; using NumPy")
        return EXECUTOR_NUMPY
    return name


def _coerce_adjustments(adjustments: Adjustments) -> AdjustmentState:
    if isinstance(adjustments, AdjustmentState):
        adjustments.validate()
        return adjustments
    return AdjustmentState.from_mapping(dict(adjustments))


def apply_adjustments(
    pixels: PixelBuffer,
    width: int,
    height: int,
    adjustments: Adjustments,
    *,
    executor: Optional[str] = None,
) -> np.ndarray:
    """Return a copy of *pixels* with *adjustments* applied.

    The caller's buffer is never modified, so the decoded source can be reused
    as the immutable input for every preview.  Stages run in the fixed order
    brightness, contrast, saturation, grayscale, sepia on the RGB channels;
    alpha is copied through.

    Parameters
    ----------
    pixels:
        RGBA pixels, either as an ``(height, width, 4)`` ``uint8`` array or a
        flat buffer of ``width * height * 4`` bytes.
    width, height:
        Raster dimensions the buffer is checked against.
    adjustments:
        An :class:`AdjustmentState` or a mapping of slider values.  Missing
        mapping keys default to identity.
    executor:
        ``"numpy"``, ``"jit"`` or ``"auto"``; ``None`` reads the
        ``TOONCRAFT_EXECUTOR`` environment variable.

    Returns
    -------
    numpy.ndarray
        ``uint8`` array shaped like the input: ``(height, width, 4)`` for 3-D
        input, flat otherwise.
    """

    view = _prepare_pixel_view(pixels, width, height)
    state = _coerce_adjustments(adjustments)
    flat_input = not (isinstance(pixels, np.ndarray) and pixels.ndim == 3)

    result = np.ascontiguousarray(view).copy()
    if not state.is_identity():
        factors = (
            state.brightness / 100.0,
            state.contrast / 100.0,
            state.saturate / 100.0,
            state.grayscale / 100.0,
            state.sepia / 100.0,
        )
        chosen = resolve_executor(executor)
        if chosen == EXECUTOR_JIT:
            try:
                apply_adjustments_jit(result, *factors)
            except (BufferError, RuntimeError, TypeError):
                # Degrade to the vectorised path rather than failing the preview.
                _LOGGER.warning("JIT adjustment kernel failed; falling back to NumPy", exc_info=True)
                result = np.ascontiguousarray(view).copy()
                apply_adjustments_array(result, *factors)
        else:
            apply_adjustments_array(result, *factors)

    if flat_input:
        return result.reshape(-1)
    return result
