"""Pure per-pixel adjustment algorithms.

Each stage works on channel values in ``[0.0, 255.0]`` and clamps its result
before the next stage sees it.  The functions are Numba JIT compiled so the
kernel in :mod:`.jit_executor` can inline them; they remain callable from
plain Python for tests and one-off conversions.
"""

from __future__ import annotations

import math

from numba import jit

from ...config import CHANNEL_MAX, CONTRAST_PIVOT, LUMA_WEIGHTS, SEPIA_MATRIX

# Numba freezes module globals at compile time, so the matrices are unpacked
# into plain floats.
_LUMA_R, _LUMA_G, _LUMA_B = LUMA_WEIGHTS
_SEPIA_RR, _SEPIA_RG, _SEPIA_RB = SEPIA_MATRIX[0]
_SEPIA_GR, _SEPIA_GG, _SEPIA_GB = SEPIA_MATRIX[1]
_SEPIA_BR, _SEPIA_BG, _SEPIA_BB = SEPIA_MATRIX[2]
_MAX = CHANNEL_MAX
_PIVOT = CONTRAST_PIVOT


@jit(nopython=True, inline="always")
def _clamp_channel(value: float) -> float:
    """Clamp *value* to the inclusive ``[0.0, 255.0]`` range."""

    if value < 0.0:
        return 0.0
    if value > _MAX:
        return _MAX
    return value


@jit(nopython=True, inline="always")
def _luma(r: float, g: float, b: float) -> float:
    return _LUMA_R * r + _LUMA_G * g + _LUMA_B * b


@jit(nopython=True, inline="always")
def _apply_brightness(value: float, factor: float) -> float:
    return _clamp_channel(value * factor)


@jit(nopython=True, inline="always")
def _apply_contrast(value: float, factor: float) -> float:
    # Rotate the tone curve around mid-grey.
    return _clamp_channel((value - _PIVOT) * factor + _PIVOT)


@jit(nopython=True, inline="always")
def _apply_saturation(
    r: float, g: float, b: float, factor: float
) -> tuple[float, float, float]:
    luma = _luma(r, g, b)
    return (
        _clamp_channel(luma + (r - luma) * factor),
        _clamp_channel(luma + (g - luma) * factor),
        _clamp_channel(luma + (b - luma) * factor),
    )


@jit(nopython=True, inline="always")
def _apply_grayscale(
    r: float, g: float, b: float, amount: float
) -> tuple[float, float, float]:
    luma = _luma(r, g, b)
    return (
        _clamp_channel(r + (luma - r) * amount),
        _clamp_channel(g + (luma - g) * amount),
        _clamp_channel(b + (luma - b) * amount),
    )


@jit(nopython=True, inline="always")
def _sepia_tone(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Return the fully sepia-mapped colour of ``(r, g, b)``."""

    return (
        _clamp_channel(_SEPIA_RR * r + _SEPIA_RG * g + _SEPIA_RB * b),
        _clamp_channel(_SEPIA_GR * r + _SEPIA_GG * g + _SEPIA_GB * b),
        _clamp_channel(_SEPIA_BR * r + _SEPIA_BG * g + _SEPIA_BB * b),
    )


@jit(nopython=True, inline="always")
def _apply_sepia(
    r: float, g: float, b: float, amount: float
) -> tuple[float, float, float]:
    tr, tg, tb = _sepia_tone(r, g, b)
    return (
        _clamp_channel(r + (tr - r) * amount),
        _clamp_channel(g + (tg - g) * amount),
        _clamp_channel(b + (tb - b) * amount),
    )


@jit(nopython=True, inline="always")
def _apply_pipeline(
    r: float,
    g: float,
    b: float,
    brightness: float,
    contrast: float,
    saturate: float,
    grayscale: float,
    sepia: float,
) -> tuple[float, float, float]:
    """Run brightness, contrast, saturation, grayscale and sepia in that order.

    The parameters are fractions (slider value / 100).  Stages sitting at
    their identity value are skipped.
    """

    if brightness != 1.0:
        r = _apply_brightness(r, brightness)
        g = _apply_brightness(g, brightness)
        b = _apply_brightness(b, brightness)
    if contrast != 1.0:
        r = _apply_contrast(r, contrast)
        g = _apply_contrast(g, contrast)
        b = _apply_contrast(b, contrast)
    if saturate != 1.0:
        r, g, b = _apply_saturation(r, g, b, saturate)
    if grayscale != 0.0:
        r, g, b = _apply_grayscale(r, g, b, grayscale)
    if sepia != 0.0:
        r, g, b = _apply_sepia(r, g, b, sepia)
    return r, g, b


@jit(nopython=True, inline="always")
def _quantize(value: float) -> int:
    """Convert *value* from ``[0.0, 255.0]`` to an 8-bit channel value."""

    scaled = math.floor(value + 0.5)
    if scaled < 0:
        return 0
    if scaled > 255:
        return 255
    return int(scaled)
