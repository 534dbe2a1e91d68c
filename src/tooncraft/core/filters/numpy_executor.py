"""NumPy vectorized executor for image adjustments.

This module mirrors :mod:`.algorithms` with whole-array operations.  It is the
path used in frozen builds where Numba cannot compile at runtime, and the
reference the JIT kernel is tested against.
"""

from __future__ import annotations

import numpy as np

from ...config import CHANNEL_MAX, CONTRAST_PIVOT, LUMA_WEIGHTS, SEPIA_MATRIX

_SEPIA = np.asarray(SEPIA_MATRIX, dtype=np.float64)


def _np_clamp_channel(arr: np.ndarray) -> np.ndarray:
    """Clamp array values to [0.0, 255.0]."""
    return np.clip(arr, 0.0, CHANNEL_MAX)


def _np_luma(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b


def _np_sepia_tone(
    r: np.ndarray, g: np.ndarray, b: np.ndarray
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    return (
        _np_clamp_channel(_SEPIA[0, 0] * r + _SEPIA[0, 1] * g + _SEPIA[0, 2] * b),
        _np_clamp_channel(_SEPIA[1, 0] * r + _SEPIA[1, 1] * g + _SEPIA[1, 2] * b),
        _np_clamp_channel(_SEPIA[2, 0] * r + _SEPIA[2, 1] * g + _SEPIA[2, 2] * b),
    )


def _np_quantize(arr: np.ndarray) -> np.ndarray:
    return np.clip(np.floor(arr + 0.5), 0.0, 255.0).astype(np.uint8)


def apply_adjustments_array(
    pixels: np.ndarray,
    brightness: float,
    contrast: float,
    saturate: float,
    grayscale: float,
    sepia: float,
) -> None:
    """Apply the five stages in-place to an ``(H, W, 4)`` RGBA array.

    Parameters are fractions (slider value / 100).  Alpha is left untouched.
    """

    r = pixels[..., 0].astype(np.float64)
    g = pixels[..., 1].astype(np.float64)
    b = pixels[..., 2].astype(np.float64)

    # 1. Brightness
    if brightness != 1.0:
        r = _np_clamp_channel(r * brightness)
        g = _np_clamp_channel(g * brightness)
        b = _np_clamp_channel(b * brightness)

    # 2. Contrast
    if contrast != 1.0:
        r = _np_clamp_channel((r - CONTRAST_PIVOT) * contrast + CONTRAST_PIVOT)
        g = _np_clamp_channel((g - CONTRAST_PIVOT) * contrast + CONTRAST_PIVOT)
        b = _np_clamp_channel((b - CONTRAST_PIVOT) * contrast + CONTRAST_PIVOT)

    # 3. Saturation
    if saturate != 1.0:
        luma = _np_luma(r, g, b)
        r = _np_clamp_channel(luma + (r - luma) * saturate)
        g = _np_clamp_channel(luma + (g - luma) * saturate)
        b = _np_clamp_channel(luma + (b - luma) * saturate)

    # 4. Grayscale
    if grayscale != 0.0:
        luma = _np_luma(r, g, b)
        r = _np_clamp_channel(r + (luma - r) * grayscale)
        g = _np_clamp_channel(g + (luma - g) * grayscale)
        b = _np_clamp_channel(b + (luma - b) * grayscale)

    # 5. Sepia
    if sepia != 0.0:
        tr, tg, tb = _np_sepia_tone(r, g, b)
        r = _np_clamp_channel(r + (tr - r) * sepia)
        g = _np_clamp_channel(g + (tg - g) * sepia)
        b = _np_clamp_channel(b + (tb - b) * sepia)

    pixels[..., 0] = _np_quantize(r)
    pixels[..., 1] = _np_quantize(g)
    pixels[..., 2] = _np_quantize(b)
