"""JIT-accelerated image adjustment executor using Numba.

The kernel walks the RGBA array pixel by pixel and inlines the scalar stages
from :mod:`.algorithms`.  Frozen builds (PyInstaller, Nuitka) strip the
bytecode Numba needs, so the kernel is reported as unavailable there and the
facade uses the NumPy executor instead.
"""

from __future__ import annotations

import logging
import sys

import numpy as np
from numba import jit

from .algorithms import _apply_pipeline, _quantize

logger = logging.getLogger(__name__)

_IS_COMPILED = (
    "__compiled__" in globals() or
    hasattr(sys, "frozen") or
    hasattr(sys, "_MEIPASS")
)

JIT_AVAILABLE = not _IS_COMPILED
if not JIT_AVAILABLE:
    logger.debug("Frozen build detected; Numba kernels are disabled.")


@jit(nopython=True, cache=True)
def _apply_adjustments_kernel(
    pixels: np.ndarray,
    brightness: float,
    contrast: float,
    saturate: float,
    grayscale: float,
    sepia: float,
) -> None:
    """JIT-compiled pixel processing kernel."""
    height = pixels.shape[0]
    width = pixels.shape[1]
    for y in range(height):
        for x in range(width):
            r = float(pixels[y, x, 0])
            g = float(pixels[y, x, 1])
            b = float(pixels[y, x, 2])

            r, g, b = _apply_pipeline(r, g, b, brightness, contrast, saturate, grayscale, sepia)

            pixels[y, x, 0] = _quantize(r)
            pixels[y, x, 1] = _quantize(g)
            pixels[y, x, 2] = _quantize(b)


def apply_adjustments_jit(
    pixels: np.ndarray,
    brightness: float,
    contrast: float,
    saturate: float,
    grayscale: float,
    sepia: float,
) -> None:
    """Apply the adjustment stages in-place to a contiguous ``(H, W, 4)`` array."""

    if not JIT_AVAILABLE:
        raise RuntimeError("Numba JIT is not available in this build")
    if not pixels.flags.c_contiguous or not pixels.flags.writeable:
        raise BufferError("JIT kernel requires a writable C-contiguous buffer")
    _apply_adjustments_kernel(
        pixels,
        float(brightness),
        float(contrast),
        float(saturate),
        float(grayscale),
        float(sepia),
    )
