"""Buffer helpers shared by the adjustment executors."""

from __future__ import annotations

from typing import Union

import numpy as np

from ...errors import ValidationError

PixelBuffer = Union[np.ndarray, bytes, bytearray, memoryview]

CHANNELS = 4


def _prepare_pixel_view(buffer: PixelBuffer, width: int, height: int) -> np.ndarray:
    """Validate *buffer* against the dimensions and return an ``(H, W, 4)`` view.

    Flat buffers (raw bytes or 1-D arrays) are reshaped; 3-D arrays must already
    match ``(height, width, 4)``.  The returned view may share memory with the
    caller's buffer, so executors copy before writing.
    """

    if int(width) != width or int(height) != height or width <= 0 or height <= 0:
        raise ValidationError(f"pixel dimensions must be positive integers, got {width}x{height}")
    width = int(width)
    height = int(height)

    if isinstance(buffer, np.ndarray):
        array = buffer
    else:
        array = np.frombuffer(buffer, dtype=np.uint8)

    if array.dtype != np.uint8:
        raise ValidationError(f"pixel buffer must be uint8, got {array.dtype}")

    expected = width * height * CHANNELS
    if array.ndim == 3:
        if array.shape != (height, width, CHANNELS):
            raise ValidationError(
                f"pixel array shape {array.shape} does not match {(height, width, CHANNELS)}"
            )
        return array
    if array.size != expected:
        raise ValidationError(
            f"pixel buffer holds {array.size} bytes, expected {expected} for {width}x{height} RGBA"
        )
    return array.reshape((height, width, CHANNELS))
