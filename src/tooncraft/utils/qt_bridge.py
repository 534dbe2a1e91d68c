"""Conversions between Qt images and the editor core's rasters."""

from __future__ import annotations

import numpy as np
from PySide6.QtGui import QImage

from ..errors import DecodeError
from ..models.types import OutputRaster, SourceImage


def source_from_qimage(image: QImage) -> SourceImage:
    """Return a :class:`SourceImage` holding a copy of *image*'s pixels."""

    if image.isNull():
        raise DecodeError("QImage is null")

    # ``Format_RGBA8888`` stores bytes in R, G, B, A order on every platform,
    # matching the core's channel layout.
    converted = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width = converted.width()
    height = converted.height()
    bytes_per_line = converted.bytesPerLine()

    ptr = converted.constBits()
    if hasattr(ptr, "setsize"):
        ptr.setsize(converted.sizeInBytes())
    buffer = np.frombuffer(ptr, dtype=np.uint8, count=bytes_per_line * height)
    lines = buffer.reshape((height, bytes_per_line))
    pixels = lines[:, : width * 4].reshape((height, width, 4))
    return SourceImage.from_array(pixels)


def qimage_from_raster(raster: OutputRaster | SourceImage) -> QImage:
    """Return a detached ``Format_RGBA8888`` :class:`QImage` for *raster*."""

    pixels = np.ascontiguousarray(raster.pixels, dtype=np.uint8)
    image = QImage(
        pixels.data,
        raster.width,
        raster.height,
        pixels.strides[0],
        QImage.Format.Format_RGBA8888,
    )
    # ``copy`` detaches the QImage from the NumPy buffer.
    return image.copy()
