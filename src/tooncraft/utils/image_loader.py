"""Helpers for decoding source images into RGBA rasters with Pillow."""

from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageOps

from ..errors import DecodeError
from ..models.types import SourceImage

_LOGGER = logging.getLogger(__name__)

_DECODE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)

_DATA_URL_PREFIX = "data:"


def source_from_pil(image: Image.Image) -> SourceImage:
    """Return a :class:`SourceImage` for an already opened Pillow *image*.

    EXIF orientation is applied so the raster matches what a browser shows.
    """

    upright = ImageOps.exif_transpose(image)
    rgba = upright.convert("RGBA")
    pixels = np.asarray(rgba, dtype=np.uint8)
    return SourceImage.from_array(pixels)


def _strip_data_url(data: Union[bytes, str]) -> bytes:
    """Return the raw bytes behind a ``data:<mime>;base64,`` URL, or *data* itself."""

    if isinstance(data, str):
        if not data.startswith(_DATA_URL_PREFIX):
            raise DecodeError("string input must be a data URL")
        text = data
    elif data[:len(_DATA_URL_PREFIX)] == _DATA_URL_PREFIX.encode("ascii"):
        try:
            text = data.decode("ascii", errors="strict")
        except UnicodeDecodeError as exc:
            raise DecodeError("data URL contains non-ASCII bytes") from exc
    else:
        return bytes(data)

    header, sep, payload = text.partition(",")
    if not sep or ";base64" not in header:
        raise DecodeError("only base64 data URLs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("data URL payload is not valid base64") from exc


def source_from_bytes(data: Union[bytes, bytearray, memoryview, str]) -> SourceImage:
    """Decode PNG/JPEG/WebP/... *data* (or a base64 data URL) into a raster."""

    if isinstance(data, (bytearray, memoryview)):
        data = bytes(data)
    raw = _strip_data_url(data)
    if not raw:
        raise DecodeError("image data is empty")
    try:
        with Image.open(BytesIO(raw)) as img:
            img.load()
            return source_from_pil(img)
    except _DECODE_ERRORS as exc:
        _LOGGER.exception("Pillow failed to decode %d bytes of image data", len(raw))
        raise DecodeError(f"could not decode image data: {exc}") from exc


def load_source(source: Path) -> SourceImage:
    """Decode the image file at *source*."""

    try:
        with Image.open(source) as img:
            img.load()
            return source_from_pil(img)
    except _DECODE_ERRORS as exc:
        _LOGGER.exception("Pillow failed to load image from %s", source)
        raise DecodeError(f"could not decode {source}: {exc}") from exc
