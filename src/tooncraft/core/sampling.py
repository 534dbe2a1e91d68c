"""Copy a source rectangle into an output-sized RGBA buffer."""

from __future__ import annotations

import numpy as np

from ..config import SAMPLING_BILINEAR, SAMPLING_MODES, SAMPLING_NEAREST
from ..errors import RenderError, ValidationError
from ..models.types import SourceRect


def _axis_coordinates(origin: float, extent: float, count: int) -> np.ndarray:
    """Return the source coordinate of each destination pixel centre on one axis."""

    step = extent / count
    return origin + (np.arange(count, dtype=np.float64) + 0.5) * step - 0.5


def _sample_nearest(
    pixels: np.ndarray, box: tuple[int, int, int, int]
) -> np.ndarray:
    left, top, width, height = box
    return pixels[top:top + height, left:left + width].copy()


def _sample_bilinear(
    pixels: np.ndarray, rect: SourceRect, width: int, height: int
) -> np.ndarray:
    src_h, src_w = pixels.shape[:2]

    xs = np.clip(_axis_coordinates(rect.sx, rect.width, width), 0.0, src_w - 1)
    ys = np.clip(_axis_coordinates(rect.sy, rect.height, height), 0.0, src_h - 1)

    x0 = np.floor(xs).astype(np.intp)
    y0 = np.floor(ys).astype(np.intp)
    x1 = np.minimum(x0 + 1, src_w - 1)
    y1 = np.minimum(y0 + 1, src_h - 1)
    fx = (xs - x0)[None, :, None]
    fy = (ys - y0)[:, None, None]

    rows0 = pixels[y0]
    rows1 = pixels[y1]
    top = rows0[:, x0].astype(np.float64) * (1.0 - fx) + rows0[:, x1].astype(np.float64) * fx
    bottom = rows1[:, x0].astype(np.float64) * (1.0 - fx) + rows1[:, x1].astype(np.float64) * fx
    blended = top * (1.0 - fy) + bottom * fy
    return np.clip(np.floor(blended + 0.5), 0.0, 255.0).astype(np.uint8)


def sample_region(
    pixels: np.ndarray,
    rect: SourceRect,
    box: tuple[int, int, int, int],
    mode: str = SAMPLING_BILINEAR,
) -> np.ndarray:
    """Return the pixels of *rect* as a new ``(box height, box width, 4)`` array.

    ``box`` is the whole-pixel version of *rect* (see
    :meth:`SourceRect.to_pixel_box`) and fixes the output size.  ``"nearest"``
    copies the box verbatim; ``"bilinear"`` resamples the fractional rectangle,
    which reduces to an exact copy whenever *rect* is pixel aligned.
    """

    if mode not in SAMPLING_MODES:
        raise ValidationError(f"unknown sampling mode {mode!r}; expected one of {', '.join(SAMPLING_MODES)}")
    _, _, width, height = box
    if width <= 0 or height <= 0:
        raise RenderError(f"crop rectangle is degenerate: {width}x{height}")

    try:
        if mode == SAMPLING_NEAREST:
            return _sample_nearest(pixels, box)
        return _sample_bilinear(pixels, rect, width, height)
    except MemoryError as exc:
        raise RenderError(f"could not allocate a {width}x{height} output buffer") from exc
