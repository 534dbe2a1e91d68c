"""Map the interactive pan/zoom/aspect selection onto a source-pixel rectangle.

The editor shows the photo inside a viewport, lets the user drag it around and
zoom in, and optionally locks the crop to a fixed aspect ratio.  At zoom ``1``
the crop is the largest box of the requested aspect that fits inside the
image; zooming shrinks that box around its centre, and panning moves the
centre opposite to the drag so the photo appears to follow the pointer.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..config import PAN_SENSITIVITY
from ..errors import ValidationError
from ..models.types import CropState, SourceRect, check_aspect_ratio, check_zoom

_LOGGER = logging.getLogger(__name__)

# Tolerance used when comparing derived box sizes against the image bounds.
_EPSILON = 1e-9


def _check_dimension(name: str, value: float) -> float:
    numeric = float(value)
    if not math.isfinite(numeric) or numeric <= 0.0:
        raise ValidationError(f"{name} must be positive, got {value!r}")
    return numeric


def _clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def fitted_box(nw: float, nh: float, aspect_ratio: Optional[float]) -> tuple[float, float]:
    """Return the zoom-1 crop box ``(width, height)`` for *aspect_ratio*.

    The box never overflows the image: a wider image keeps its full height and
    a taller (or equally shaped) one keeps its full width.
    """

    if aspect_ratio is None:
        # Unconstrained crops follow the natural aspect, which is the full image.
        return float(nw), float(nh)

    image_aspect = nw / nh
    if image_aspect > aspect_ratio:
        box_h = float(nh)
        box_w = min(box_h * aspect_ratio, float(nw))
    else:
        box_w = float(nw)
        box_h = min(box_w / aspect_ratio, float(nh))
    return box_w, box_h


def map_crop(
    nw: float,
    nh: float,
    viewport_w: float,
    viewport_h: float,
    crop: CropState,
) -> SourceRect:
    """Return the source rectangle selected by *crop*.

    Parameters
    ----------
    nw, nh:
        Natural dimensions of the source image.
    viewport_w, viewport_h:
        Size of the on-screen editor area.  Pan offsets are already expressed
        in source pixels, so the viewport only takes part in validation.
    crop:
        Current aspect lock, zoom and pan.

    Raises
    ------
    ValidationError
        When a dimension is not positive, the zoom leaves ``[1, 3]``, the
        aspect ratio is not positive or a pan offset is not finite.
    """

    nw = _check_dimension("image width", nw)
    nh = _check_dimension("image height", nh)
    _check_dimension("viewport width", viewport_w)
    _check_dimension("viewport height", viewport_h)
    zoom = check_zoom(crop.zoom)
    aspect_ratio = check_aspect_ratio(crop.aspect_ratio)
    pan_x = float(crop.pan_x)
    pan_y = float(crop.pan_y)
    if not (math.isfinite(pan_x) and math.isfinite(pan_y)):
        raise ValidationError(f"pan must be finite, got ({crop.pan_x!r}, {crop.pan_y!r})")

    box_w, box_h = fitted_box(nw, nh, aspect_ratio)

    crop_w = box_w / zoom
    crop_h = box_h / zoom
    if crop_w > nw + _EPSILON or crop_h > nh + _EPSILON:
        raise ValidationError(
            f"crop box {crop_w:g}x{crop_h:g} exceeds the image {nw:g}x{nh:g}"
        )

    # Dragging the photo right moves the visible window left.
    center_x = nw / 2.0 - pan_x
    center_y = nh / 2.0 - pan_y

    sx = _clamp(center_x - crop_w / 2.0, 0.0, max(0.0, nw - crop_w))
    sy = _clamp(center_y - crop_h / 2.0, 0.0, max(0.0, nh - crop_h))

    rect = SourceRect(sx=sx, sy=sy, width=crop_w, height=crop_h)
    _LOGGER.debug(
        "map_crop %gx%g zoom=%g aspect=%s pan=(%g, %g) -> %s",
        nw,
        nh,
        zoom,
        aspect_ratio,
        pan_x,
        pan_y,
        rect,
    )
    return rect


def pan_sensitivity(zoom: float, base: float = PAN_SENSITIVITY) -> float:
    """Return the drag multiplier for *zoom*; higher zoom pans more slowly."""

    return base / check_zoom(zoom)


def apply_pan_delta(
    crop: CropState,
    dx: float,
    dy: float,
    base: float = PAN_SENSITIVITY,
) -> CropState:
    """Return *crop* with the screen-space drag ``(dx, dy)`` accumulated."""

    sensitivity = pan_sensitivity(crop.zoom, base)
    return crop.with_pan(crop.pan_x + dx * sensitivity, crop.pan_y + dy * sensitivity)
