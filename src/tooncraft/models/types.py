"""Value objects shared by the mapper, the adjustment pipeline and the renderer."""

from __future__ import annotations

import base64
import math
from dataclasses import dataclass, field, fields, replace
from typing import Optional

import numpy as np

from ..config import (
    ADJUSTMENT_IDENTITY,
    ADJUSTMENT_NAMES,
    ADJUSTMENT_RANGES,
    ZOOM_MAX,
    ZOOM_MIN,
)
from ..errors import ValidationError


def check_zoom(zoom: float) -> float:
    """Return *zoom* as ``float`` or raise when it leaves ``[ZOOM_MIN, ZOOM_MAX]``."""

    value = float(zoom)
    if not math.isfinite(value) or value < ZOOM_MIN or value > ZOOM_MAX:
        raise ValidationError(
            f"zoom must lie within [{ZOOM_MIN}, {ZOOM_MAX}], got {zoom!r}"
        )
    return value


def check_aspect_ratio(aspect_ratio: Optional[float]) -> Optional[float]:
    if aspect_ratio is None:
        return None
    value = float(aspect_ratio)
    if not math.isfinite(value) or value <= 0.0:
        raise ValidationError(f"aspect ratio must be positive, got {aspect_ratio!r}")
    return value


def check_adjustment(name: str, value: float) -> float:
    """Return *value* for the adjustment *name* after range validation."""

    if name not in ADJUSTMENT_RANGES:
        raise ValidationError(f"unknown adjustment {name!r}")
    numeric = float(value)
    low, high = ADJUSTMENT_RANGES[name]
    if not math.isfinite(numeric) or numeric < low or numeric > high:
        raise ValidationError(f"{name} must lie within [{low:g}, {high:g}], got {value!r}")
    return numeric


@dataclass(frozen=True, slots=True)
class ViewportGeometry:
    """On-screen size of the area the crop is positioned in."""

    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not math.isfinite(float(value)) or value <= 0:
                raise ValidationError(f"viewport {name} must be positive, got {value!r}")


@dataclass(frozen=True, slots=True)
class CropState:
    """Interactive crop selection: aspect lock, zoom and accumulated pan.

    ``pan_x``/``pan_y`` are offsets in source pixels and are unbounded here;
    :func:`tooncraft.core.crop_mapper.map_crop` clamps the resulting
    rectangle into the image.
    """

    aspect_ratio: Optional[float] = None
    zoom: float = ZOOM_MIN
    pan_x: float = 0.0
    pan_y: float = 0.0

    def with_aspect_ratio(self, aspect_ratio: Optional[float]) -> CropState:
        """Return a state using *aspect_ratio* with pan and zoom reset."""

        return CropState(aspect_ratio=check_aspect_ratio(aspect_ratio))

    def with_zoom(self, zoom: float) -> CropState:
        return replace(self, zoom=check_zoom(zoom))

    def with_pan(self, pan_x: float, pan_y: float) -> CropState:
        return replace(self, pan_x=float(pan_x), pan_y=float(pan_y))


@dataclass(frozen=True, slots=True)
class AdjustmentState:
    """The five colour adjustments in slider units."""

    brightness: float = ADJUSTMENT_IDENTITY["brightness"]
    contrast: float = ADJUSTMENT_IDENTITY["contrast"]
    saturate: float = ADJUSTMENT_IDENTITY["saturate"]
    grayscale: float = ADJUSTMENT_IDENTITY["grayscale"]
    sepia: float = ADJUSTMENT_IDENTITY["sepia"]

    @classmethod
    def identity(cls) -> AdjustmentState:
        return cls()

    @classmethod
    def from_mapping(cls, values: dict[str, float]) -> AdjustmentState:
        """Build a state from *values*; missing keys keep their identity value."""

        unknown = set(values) - set(ADJUSTMENT_NAMES)
        if unknown:
            raise ValidationError(f"unknown adjustments: {', '.join(sorted(unknown))}")
        merged = dict(ADJUSTMENT_IDENTITY)
        merged.update(values)
        return cls(**{name: check_adjustment(name, merged[name]) for name in ADJUSTMENT_NAMES})

    def as_mapping(self) -> dict[str, float]:
        return {f.name: float(getattr(self, f.name)) for f in fields(self)}

    def with_value(self, name: str, value: float) -> AdjustmentState:
        return replace(self, **{name: check_adjustment(name, value)})

    def validate(self) -> None:
        for name in ADJUSTMENT_NAMES:
            check_adjustment(name, getattr(self, name))

    def is_identity(self) -> bool:
        return all(
            float(getattr(self, name)) == ADJUSTMENT_IDENTITY[name]
            for name in ADJUSTMENT_NAMES
        )


@dataclass(frozen=True, slots=True)
class SourceRect:
    """Axis-aligned crop rectangle in (fractional) source pixels."""

    sx: float
    sy: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.sx + self.width

    @property
    def bottom(self) -> float:
        return self.sy + self.height

    @property
    def aspect(self) -> float:
        return self.width / self.height if self.height else 0.0

    def to_pixel_box(self, image_width: int, image_height: int) -> tuple[int, int, int, int]:
        """Return ``(left, top, width, height)`` rounded to whole pixels.

        The box is shifted back inside ``image_width`` x ``image_height`` when
        rounding pushes its far edge past the image.
        """

        width = min(int(round(self.width)), image_width)
        height = min(int(round(self.height)), image_height)
        left = max(0, min(int(round(self.sx)), image_width - width))
        top = max(0, min(int(round(self.sy)), image_height - height))
        return left, top, width, height


@dataclass(frozen=True, slots=True)
class SourceImage:
    """Decoded RGBA raster holding a read-only copy of the caller's pixels."""

    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValidationError(
                f"image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.pixels.shape != (self.height, self.width, 4) or self.pixels.dtype != np.uint8:
            raise ValidationError(
                f"expected uint8 pixels of shape {(self.height, self.width, 4)}, "
                f"got {self.pixels.dtype} {self.pixels.shape}"
            )
        pixels = self.pixels.copy()
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> SourceImage:
        array = np.ascontiguousarray(pixels, dtype=np.uint8)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValidationError(f"expected an (h, w, 4) RGBA array, got shape {array.shape}")
        return cls(width=int(array.shape[1]), height=int(array.shape[0]), pixels=array)


@dataclass(frozen=True, slots=True)
class OutputRaster:
    """Final cropped and adjusted RGBA pixels."""

    width: int
    height: int
    pixels: np.ndarray = field(repr=False)


@dataclass(frozen=True, slots=True)
class EncodedImage:
    """Encoded output ready to hand to a download or history mechanism."""

    data: bytes = field(repr=False)
    width: int
    height: int
    format: str
    mime_type: str

    def to_data_url(self) -> str:
        payload = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{payload}"
