"""Crop/zoom/pan mapping and colour adjustment core of the tooncraft studio editor."""

from .core.crop_mapper import map_crop
from .core.export import render
from .core.filters.facade import apply_adjustments
from .models.types import AdjustmentState, CropState, EncodedImage, SourceImage, SourceRect
from .session import EditSession

__all__ = [
    "AdjustmentState",
    "CropState",
    "EditSession",
    "EncodedImage",
    "SourceImage",
    "SourceRect",
    "apply_adjustments",
    "map_crop",
    "render",
]
