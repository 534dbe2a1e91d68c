from .crop_mapper import apply_pan_delta, map_crop, pan_sensitivity
from .export import render, render_raster
from .filters import apply_adjustments

__all__ = [
    "apply_adjustments",
    "apply_pan_delta",
    "map_crop",
    "pan_sensitivity",
    "render",
    "render_raster",
]
