from .types import (
    AdjustmentState,
    CropState,
    EncodedImage,
    OutputRaster,
    SourceImage,
    SourceRect,
    ViewportGeometry,
)

__all__ = [
    "AdjustmentState",
    "CropState",
    "EncodedImage",
    "OutputRaster",
    "SourceImage",
    "SourceRect",
    "ViewportGeometry",
]
