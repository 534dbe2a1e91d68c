"""Render engine: crop, adjust and encode the edited image."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from ..config import (
    DEFAULT_SAMPLING,
    DEFAULT_VIEWPORT_SIZE,
    OUTPUT_FORMAT,
    OUTPUT_MIME_TYPE,
)
from ..errors import EncodeError, RenderError
from ..models.types import (
    AdjustmentState,
    CropState,
    EncodedImage,
    OutputRaster,
    SourceImage,
    ViewportGeometry,
)
from ..utils import image_loader
from .crop_mapper import map_crop
from .filters.facade import apply_adjustments
from .sampling import sample_region

_LOGGER = logging.getLogger(__name__)

SourceInput = Union[SourceImage, bytes, bytearray, memoryview, str, Path]
ViewportInput = Union[ViewportGeometry, tuple[float, float], None]


def _resolve_source(source: SourceInput) -> SourceImage:
    if isinstance(source, SourceImage):
        return source
    if isinstance(source, Path):
        return image_loader.load_source(source)
    if isinstance(source, str) and not source.startswith("data:"):
        return image_loader.load_source(Path(source))
    return image_loader.source_from_bytes(source)


def resolve_viewport(viewport: ViewportInput) -> ViewportGeometry:
    if viewport is None:
        return ViewportGeometry(*DEFAULT_VIEWPORT_SIZE)
    if isinstance(viewport, ViewportGeometry):
        return viewport
    width, height = viewport
    return ViewportGeometry(width, height)


def render_raster(
    source: SourceInput,
    crop: CropState,
    adjustments: Union[AdjustmentState, Mapping[str, float]],
    viewport: ViewportInput = None,
    *,
    sampling: Optional[str] = None,
    executor: Optional[str] = None,
) -> OutputRaster:
    """Return the cropped and adjusted raster for *source*.

    The output is sized to the crop rectangle in source pixels, not to the
    viewport, so exports keep the full resolution of the selected region.
    """

    started = time.perf_counter()
    image = _resolve_source(source)
    geometry = resolve_viewport(viewport)

    rect = map_crop(image.width, image.height, geometry.width, geometry.height, crop)
    box = rect.to_pixel_box(image.width, image.height)
    _, _, out_w, out_h = box
    if out_w <= 0 or out_h <= 0:
        raise RenderError(f"crop rectangle {rect} is degenerate ({out_w}x{out_h})")

    region = sample_region(image.pixels, rect, box, sampling or DEFAULT_SAMPLING)
    adjusted = apply_adjustments(region, out_w, out_h, adjustments, executor=executor)

    _LOGGER.debug(
        "Rendered %dx%d region at %s from %dx%d source in %.1f ms",
        out_w,
        out_h,
        box[:2],
        image.width,
        image.height,
        (time.perf_counter() - started) * 1000.0,
    )
    return OutputRaster(width=out_w, height=out_h, pixels=adjusted)


def encode_raster(raster: OutputRaster, image_format: str = OUTPUT_FORMAT) -> EncodedImage:
    """Encode *raster* losslessly (PNG by default)."""

    buffer = BytesIO()
    try:
        Image.fromarray(raster.pixels).save(buffer, format=image_format)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"could not encode {raster.width}x{raster.height} image as {image_format}") from exc
    mime_type = Image.MIME.get(image_format.upper(), OUTPUT_MIME_TYPE)
    return EncodedImage(
        data=buffer.getvalue(),
        width=raster.width,
        height=raster.height,
        format=image_format.upper(),
        mime_type=mime_type,
    )


def render(
    source: SourceInput,
    crop: CropState,
    adjustments: Union[AdjustmentState, Mapping[str, float]],
    viewport: ViewportInput = None,
    *,
    sampling: Optional[str] = None,
    executor: Optional[str] = None,
    image_format: str = OUTPUT_FORMAT,
) -> EncodedImage:
    """Decode, crop, adjust and encode *source* in one synchronous call.

    Raises
    ------
    DecodeError
        When *source* bytes or the file cannot be decoded.
    ValidationError
        When the crop state, viewport or adjustments are out of range.
    RenderError
        When the crop rectangle is degenerate or the output cannot be allocated.
    EncodeError
        When the output cannot be encoded.
    """

    raster = render_raster(
        source,
        crop,
        adjustments,
        viewport,
        sampling=sampling,
        executor=executor,
    )
    return encode_raster(raster, image_format)


def get_unique_destination(destination: Path) -> Path:
    """Return *destination* or a variant with a counter if it exists."""
    if not destination.exists():
        return destination

    parent = destination.parent
    stem = destination.stem
    suffix = destination.suffix
    counter = 1
    while True:
        candidate = parent / f"{stem} ({counter}){suffix}"
        if not candidate.exists():
            return candidate
        counter += 1


def write_encoded(image: EncodedImage, destination: Path, *, overwrite: bool = False) -> Path:
    """Write *image* to *destination* and return the path actually used."""

    destination.parent.mkdir(parents=True, exist_ok=True)
    final_dest = destination if overwrite else get_unique_destination(destination)
    final_dest.write_bytes(image.data)
    _LOGGER.info("Wrote %dx%d %s to %s", image.width, image.height, image.format, final_dest)
    return final_dest
