"""Tests for the render engine."""

from io import BytesIO
from pathlib import Path
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

from tooncraft.core.export import (
    encode_raster,
    get_unique_destination,
    render,
    render_raster,
    write_encoded,
)
from tooncraft.errors import DecodeError, EncodeError, RenderError, ValidationError
from tooncraft.models.types import AdjustmentState, CropState, OutputRaster, SourceImage


def _decode(data: bytes) -> np.ndarray:
    with Image.open(BytesIO(data)) as img:
        return np.asarray(img.convert("RGBA"))


def _png_bytes(pixels: np.ndarray) -> bytes:
    buffer = BytesIO()
    Image.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def test_get_unique_destination(tmp_path: Path) -> None:
    dest = tmp_path / "edit.png"
    dest.touch()

    unique = get_unique_destination(dest)
    assert unique.name == "edit (1).png"
    assert unique.parent == tmp_path

    unique.touch()
    assert get_unique_destination(dest).name == "edit (2).png"

    other = tmp_path / "other.png"
    assert get_unique_destination(other) == other


def test_identity_render_reproduces_source(gradient_source) -> None:
    encoded = render(gradient_source, CropState(), AdjustmentState.identity())

    assert encoded.format == "PNG"
    assert encoded.mime_type == "image/png"
    assert (encoded.width, encoded.height) == (100, 100)
    assert np.array_equal(_decode(encoded.data), gradient_source.pixels)


def test_zoomed_square_render_crops_centre(gradient_source) -> None:
    crop = CropState(aspect_ratio=1.0, zoom=2.0)
    raster = render_raster(gradient_source, crop, {})

    assert (raster.width, raster.height) == (50, 50)
    assert np.array_equal(raster.pixels, gradient_source.pixels[25:75, 25:75])


def test_output_size_follows_crop_not_viewport(gradient_source) -> None:
    crop = CropState(aspect_ratio=16.0 / 9.0)
    small = render_raster(gradient_source, crop, {}, (200, 100))
    large = render_raster(gradient_source, crop, {}, (1920, 1080))

    assert (small.width, small.height) == (100, 56)
    assert np.array_equal(small.pixels, large.pixels)


def test_nearest_sampling_matches_pixel_box(gradient_source) -> None:
    crop = CropState(zoom=3.0, pan_x=10.0)
    raster = render_raster(gradient_source, crop, {}, sampling="nearest")

    # 33.33 wide crop centred on x=40 -> box starts at round(23.33).
    assert (raster.width, raster.height) == (33, 33)
    assert np.array_equal(raster.pixels, gradient_source.pixels[33:66, 23:56])


def test_render_applies_adjustments(gradient_source) -> None:
    raster = render_raster(gradient_source, CropState(), {"saturate": 0}, executor="numpy")
    rgb = raster.pixels[..., :3]
    assert np.array_equal(rgb[..., 0], rgb[..., 1])
    assert np.array_equal(rgb[..., 1], rgb[..., 2])
    assert np.all(raster.pixels[..., 3] == 255)


@patch("tooncraft.core.export.apply_adjustments")
def test_render_passes_output_dimensions(mock_apply, gradient_source) -> None:
    mock_apply.side_effect = lambda pixels, w, h, adjustments, executor=None: pixels
    adjustments = AdjustmentState(sepia=30.0)

    render_raster(gradient_source, CropState(zoom=2.0), adjustments, executor="numpy")

    args, kwargs = mock_apply.call_args
    assert args[1:] == (50, 50, adjustments)
    assert kwargs == {"executor": "numpy"}


def test_render_decodes_bytes_and_paths(tmp_path: Path) -> None:
    pixels = np.zeros((6, 8, 4), dtype=np.uint8)
    pixels[..., 0] = 200
    pixels[..., 3] = 255
    data = _png_bytes(pixels)
    path = tmp_path / "source.png"
    path.write_bytes(data)

    from_bytes = render(data, CropState(), {})
    from_path = render(path, CropState(), {})
    from_str_path = render(str(path), CropState(), {})

    assert np.array_equal(_decode(from_bytes.data), pixels)
    assert from_path.data == from_bytes.data
    assert from_str_path.data == from_bytes.data


def test_render_accepts_data_url_string(gradient_source) -> None:
    url = render(gradient_source, CropState(), {}).to_data_url()

    encoded = render(url, CropState(aspect_ratio=1.0, zoom=2.0), {})

    assert (encoded.width, encoded.height) == (50, 50)


def test_missing_string_path_raises_decode_error(tmp_path: Path) -> None:
    with pytest.raises(DecodeError):
        render(str(tmp_path / "missing.png"), CropState(), {})


def test_undecodable_bytes_raise_decode_error() -> None:
    with pytest.raises(DecodeError):
        render(b"definitely not an image", CropState(), {})


def test_degenerate_crop_raises_render_error() -> None:
    source = SourceImage.from_array(np.full((1, 1, 4), 255, dtype=np.uint8))
    crop = CropState(aspect_ratio=16.0 / 9.0, zoom=3.0)
    with pytest.raises(RenderError):
        render(source, crop, {})


def test_invalid_state_raises_validation_error(gradient_source) -> None:
    with pytest.raises(ValidationError):
        render(gradient_source, CropState(zoom=5.0), {})
    with pytest.raises(ValidationError):
        render(gradient_source, CropState(), {"brightness": 300})
    with pytest.raises(ValidationError):
        render(gradient_source, CropState(), {}, (0, 100))


def test_encode_failure_raises_encode_error() -> None:
    raster = OutputRaster(width=2, height=2, pixels=np.zeros((2, 2, 4), dtype=np.uint8))
    with pytest.raises(EncodeError):
        encode_raster(raster, "NOT-A-FORMAT")


def test_data_url(gradient_source) -> None:
    encoded = render(gradient_source, CropState(zoom=3.0), {})
    assert encoded.to_data_url().startswith("data:image/png;base64,iVBOR")


def test_write_encoded_never_overwrites_by_default(tmp_path: Path, gradient_source) -> None:
    encoded = render(gradient_source, CropState(zoom=2.0), {})
    dest = tmp_path / "out" / "photo-edited.png"

    first = write_encoded(encoded, dest)
    second = write_encoded(encoded, dest)
    third = write_encoded(encoded, dest, overwrite=True)

    assert first == dest
    assert second.name == "photo-edited (1).png"
    assert third == dest
    assert dest.read_bytes() == encoded.data
