"""Tests for filter presets and aspect-ratio parsing."""

import numpy as np
import pytest

from tooncraft.config import GENERATION_ASPECT_LABELS
from tooncraft.core.aspect import aspect_label, parse_aspect_ratio
from tooncraft.core.filters.facade import apply_adjustments
from tooncraft.core.filters.presets import FILTER_PRESETS, apply_preset, preset_names
from tooncraft.errors import ValidationError
from tooncraft.models.types import AdjustmentState


def test_preset_names_in_display_order() -> None:
    assert preset_names() == ["Normal", "Noir", "Vivid", "Warm", "Cyber", "Fade"]


def test_normal_preset_is_identity() -> None:
    assert apply_preset("Normal") == AdjustmentState.identity()


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Noir", {"grayscale": 100, "contrast": 120}),
        ("Vivid", {"saturate": 150, "contrast": 110}),
        ("Warm", {"sepia": 50, "brightness": 105}),
        ("Cyber", {"saturate": 200, "contrast": 120, "brightness": 110}),
        ("Fade", {"brightness": 110, "contrast": 90, "saturate": 80}),
    ],
)
def test_preset_values(name, expected) -> None:
    assert apply_preset(name) == AdjustmentState.from_mapping(expected)


def test_preset_lookup_ignores_case() -> None:
    assert apply_preset("  noir ") == apply_preset("Noir")


def test_unknown_preset_rejected() -> None:
    with pytest.raises(ValidationError):
        apply_preset("Dramatic")


def test_presets_are_read_only() -> None:
    with pytest.raises(TypeError):
        FILTER_PRESETS["Custom"] = {}  # type: ignore[index]


def test_warm_preset_on_white() -> None:
    white = np.full((1, 1, 4), 255, dtype=np.uint8)
    result = apply_adjustments(white, 1, 1, apply_preset("Warm"), executor="numpy")
    assert tuple(int(v) for v in result[0, 0]) == (255, 255, 247, 255)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("Original", None),
        ("auto", None),
        ("Square (1:1)", 1.0),
        ("Portrait (4:5)", 0.8),
        ("Landscape (16:9)", 16.0 / 9.0),
        ("3:4", 0.75),
        ("9/16", 9.0 / 16.0),
        ("2.5", 2.5),
        (1.5, 1.5),
    ],
)
def test_parse_aspect_ratio(value, expected) -> None:
    result = parse_aspect_ratio(value)
    if expected is None:
        assert result is None
    else:
        assert result == pytest.approx(expected)


@pytest.mark.parametrize("value", ["wide", "0:1", "-2", 0, -1.0])
def test_parse_aspect_ratio_rejects_invalid(value) -> None:
    with pytest.raises(ValidationError):
        parse_aspect_ratio(value)


def test_aspect_label() -> None:
    assert aspect_label(None) == "Original"
    assert aspect_label(1.0) == "Square (1:1)"
    assert aspect_label(16.0 / 9.0) == "Landscape (16:9)"
    assert aspect_label(0.75) == "0.75"


@pytest.mark.parametrize("label", GENERATION_ASPECT_LABELS)
def test_generation_labels_parse(label) -> None:
    width, height = (float(part) for part in label.split(":"))
    assert parse_aspect_ratio(label) == pytest.approx(width / height)
