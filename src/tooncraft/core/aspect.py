"""Aspect ratio choices and label parsing."""

from __future__ import annotations

import re
from typing import Optional, Union

from ..config import EDITOR_ASPECT_RATIOS
from ..errors import ValidationError
from ..models.types import check_aspect_ratio

_RATIO_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*[:/x]\s*(\d+(?:\.\d+)?)")

AspectInput = Union[None, float, int, str]


def parse_aspect_ratio(value: AspectInput) -> Optional[float]:
    """Return the width/height ratio described by *value*.

    Accepts ``None`` (natural aspect), a positive number, an editor label such
    as ``"Square (1:1)"`` or ``"Original"``, or a bare ``"W:H"`` string.
    """

    if value is None:
        return None
    if isinstance(value, (int, float)):
        return check_aspect_ratio(float(value))

    text = str(value).strip()
    for label, ratio in EDITOR_ASPECT_RATIOS:
        if text.lower() == label.lower():
            return ratio
    if text.lower() in {"", "auto", "none", "original"}:
        return None

    match = _RATIO_PATTERN.search(text)
    if match is None:
        try:
            return check_aspect_ratio(float(text))
        except ValueError as exc:
            raise ValidationError(f"unrecognised aspect ratio {value!r}") from exc

    width, height = float(match.group(1)), float(match.group(2))
    if width <= 0 or height <= 0:
        raise ValidationError(f"aspect ratio terms must be positive, got {value!r}")
    return width / height


def aspect_label(ratio: Optional[float]) -> str:
    """Return the editor label for *ratio*, or the formatted number for custom values."""

    for label, known in EDITOR_ASPECT_RATIOS:
        if known is None and ratio is None:
            return label
        if known is not None and ratio is not None and abs(known - ratio) < 1e-9:
            return label
    return f"{ratio:.4g}"
