"""Named filter presets offered by the editor."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ...errors import ValidationError
from ...models.types import AdjustmentState

# Presets only list the parameters they change; everything else is reset to
# identity when one is applied.
FILTER_PRESETS: Mapping[str, Mapping[str, float]] = MappingProxyType({
    "Normal": {},
    "Noir": {"grayscale": 100, "contrast": 120},
    "Vivid": {"saturate": 150, "contrast": 110},
    "Warm": {"sepia": 50, "brightness": 105},
    "Cyber": {"saturate": 200, "contrast": 120, "brightness": 110},
    "Fade": {"brightness": 110, "contrast": 90, "saturate": 80},
})


def preset_names() -> list[str]:
    return list(FILTER_PRESETS)


def apply_preset(name: str) -> AdjustmentState:
    """Return the adjustment state for the preset called *name* (case-insensitive)."""

    for preset_name, config in FILTER_PRESETS.items():
        if preset_name.lower() == str(name).strip().lower():
            return AdjustmentState.from_mapping(dict(config))
    raise ValidationError(
        f"unknown filter preset {name!r}; expected one of {', '.join(FILTER_PRESETS)}"
    )


__all__ = ["FILTER_PRESETS", "apply_preset", "preset_names"]
