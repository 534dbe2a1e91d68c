from .facade import apply_adjustments, resolve_executor
from .presets import FILTER_PRESETS, apply_preset, preset_names

__all__ = [
    "FILTER_PRESETS",
    "apply_adjustments",
    "apply_preset",
    "preset_names",
    "resolve_executor",
]
