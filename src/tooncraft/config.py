"""Default configuration values for the tooncraft editor core."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Crop geometry
# ---------------------------------------------------------------------------

ZOOM_MIN: Final[float] = 1.0
ZOOM_MAX: Final[float] = 3.0

# Screen-space drag deltas are multiplied by ``PAN_SENSITIVITY / zoom`` before
# they are accumulated into the crop pan, so a drag feels the same speed at any
# magnification.
PAN_SENSITIVITY: Final[float] = 1.5

# The editor measures its container before saving and falls back to this size
# when the container has not been laid out yet.
DEFAULT_VIEWPORT_SIZE: Final[tuple[int, int]] = (500, 500)

# Crop aspect choices offered by the editor.  ``None`` keeps the natural
# aspect of the source image.
EDITOR_ASPECT_RATIOS: Final[list[tuple[str, float | None]]] = [
    ("Original", None),
    ("Square (1:1)", 1.0),
    ("Portrait (4:5)", 4.0 / 5.0),
    ("Landscape (16:9)", 16.0 / 9.0),
]

# Ratio labels used by the generation panel.  ``parse_aspect_ratio`` accepts
# these as well so callers can forward them unchanged.
GENERATION_ASPECT_LABELS: Final[list[str]] = ["1:1", "3:4", "4:3", "9:16", "16:9"]

# ---------------------------------------------------------------------------
# Adjustments
# ---------------------------------------------------------------------------

ADJUSTMENT_NAMES: Final[tuple[str, ...]] = (
    "brightness",
    "contrast",
    "saturate",
    "grayscale",
    "sepia",
)
ADJUSTMENT_RANGES: Final[dict[str, tuple[float, float]]] = {
    "brightness": (0.0, 200.0),
    "contrast": (0.0, 200.0),
    "saturate": (0.0, 200.0),
    "grayscale": (0.0, 100.0),
    "sepia": (0.0, 100.0),
}
ADJUSTMENT_IDENTITY: Final[dict[str, float]] = {
    "brightness": 100.0,
    "contrast": 100.0,
    "saturate": 100.0,
    "grayscale": 0.0,
    "sepia": 0.0,
}

# Rec. 601 luma weights shared by the saturation and grayscale stages.
LUMA_WEIGHTS: Final[tuple[float, float, float]] = (0.299, 0.587, 0.114)

# Rows map (R, G, B) to the sepia-toned (R', G', B').
SEPIA_MATRIX: Final[tuple[tuple[float, float, float], ...]] = (
    (0.393, 0.769, 0.189),
    (0.349, 0.686, 0.168),
    (0.272, 0.534, 0.131),
)

CONTRAST_PIVOT: Final[float] = 128.0
CHANNEL_MAX: Final[float] = 255.0

EXECUTOR_AUTO: Final[str] = "auto"
EXECUTOR_NUMPY: Final[str] = "numpy"
EXECUTOR_JIT: Final[str] = "jit"
EXECUTORS: Final[tuple[str, ...]] = (EXECUTOR_AUTO, EXECUTOR_NUMPY, EXECUTOR_JIT)

# ---------------------------------------------------------------------------
# Rendering / export
# ---------------------------------------------------------------------------

SAMPLING_NEAREST: Final[str] = "nearest"
SAMPLING_BILINEAR: Final[str] = "bilinear"
SAMPLING_MODES: Final[tuple[str, ...]] = (SAMPLING_NEAREST, SAMPLING_BILINEAR)
DEFAULT_SAMPLING: Final[str] = SAMPLING_BILINEAR

OUTPUT_FORMAT: Final[str] = "PNG"
OUTPUT_MIME_TYPE: Final[str] = "image/png"
# File suffix written for each export format the settings allow.
OUTPUT_SUFFIXES: Final[dict[str, str]] = {
    "PNG": ".png",
    "WEBP": ".webp",
    "TIFF": ".tiff",
}

# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

LOG_LEVEL_ENV: Final[str] = "TOONCRAFT_LOG_LEVEL"
EXECUTOR_ENV: Final[str] = "TOONCRAFT_EXECUTOR"
SETTINGS_DIR_NAME: Final[str] = "tooncraft"
