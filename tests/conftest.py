import os
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Qt widgets are never shown in tests; keep any QApplication headless.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path_factory):
    """Keep developer shell overrides and settings files out of the tests."""
    monkeypatch.delenv("TOONCRAFT_EXECUTOR", raising=False)
    monkeypatch.delenv("TOONCRAFT_LOG_LEVEL", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("config")))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_rgba(rng):
    def _make(width: int, height: int) -> np.ndarray:
        return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)

    return _make


@pytest.fixture
def gradient_source():
    """A 100x100 source whose red/green channels encode the pixel position."""
    from tooncraft.models.types import SourceImage

    ys, xs = np.mgrid[0:100, 0:100]
    pixels = np.zeros((100, 100, 4), dtype=np.uint8)
    pixels[..., 0] = xs * 2
    pixels[..., 1] = ys * 2
    pixels[..., 2] = 40
    pixels[..., 3] = 255
    return SourceImage.from_array(pixels)
