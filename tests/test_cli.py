import json
from pathlib import Path
from unittest.mock import patch

from PIL import Image
from typer.testing import CliRunner

import tooncraft.cli as cli_module
from tooncraft.cli import app

runner = CliRunner()


def _write_source(path: Path) -> Path:
    Image.new("RGB", (8, 8), color=(200, 120, 40)).save(path)
    return path


def test_presets_lists_every_preset():
    result = runner.invoke(app, ["presets"])

    assert result.exit_code == 0
    for name in ("Normal", "Noir", "Vivid", "Warm", "Cyber", "Fade"):
        assert name in result.stdout


def test_rect_prints_source_rectangle():
    result = runner.invoke(app, ["rect", "1000", "1000", "--aspect", "1:1", "--zoom", "2"])

    assert result.exit_code == 0
    assert "sx=250 sy=250 width=500 height=500" in result.stdout


def test_render_writes_edited_png(tmp_path: Path):
    source = _write_source(tmp_path / "photo.png")

    result = runner.invoke(
        app,
        ["render", str(source), "--aspect", "1:1", "--zoom", "2", "--preset", "noir"],
    )

    assert result.exit_code == 0
    output = tmp_path / "photo-edited.png"
    assert output.exists()
    with Image.open(output) as img:
        assert img.size == (4, 4)
        r, g, b, a = img.convert("RGBA").getpixel((0, 0))
    assert abs(r - b) <= 1
    assert a == 255


def test_render_to_explicit_output_does_not_overwrite(tmp_path: Path):
    source = _write_source(tmp_path / "photo.png")
    dest = tmp_path / "out.png"
    dest.write_bytes(b"existing")

    result = runner.invoke(app, ["render", str(source), "-o", str(dest), "--sepia", "100"])

    assert result.exit_code == 0
    assert dest.read_bytes() == b"existing"
    assert (tmp_path / "out (1).png").exists()


def test_render_rejects_out_of_range_zoom(tmp_path: Path):
    source = _write_source(tmp_path / "photo.png")

    result = runner.invoke(app, ["render", str(source), "--zoom", "5"])

    assert result.exit_code == 1
    assert not (tmp_path / "photo-edited.png").exists()


def test_render_rejects_unknown_preset(tmp_path: Path):
    source = _write_source(tmp_path / "photo.png")

    result = runner.invoke(app, ["render", str(source), "--preset", "Dramatic"])

    assert result.exit_code == 1


def test_render_reports_undecodable_file(tmp_path: Path):
    source = tmp_path / "broken.png"
    source.write_bytes(b"not a png")

    result = runner.invoke(app, ["render", str(source)])

    assert result.exit_code == 1


def _write_settings(path: Path, **sections) -> Path:
    path.write_text(json.dumps(sections), encoding="utf-8")
    return path


def test_settings_file_sets_export_format_and_sampling(tmp_path: Path):
    source = _write_source(tmp_path / "photo.png")
    settings = _write_settings(
        tmp_path / "settings.json",
        editor={"sampling": "nearest", "executor": "numpy"},
        export={"format": "TIFF"},
    )

    with patch("tooncraft.cli.render", wraps=cli_module.render) as mock_render:
        result = runner.invoke(app, ["--settings", str(settings), "render", str(source)])

    assert result.exit_code == 0
    kwargs = mock_render.call_args.kwargs
    assert kwargs["sampling"] == "nearest"
    assert kwargs["executor"] == "numpy"
    assert kwargs["image_format"] == "TIFF"
    output = tmp_path / "photo-edited.tiff"
    with Image.open(output) as img:
        assert img.format == "TIFF"
        assert img.size == (8, 8)


def test_sampling_option_overrides_settings(tmp_path: Path):
    source = _write_source(tmp_path / "photo.png")
    settings = _write_settings(tmp_path / "settings.json", editor={"sampling": "nearest"})

    with patch("tooncraft.cli.render", wraps=cli_module.render) as mock_render:
        result = runner.invoke(
            app,
            ["--settings", str(settings), "render", str(source), "--sampling", "bilinear"],
        )

    assert result.exit_code == 0
    assert mock_render.call_args.kwargs["sampling"] == "bilinear"


def test_per_user_settings_file_is_used(tmp_path: Path, monkeypatch):
    config_home = tmp_path / "config"
    (config_home / "tooncraft").mkdir(parents=True)
    _write_settings(config_home / "tooncraft" / "settings.json", export={"format": "TIFF"})
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr("sys.platform", "linux")
    source = _write_source(tmp_path / "photo.png")

    result = runner.invoke(app, ["render", str(source)])

    assert result.exit_code == 0
    assert (tmp_path / "photo-edited.tiff").exists()


def test_invalid_settings_file_exits_with_error(tmp_path: Path):
    source = _write_source(tmp_path / "photo.png")
    settings = _write_settings(tmp_path / "settings.json", export={"format": "GIF"})

    result = runner.invoke(app, ["--settings", str(settings), "render", str(source)])

    assert result.exit_code == 1
    assert not (tmp_path / "photo-edited.png").exists()
