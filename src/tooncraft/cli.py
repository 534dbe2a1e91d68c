"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from .config import EDITOR_ASPECT_RATIOS, GENERATION_ASPECT_LABELS, OUTPUT_SUFFIXES
from .core.aspect import aspect_label, parse_aspect_ratio
from .core.crop_mapper import map_crop
from .core.export import render, write_encoded
from .core.filters.presets import FILTER_PRESETS, apply_preset
from .errors import DecodeError, ToonCraftError, ValidationError
from .models.types import AdjustmentState, CropState
from .settings.manager import load_editor_settings
from .settings.schema import EditorSettings
from .utils.console_logger import ensure_console_logger

app = typer.Typer(help="Crop, zoom and colour-adjust images the way the studio editor does")

_ASPECT_HELP = (
    "Aspect lock: "
    + ", ".join(f'"{label}"' for label, _ in EDITOR_ASPECT_RATIOS)
    + " or a ratio such as "
    + ", ".join(GENERATION_ASPECT_LABELS)
)


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (ValidationError, DecodeError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except ToonCraftError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.callback()
@_handle_errors
def main(
    ctx: typer.Context,
    settings_path: Optional[Path] = typer.Option(
        None,
        "--settings",
        dir_okay=False,
        help="Settings JSON to use instead of the per-user settings file",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    settings = load_editor_settings(settings_path)
    ctx.obj = settings
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    ensure_console_logger(logging.getLogger("tooncraft"), "tooncraft-cli", level=level)


def _build_adjustments(
    preset: Optional[str],
    overrides: dict[str, Optional[float]],
) -> AdjustmentState:
    state = apply_preset(preset) if preset else AdjustmentState.identity()
    for name, value in overrides.items():
        if value is not None:
            state = state.with_value(name, value)
    return state


@app.command(name="render")
@_handle_errors
def render_command(
    ctx: typer.Context,
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image to edit"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Destination file"),
    aspect: Optional[str] = typer.Option(None, "--aspect", help=_ASPECT_HELP),
    zoom: float = typer.Option(1.0, "--zoom", help="Zoom between 1 and 3"),
    pan_x: float = typer.Option(0.0, "--pan-x", help="Horizontal pan in source pixels"),
    pan_y: float = typer.Option(0.0, "--pan-y", help="Vertical pan in source pixels"),
    preset: Optional[str] = typer.Option(None, "--preset", help="Filter preset applied first"),
    brightness: Optional[float] = typer.Option(None, "--brightness"),
    contrast: Optional[float] = typer.Option(None, "--contrast"),
    saturate: Optional[float] = typer.Option(None, "--saturate"),
    grayscale: Optional[float] = typer.Option(None, "--grayscale"),
    sepia: Optional[float] = typer.Option(None, "--sepia"),
    sampling: Optional[str] = typer.Option(None, "--sampling", help="nearest or bilinear"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing output file"),
) -> None:
    """Crop and adjust SOURCE and write the result in the configured format."""

    settings: EditorSettings = ctx.obj or EditorSettings.defaults()
    crop = CropState().with_aspect_ratio(parse_aspect_ratio(aspect)).with_zoom(zoom).with_pan(pan_x, pan_y)
    adjustments = _build_adjustments(
        preset,
        {
            "brightness": brightness,
            "contrast": contrast,
            "saturate": saturate,
            "grayscale": grayscale,
            "sepia": sepia,
        },
    )
    encoded = render(
        source,
        crop,
        adjustments,
        sampling=sampling or settings.sampling,
        executor=settings.executor,
        image_format=settings.export_format,
    )
    suffix = OUTPUT_SUFFIXES[encoded.format]
    destination = output or source.with_name(f"{source.stem}-edited{suffix}")
    final_dest = write_encoded(encoded, destination, overwrite=overwrite)
    print(f"[green]Saved {encoded.width}x{encoded.height} image to {final_dest}")


@app.command()
@_handle_errors
def rect(
    width: float = typer.Argument(..., help="Source image width"),
    height: float = typer.Argument(..., help="Source image height"),
    aspect: Optional[str] = typer.Option(None, "--aspect", help=_ASPECT_HELP),
    zoom: float = typer.Option(1.0, "--zoom"),
    pan_x: float = typer.Option(0.0, "--pan-x"),
    pan_y: float = typer.Option(0.0, "--pan-y"),
) -> None:
    """Print the source rectangle a crop selection maps to."""

    crop = CropState().with_aspect_ratio(parse_aspect_ratio(aspect)).with_zoom(zoom).with_pan(pan_x, pan_y)
    # No on-screen viewport here; the image size stands in for it.
    result = map_crop(width, height, width, height, crop)
    print(
        f"{aspect_label(crop.aspect_ratio)} zoom={crop.zoom:g}: "
        f"sx={result.sx:g} sy={result.sy:g} width={result.width:g} height={result.height:g}"
    )


@app.command()
def presets() -> None:
    """List the filter presets."""

    table = Table("Preset", "Adjustments")
    for name, config in FILTER_PRESETS.items():
        summary = ", ".join(f"{key}={value:g}" for key, value in config.items()) or "identity"
        table.add_row(name, summary)
    print(table)


if __name__ == "__main__":
    app()
