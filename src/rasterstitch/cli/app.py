"""CLI application entry point for rasterstitch.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from rasterstitch import __version__
from rasterstitch.cli.output import (
    console,
    print_empty_design_notice,
    print_error,
    print_header,
    print_image_info,
    print_mask_info,
    print_step,
    print_success,
    print_trace_info,
)
from rasterstitch.config import (
    ExportConfig,
    HoopSize,
    LoggingConfig,
    RasterStitchSettings,
    StitchConfig,
)
from rasterstitch.core import DesignProcessor, units_per_pixel
from rasterstitch.core.geometry import UNITS_PER_MM
from rasterstitch.exceptions import (
    DesignSaveError,
    ImageLoadError,
    MaskDimensionError,
    RasterStitchError,
)

# Create the Typer app
app = typer.Typer(
    name="rasterstitch",
    help="Convert raster images to Tajima DST embroidery files.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Rasterstitch[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def convert(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (PNG, JPEG, BMP, ...)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output DST path (default: {name}.dst)",
        ),
    ] = None,
    mask: Annotated[
        Path | None,
        typer.Option(
            "--mask",
            "-m",
            help="Painted mask image of the same size; opaque pixels are stitched",
        ),
    ] = None,
    step: Annotated[
        float,
        typer.Option(
            "--step",
            "-s",
            help="Scan line spacing in pixels",
            min=1.0,
        ),
    ] = 4.0,
    angle: Annotated[
        float,
        typer.Option(
            "--angle",
            "-a",
            help="Scan line angle in degrees (0 = horizontal)",
        ),
    ] = 45.0,
    hoop: Annotated[
        str,
        typer.Option(
            "--hoop",
            help="Hoop size (4x4|5x7|6x10)",
        ),
    ] = "4x4",
    label: Annotated[
        str,
        typer.Option(
            "--label",
            help="Design label stored in the DST header (max 16 characters)",
        ),
    ] = "DESIGN",
    svg: Annotated[
        bool,
        typer.Option(
            "--svg",
            help="Also write an SVG of the stitch path",
        ),
    ] = False,
    preview: Annotated[
        bool,
        typer.Option(
            "--preview",
            help="Also write a PNG stitch preview",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert an image to an embroidery design.

    Dark regions of the image are filled with parallel stitch lines at the
    chosen angle and written as a Tajima DST file scaled to the hoop.

    Example:
        rasterstitch logo.png --hoop 5x7 --angle 30 --svg

    This will create logo.dst and logo.svg next to the image.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input files exist
    for path, kind in ((input_image, "Input"), (mask, "Mask")):
        if path is None:
            continue
        if not path.exists():
            print_error(
                f"{kind} file not found: {path}",
                details=f"The file '{path}' does not exist or is not accessible.",
            )
            raise typer.Exit(code=1)
        if not path.is_file():
            print_error(
                f"{kind} path is not a file: {path}",
                details="Please provide a path to an image file.",
            )
            raise typer.Exit(code=1)

    # Validate hoop argument
    try:
        hoop_size = HoopSize(hoop.lower())
    except ValueError:
        print_error(
            f"Invalid hoop: {hoop}",
            details="Valid values: " + ", ".join(h.value for h in HoopSize),
        )
        raise typer.Exit(code=1)

    # Create settings from CLI arguments
    try:
        settings = RasterStitchSettings(
            stitch=StitchConfig(step_px=step, angle_deg=angle),
            export=ExportConfig(
                hoop=hoop_size,
                label=label,
                write_svg=svg,
                write_preview=preview,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "ERROR",
            ),
        )
    except ValidationError as e:
        print_error("Invalid settings", details=str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_step("Converting")

    try:
        processor = DesignProcessor(settings)
        stats = processor.process(
            image_path=input_image,
            output_path=output,
            mask_path=mask,
        )
    except ImageLoadError as e:
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)
    except MaskDimensionError as e:
        print_error("Mask does not fit the image", details=str(e))
        raise typer.Exit(code=1)
    except DesignSaveError as e:
        print_error(f"Could not save design: {e.reason}")
        raise typer.Exit(code=1)
    except RasterStitchError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)

    if quiet:
        return

    width, height = stats.image_size
    scale_mm = units_per_pixel(width, height, hoop_size) / UNITS_PER_MM
    print_image_info(str(input_image), stats.image_size, hoop_size.value, (width * scale_mm, height * scale_mm))
    print_mask_info(stats.threshold, stats.foreground_pixels, width * height)
    print_trace_info(stats.point_count, stats.jump_count, step, angle, verbose)
    if stats.record_count == 0:
        print_empty_design_notice()

    print_success(
        output_files=stats.output_files,
        total_time_s=stats.duration_seconds,
        records=stats.record_count,
        extent_mm=stats.extent_mm,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
