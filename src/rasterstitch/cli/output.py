"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""

from pathlib import Path

from rich.console import Console
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Rasterstitch[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(image_path: str, size: tuple[int, int], hoop: str, mm_size: tuple[float, float]) -> None:
    """Print source image information.

    Args:
        image_path: Path to the image file
        size: Image (width, height) in pixels
        hoop: Hoop selector
        mm_size: Stitched canvas (width, height) in millimetres
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(image_path)
    console.print(line1)
    console.print(
        f"  {size[0]}x{size[1]} px {SYM_DOT} hoop {hoop} "
        f"{SYM_DOT} {mm_size[0]:.1f}x{mm_size[1]:.1f} mm"
    )


def print_mask_info(threshold: int | None, foreground: int, total: int) -> None:
    """Print mask derivation result.

    Args:
        threshold: Otsu threshold, or None for a manual mask
        foreground: Number of foreground pixels
        total: Total number of pixels
    """
    source = "manual mask" if threshold is None else f"threshold {threshold}"
    share = (foreground / total * 100) if total else 0.0
    console.print(f"  {source} {SYM_DOT} [green]{foreground:,}[/green] foreground px ({share:.1f}%)")


def print_trace_info(points: int, jumps: int, step_px: float, angle_deg: float, verbose: bool) -> None:
    """Print tracing result.

    Args:
        points: Number of stitch points
        jumps: Number of jump moves
        step_px: Scan line spacing
        angle_deg: Scan direction
        verbose: Whether to show tracing parameters
    """
    console.print(f"  [green]{points:,}[/green] stitch points {SYM_DOT} {jumps} jumps")
    if verbose:
        console.print(f"  step {step_px:g} px {SYM_DOT} angle {angle_deg:g}°")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def print_success(
    output_files: list[Path],
    total_time_s: float,
    records: int,
    extent_mm: tuple[float, float],
) -> None:
    """Print success message with summary.

    Args:
        output_files: Files written, DST first
        total_time_s: Total processing time in seconds
        records: Number of DST stitch records
        extent_mm: Design (width, height) in millimetres
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    for path in output_files:
        line = Text("  ")
        line.append(str(path), style="bold")
        line.append(f" ({format_file_size(path)})")
        console.print(line)

    console.print(
        f"  {records:,} stitches {SYM_DOT} {extent_mm[0]:.1f} x {extent_mm[1]:.1f} mm"
    )


def print_empty_design_notice() -> None:
    """Print a warning for a design without stitches."""
    console.print(f"  [yellow]No foreground found {SYM_DOT} the design has no stitches[/yellow]")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
