"""Geometry and scale helpers shared by the tracer and the DST writer."""

import math
from collections.abc import Sequence

from rasterstitch.config import HoopSize
from rasterstitch.exceptions import InvalidCanvasError

UNITS_PER_MM = 10

Coord = tuple[float, float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity.

    Python's round() rounds halves to even, which would shift stitches
    by one unit relative to the usual rounding convention.
    """
    return math.floor(value + 0.5)


def units_per_pixel(canvas_width: int, canvas_height: int, hoop: HoopSize | str) -> float:
    """Scale from canvas pixels to DST units (0.1 mm).

    The canvas is fitted inside the hoop while preserving its aspect ratio.

    Args:
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels
        hoop: Hoop size or selector string; unknown selectors mean 4x4

    Returns:
        DST units per pixel

    Raises:
        InvalidCanvasError: If either canvas dimension is not positive
    """
    if canvas_width <= 0 or canvas_height <= 0:
        raise InvalidCanvasError(canvas_width, canvas_height)
    if not isinstance(hoop, HoopSize):
        hoop = HoopSize.from_selector(hoop)
    hoop_w, hoop_h = hoop.dimensions_mm
    mm_per_pixel = min(hoop_w / canvas_width, hoop_h / canvas_height)
    return UNITS_PER_MM * mm_per_pixel


def bounds(coords: Sequence[Coord]) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y) of a non-empty coordinate list."""
    xs = [c[0] for c in coords]
    ys = [c[1] for c in coords]
    return (min(xs), min(ys), max(xs), max(ys))


def center_coords(coords: Sequence[Coord]) -> list[Coord]:
    """Translate coordinates so their bounding-box center is the origin."""
    min_x, min_y, max_x, max_y = bounds(coords)
    cx, cy = (min_x + max_x) / 2, (min_y + max_y) / 2
    return [(x - cx, y - cy) for x, y in coords]
