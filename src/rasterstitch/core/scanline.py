"""Angled scanline fill tracing.

The foreground of a mask is covered by a family of parallel scan lines at a
chosen angle. Each line is walked in unit steps directly in mask
coordinates, so no rotated copy of the mask is ever rasterized. The runs
where a line crosses the foreground become stitch segments, chained into a
single path.
"""

import math

import numpy as np

from rasterstitch.core.geometry import round_half_up
from rasterstitch.domain import Mask, StitchPath, StitchPoint

MIN_STEP_PX = 1.0
MIN_STITCH_PX = 1.0
LINE_MARGIN = 1.2
JUMP_FACTOR = 2.0

Segment = tuple[tuple[int, int], tuple[int, int]]


def scan_offsets(span: float, step_px: float) -> list[float]:
    """Perpendicular offsets of the scan lines, in units of step_px.

    The offsets are symmetric around zero and run in unit increments from
    -n/2 to n/2, where n = max(1, floor(span / step_px)). For odd n they
    fall on half-integers.
    """
    n_lines = max(1, math.floor(span / step_px))
    return [-n_lines / 2 + k for k in range(n_lines + 1)]


def walk_line(
    mask: Mask,
    start: tuple[float, float],
    end: tuple[float, float],
    steps: int | None = None,
) -> list[tuple[int, int]]:
    """Sample a mask along a line and report foreground transitions.

    The line is walked in ceil(length) unit steps, sampling the mask at the
    rounded coordinate of each step. Each background to foreground change
    marks a segment start, each foreground to background change a segment
    end, both at the sampled point. A walk that finishes inside the
    foreground is closed at the rounded end point.

    Args:
        mask: Foreground mask
        start: Line start in pixel coordinates
        end: Line end in pixel coordinates
        steps: Number of unit steps (default: ceil of the line length)

    Returns:
        Alternating start / end markers as integer (x, y) pairs
    """
    sx, sy = start
    ex, ey = end
    if steps is None:
        steps = math.ceil(math.hypot(ex - sx, ey - sy))
    steps = max(1, steps)
    t = np.arange(steps + 1) / steps
    xs = np.floor(sx + (ex - sx) * t + 0.5).astype(np.int64)
    ys = np.floor(sy + (ey - sy) * t + 0.5).astype(np.int64)

    valid = (xs >= 0) & (ys >= 0) & (xs < mask.width) & (ys < mask.height)
    inside = np.zeros(xs.shape, dtype=bool)
    inside[valid] = mask.data[ys[valid], xs[valid]]

    previous = np.concatenate(([False], inside[:-1]))
    markers = [(int(xs[i]), int(ys[i])) for i in np.flatnonzero(inside != previous)]
    if inside[-1]:
        markers.append((round_half_up(ex), round_half_up(ey)))
    return markers


def pair_segments(
    markers: list[tuple[int, int]],
    bbox: tuple[int, int, int, int],
) -> list[Segment]:
    """Pair start / end markers into segments clipped to a bounding box."""
    min_x, min_y, max_x, max_y = bbox

    def clip(p: tuple[int, int]) -> tuple[int, int]:
        return (min(max_x, max(min_x, p[0])), min(max_y, max(min_y, p[1])))

    return [
        (clip(markers[i]), clip(markers[i + 1]))
        for i in range(0, len(markers) - 1, 2)
    ]


def decimate(points: list[tuple[int, int]], min_step: float = MIN_STITCH_PX) -> list[tuple[int, int]]:
    """Drop points closer than min_step to the previously kept point."""
    kept: list[tuple[int, int]] = []
    for p in points:
        if not kept or math.hypot(p[0] - kept[-1][0], p[1] - kept[-1][1]) >= min_step:
            kept.append(p)
    return kept


def trace_stitches(mask: Mask, step_px: float = 4.0, angle_deg: float = 45.0) -> StitchPath:
    """Fill the foreground of a mask with angled scanline stitches.

    Lines run at angle_deg (0 = horizontal), spaced step_px apart along the
    perpendicular and centered on the foreground bounding box. Segments are
    chained in line order. A segment whose start lies within
    2 * step_px of the previous point continues the path directly from
    there; a farther start is emitted as its own point, and the long move to
    it is the jump.

    Args:
        mask: Foreground mask
        step_px: Scan line spacing in pixels, clamped to at least 1
        angle_deg: Scan direction in degrees

    Returns:
        StitchPath with every point inside the mask bounds; empty when the
        mask has no foreground
    """
    step = max(MIN_STEP_PX, float(step_px))
    bbox = mask.bounding_box()
    if bbox is None:
        return StitchPath()

    min_x, min_y, max_x, max_y = bbox
    rad = angle_deg * math.pi / 180
    cos_a, sin_a = math.cos(rad), math.sin(rad)
    ux, uy = math.cos(rad + math.pi / 2), math.sin(rad + math.pi / 2)
    cx, cy = (min_x + max_x) / 2, (min_y + max_y) / 2
    span = abs(ux) * (max_x - min_x) + abs(uy) * (max_y - min_y)
    length = math.hypot(mask.width, mask.height) * LINE_MARGIN
    line_steps = math.ceil(length)
    jump_distance = step * JUMP_FACTOR

    points: list[tuple[int, int]] = []
    for offset in scan_offsets(span, step):
        ox = cx + ux * offset * step
        oy = cy + uy * offset * step
        start = (ox - cos_a * length / 2, oy - sin_a * length / 2)
        end = (ox + cos_a * length / 2, oy + sin_a * length / 2)

        for a, b in pair_segments(walk_line(mask, start, end, line_steps), bbox):
            if not points or math.hypot(a[0] - points[-1][0], a[1] - points[-1][1]) > jump_distance:
                points.append(a)
            points.append(b)

    return StitchPath(StitchPoint(x, y) for x, y in decimate(points))
