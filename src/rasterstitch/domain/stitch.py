"""Stitch path and record types.

This module defines the stitch-level types produced by the tracer and
consumed by the encoders:
- StitchPoint: An integer pixel coordinate
- StitchPath: An ordered, immutable sequence of stitch points
- RecordFlag: Control flag of a DST stitch record
- EncodedRecord: One packed 3-byte DST record
"""

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import overload

RECORD_SIZE = 3


@dataclass(frozen=True, slots=True)
class StitchPoint:
    """A needle position in pixel space.

    Attributes:
        x: Column, increasing to the right
        y: Row, increasing downward
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "StitchPoint") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)


class StitchPath(Sequence[StitchPoint]):
    """An ordered sequence of stitch points.

    Consecutive points are joined either by a short travel segment or by a
    long jump. No flag is stored for the difference: a consumer that cares
    compares the gap between two points against its own threshold.
    """

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[StitchPoint | tuple[int, int]] = ()) -> None:
        self._points: tuple[StitchPoint, ...] = tuple(
            p if isinstance(p, StitchPoint) else StitchPoint(int(p[0]), int(p[1]))
            for p in points
        )

    @overload
    def __getitem__(self, index: int) -> StitchPoint: ...

    @overload
    def __getitem__(self, index: slice) -> "StitchPath": ...

    def __getitem__(self, index: int | slice) -> "StitchPoint | StitchPath":
        if isinstance(index, slice):
            return StitchPath(self._points[index])
        return self._points[index]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[StitchPoint]:
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StitchPath):
            return self._points == other._points
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"StitchPath({len(self._points)} points)"

    def is_empty(self) -> bool:
        """Check if the path has no points."""
        return not self._points

    def to_tuples(self) -> list[tuple[int, int]]:
        """Convert to a list of (x, y) tuples."""
        return [p.to_tuple() for p in self._points]

    def segments(self) -> Iterator[tuple[StitchPoint, StitchPoint]]:
        """Iterate over consecutive point pairs."""
        return zip(self._points, self._points[1:])

    def jump_count(self, threshold: float) -> int:
        """Count moves longer than threshold.

        Args:
            threshold: Distance in pixels above which a move is a jump

        Returns:
            Number of consecutive point pairs further apart than threshold
        """
        return sum(1 for a, b in self.segments() if a.distance_to(b) > threshold)

    def bounding_box(self) -> tuple[int, int, int, int] | None:
        """Return (min_x, min_y, max_x, max_y), or None for an empty path."""
        if not self._points:
            return None
        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return (min(xs), min(ys), max(xs), max(ys))


class RecordFlag(Enum):
    """Control flag of a DST stitch record."""

    NORMAL = auto()
    JUMP = auto()
    END = auto()


@dataclass(frozen=True, slots=True)
class EncodedRecord:
    """One packed DST stitch record.

    Attributes:
        dx: Horizontal move in 0.1 mm units, within [-121, 121]
        dy: Vertical move in 0.1 mm units (image orientation, +y down)
        flag: Record control flag
        data: The packed 3 bytes
    """

    dx: int
    dy: int
    flag: RecordFlag
    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != RECORD_SIZE:
            raise ValueError(f"DST records are {RECORD_SIZE} bytes, got {len(self.data)}")

    def __bytes__(self) -> bytes:
        return self.data
