"""Tajima stitch record encoding.

A DST record moves the needle by (dx, dy) in 0.1 mm units. Each axis is
written as five balanced-ternary digits with weights 1, 3, 9, 27 and 81,
every digit stored as a +/- bit pair, so a single record reaches at most
+/-121 units. Longer moves are split across several records.

Record layout (bit 7 ... bit 0):

    byte 0:  y+1  y-1  y+9  y-9  x-9  x+9  x-1  x+1
    byte 1:  y+3  y-3  y+27 y-27 x-27 x+27 x-3  x+3
    byte 2:  jump  0   y+81 y-81 x-81 x+81  1    1

DST's y axis points up while image rows grow downward, so dy is negated
as it is packed.

This is the standard Tajima digit layout, the one pyembroidery reads and
writes, rather than a plain signed-magnitude bit field.
"""

from collections.abc import Iterable, Sequence

from rasterstitch.core.geometry import round_half_up
from rasterstitch.domain import EncodedRecord, RecordFlag, StitchPoint
from rasterstitch.exceptions import DeltaRangeError

MAX_DELTA = 121

END_RECORD_BYTES = b"\x00\x00\xf3"

_BYTE2_FIXED = 0x03
_BYTE2_JUMP = 0x80

# (weight, byte index, positive bit, negative bit), largest weight first
_X_DIGITS = (
    (81, 2, 2, 3),
    (27, 1, 2, 3),
    (9, 0, 2, 3),
    (3, 1, 0, 1),
    (1, 0, 0, 1),
)
_Y_DIGITS = (
    (81, 2, 5, 4),
    (27, 1, 5, 4),
    (9, 0, 5, 4),
    (3, 1, 7, 6),
    (1, 0, 7, 6),
)


def split_delta(delta: int) -> list[int]:
    """Split a move into parts that each fit one record.

    Whole +/-121 steps are peeled off while the magnitude exceeds 121, then
    the remainder is appended.

    Args:
        delta: Move along one axis in 0.1 mm units

    Returns:
        Parts in [-121, 121] summing to delta; [0] for a zero move

    Example:
        >>> split_delta(300)
        [121, 121, 58]
        >>> split_delta(-150)
        [-121, -29]
    """
    parts: list[int] = []
    remaining = int(delta)
    while remaining > MAX_DELTA:
        parts.append(MAX_DELTA)
        remaining -= MAX_DELTA
    while remaining < -MAX_DELTA:
        parts.append(-MAX_DELTA)
        remaining += MAX_DELTA
    parts.append(remaining)
    return parts


def _pack_axis(value: int, digits: tuple[tuple[int, int, int, int], ...], out: bytearray) -> None:
    """OR the balanced-ternary digits of one axis into a record."""
    for weight, index, pos_bit, neg_bit in digits:
        half = weight // 2
        if value > half:
            out[index] |= 1 << pos_bit
            value -= weight
        elif value < -half:
            out[index] |= 1 << neg_bit
            value += weight


def pack_record(dx: int, dy: int, flag: RecordFlag = RecordFlag.NORMAL) -> EncodedRecord:
    """Pack one move into a 3-byte record.

    Args:
        dx: Horizontal move, already within [-121, 121]
        dy: Vertical move in image orientation, already within [-121, 121]
        flag: NORMAL or JUMP; END yields the end-of-design record

    Returns:
        EncodedRecord holding the packed bytes

    Raises:
        DeltaRangeError: If a delta is outside [-121, 121]
    """
    if flag == RecordFlag.END:
        return end_record()
    for delta in (dx, dy):
        if not -MAX_DELTA <= delta <= MAX_DELTA:
            raise DeltaRangeError(delta)

    out = bytearray(3)
    out[2] = _BYTE2_FIXED
    if flag == RecordFlag.JUMP:
        out[2] |= _BYTE2_JUMP
    _pack_axis(dx, _X_DIGITS, out)
    _pack_axis(-dy, _Y_DIGITS, out)
    return EncodedRecord(dx=dx, dy=dy, flag=flag, data=bytes(out))


def end_record() -> EncodedRecord:
    """Return the end-of-design record."""
    return EncodedRecord(dx=0, dy=0, flag=RecordFlag.END, data=END_RECORD_BYTES)


def encode_move(dx: int, dy: int) -> list[EncodedRecord]:
    """Encode one move as as many normal records as its size requires.

    The X and Y parts are aligned position by position; the shorter list is
    padded with zeros, so a long move on one axis holds the other still.
    """
    parts_x = split_delta(dx)
    parts_y = split_delta(dy)
    n = max(len(parts_x), len(parts_y))
    parts_x += [0] * (n - len(parts_x))
    parts_y += [0] * (n - len(parts_y))
    return [pack_record(px, py) for px, py in zip(parts_x, parts_y)]


def scale_points(
    points: Iterable[StitchPoint | tuple[float, float]],
    units_per_pixel: float,
) -> list[tuple[float, float]]:
    """Convert pixel coordinates to 0.1 mm units."""
    scaled = []
    for p in points:
        x, y = (p.x, p.y) if isinstance(p, StitchPoint) else p
        scaled.append((x * units_per_pixel, y * units_per_pixel))
    return scaled


def encode_deltas(
    points: Sequence[StitchPoint | tuple[float, float]],
    units_per_pixel: float | None = None,
) -> list[EncodedRecord]:
    """Encode a point sequence as a stream of normal stitch records.

    Each move between consecutive points is rounded half-up to whole units
    and split as needed. The end record is not included.

    Args:
        points: Stitch points, in pixels or already in 0.1 mm units
        units_per_pixel: Scale from pixels to 0.1 mm; None when points are
            already in 0.1 mm units

    Returns:
        Records in stitch order
    """
    scale = 1.0 if units_per_pixel is None else units_per_pixel
    coords = scale_points(points, scale)

    records: list[EncodedRecord] = []
    for (x0, y0), (x1, y1) in zip(coords, coords[1:]):
        records.extend(encode_move(round_half_up(x1 - x0), round_half_up(y1 - y0)))
    return records


def records_to_bytes(records: Iterable[EncodedRecord]) -> bytes:
    """Concatenate packed records."""
    return b"".join(r.data for r in records)
