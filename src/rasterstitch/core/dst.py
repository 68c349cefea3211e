"""Tajima DST serialization.

A DST file is a 512-byte text header followed by 3-byte stitch records and
a single end-of-design record. The header needs the extents of the whole
design, so the file is assembled only after every record is known.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from rasterstitch.core.encoder import encode_deltas, end_record, records_to_bytes, scale_points
from rasterstitch.core.geometry import bounds, center_coords, round_half_up
from rasterstitch.domain import DesignHeader, EncodedRecord, StitchPoint
from rasterstitch.domain.header import HEADER_SIZE
from rasterstitch.domain.stitch import RECORD_SIZE

DEFAULT_LABEL = "DESIGN"


@dataclass(frozen=True)
class DstDesign:
    """A fully encoded design, ready to be written.

    Attributes:
        header: Computed header fields
        records: Stitch records, excluding the end record
    """

    header: DesignHeader
    records: tuple[EncodedRecord, ...]

    @property
    def stitch_count(self) -> int:
        """Number of stitch records, excluding the end record."""
        return len(self.records)

    @property
    def byte_size(self) -> int:
        """Size of the serialized file in bytes."""
        return HEADER_SIZE + RECORD_SIZE * (len(self.records) + 1)

    def to_bytes(self) -> bytes:
        """Serialize as header, records and end record."""
        return self.header.to_bytes() + records_to_bytes(self.records) + end_record().data


def build_design(
    path: Sequence[StitchPoint | tuple[float, float]],
    units_per_pixel: float,
    label: str = DEFAULT_LABEL,
) -> DstDesign:
    """Encode a stitch path into header fields and records.

    Points are scaled to 0.1 mm and centered so the middle of their bounding
    box sits at the origin. The header offsets record where that box sat
    before centering, as the negated scaled minimum. Fewer than two points
    produce an empty design.

    Args:
        path: Stitch points in pixel coordinates
        units_per_pixel: Scale from pixels to 0.1 mm
        label: Design label for the header

    Returns:
        DstDesign with header and records
    """
    if len(path) < 2:
        return DstDesign(header=DesignHeader(label=label), records=())

    scaled = scale_points(path, units_per_pixel)
    min_x, min_y, max_x, max_y = bounds(scaled)
    centered = center_coords(scaled)
    records = tuple(encode_deltas(centered))

    header = DesignHeader(
        label=label,
        stitch_count=len(records),
        extent_x=round_half_up(max_x - min_x),
        extent_y=round_half_up(max_y - min_y),
        offset_x=-round_half_up(min_x),
        offset_y=-round_half_up(min_y),
    )
    return DstDesign(header=header, records=records)


def serialize(
    path: Sequence[StitchPoint | tuple[float, float]],
    units_per_pixel: float,
    label: str = DEFAULT_LABEL,
) -> bytes:
    """Serialize a stitch path as a DST file.

    Args:
        path: Stitch points in pixel coordinates
        units_per_pixel: Scale from pixels to 0.1 mm
        label: Design label for the header

    Returns:
        The complete file: 512 + 3 * (records + 1) bytes
    """
    return build_design(path, units_per_pixel, label=label).to_bytes()
