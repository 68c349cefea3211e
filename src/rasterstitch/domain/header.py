"""DST design header.

The Tajima header is a fixed 512-byte block of colon-delimited text fields,
each left-aligned in a 26 column slot, space padded to 509 bytes and closed
by a 3-byte binary terminator.
"""

from dataclasses import dataclass
from typing import Any

HEADER_SIZE = 512
FIELD_WIDTH = 26
HEADER_TERMINATOR = b"\x1a\x00\x00"
HEADER_TEXT_SIZE = HEADER_SIZE - len(HEADER_TERMINATOR)


def _pad(text: str, width: int) -> str:
    """Left-align text in a fixed-width slot, truncating overflow."""
    return text.ljust(width)[:width]


@dataclass(frozen=True)
class DesignHeader:
    """Summary fields of a DST design.

    Both the "+" and "-" extent fields carry the same unsigned magnitude
    (max - min), which permissive DST readers accept.

    Attributes:
        label: Design name
        stitch_count: Number of stitch records, excluding the end record
        extent_x: Horizontal size in 0.1 mm units
        extent_y: Vertical size in 0.1 mm units
        offset_x: Negated minimum x of the scaled design, before centering
        offset_y: Negated minimum y of the scaled design, before centering
        color_count: Number of thread colors
    """

    label: str = "DESIGN"
    stitch_count: int = 0
    extent_x: int = 0
    extent_y: int = 0
    offset_x: int = 0
    offset_y: int = 0
    color_count: int = 1

    def fields(self) -> list[str]:
        """Return the header fields in file order, unpadded."""
        return [
            f"LA:{self.label}",
            f"ST:{self.stitch_count:>7}",
            f"CO:{self.color_count}",
            f"+X:{self.extent_x:>5}",
            f"-X:{self.extent_x:>5}",
            f"+Y:{self.extent_y:>5}",
            f"-Y:{self.extent_y:>5}",
            f"AX:+{self.offset_x:>5}",
            f"AY:+{self.offset_y:>5}",
            "MX:+00000",
            "MY:+00000",
            "PD:**********",
        ]

    def to_text(self) -> str:
        """Render the 509-character text portion of the header."""
        text = "".join(_pad(f, FIELD_WIDTH) for f in self.fields())
        return _pad(text, HEADER_TEXT_SIZE)

    def to_bytes(self) -> bytes:
        """Render the full 512-byte header."""
        return self.to_text().encode("ascii", errors="replace") + HEADER_TERMINATOR

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for logging and reports."""
        return {
            "label": self.label,
            "stitch_count": self.stitch_count,
            "color_count": self.color_count,
            "extent_x": self.extent_x,
            "extent_y": self.extent_y,
            "offset_x": self.offset_x,
            "offset_y": self.offset_y,
        }
