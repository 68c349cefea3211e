"""Raster types for image and mask representation.

This module defines the pixel-level inputs of the stitch pipeline:
- PixelBuffer: An RGBA image as flat interleaved bytes
- Mask: A boolean foreground map with the same dimensions
"""

from dataclasses import dataclass, field

import numpy as np

CHANNELS = 4


@dataclass(frozen=True, slots=True)
class PixelBuffer:
    """An RGBA image in row-major order with a top-left origin.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        data: Flat interleaved R, G, B, A bytes, four per pixel
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * CHANNELS
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid buffer size {self.width}x{self.height}")
        if len(self.data) != expected:
            raise ValueError(
                f"Pixel data has {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (H, W, 4) uint8 array.

        Args:
            array: RGBA image array

        Returns:
            PixelBuffer holding a copy of the array bytes
        """
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise ValueError(f"Expected an (H, W, 4) array, got shape {array.shape}")
        height, width = array.shape[:2]
        return cls(
            width=width,
            height=height,
            data=np.ascontiguousarray(array, dtype=np.uint8).tobytes(),
        )

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)

    def as_array(self) -> np.ndarray:
        """Return a read-only (H, W, 4) uint8 view of the pixel data."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS
        )

    def has_opacity(self) -> bool:
        """Check if any pixel has a non-zero alpha byte."""
        if not self.data:
            return False
        return bool(np.any(self.as_array()[:, :, 3]))


@dataclass(frozen=True, eq=False)
class Mask:
    """Boolean foreground map; True marks the region to stitch.

    The underlying array is made read-only on construction so a mask can
    be shared between pipeline stages without copying.

    Attributes:
        width: Mask width in pixels
        height: Mask height in pixels
        data: Boolean array of shape (height, width)
    """

    width: int
    height: int
    data: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        array = np.array(self.data, dtype=bool, copy=True)
        if array.shape != (self.height, self.width):
            raise ValueError(
                f"Mask array shape {array.shape} does not match "
                f"{self.width}x{self.height}"
            )
        array.setflags(write=False)
        object.__setattr__(self, "data", array)

    @classmethod
    def empty(cls, width: int, height: int) -> "Mask":
        """Create a mask with no foreground pixels."""
        return cls(width=width, height=height, data=np.zeros((height, width), dtype=bool))

    @classmethod
    def from_alpha(cls, pixels: PixelBuffer) -> "Mask":
        """Create a mask from the alpha channel of a painted buffer.

        Any pixel with non-zero alpha is foreground.
        """
        return cls(
            width=pixels.width,
            height=pixels.height,
            data=pixels.as_array()[:, :, 3] > 0,
        )

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)

    def is_foreground(self, x: int, y: int) -> bool:
        """Check a pixel, treating everything outside the mask as background."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        return bool(self.data[y, x])

    def count(self) -> int:
        """Number of foreground pixels."""
        return int(np.count_nonzero(self.data))

    def is_empty(self) -> bool:
        """Check if the mask has no foreground pixels."""
        return not self.data.any()

    def bounding_box(self) -> tuple[int, int, int, int] | None:
        """Tight bounding box of the foreground.

        Returns:
            (min_x, min_y, max_x, max_y) with inclusive maxima, or None when
            the mask is empty
        """
        ys, xs = np.nonzero(self.data)
        if xs.size == 0:
            return None
        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mask):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.data, other.data))
