"""Domain models for rasterstitch.

This module contains the core domain models representing images, masks,
stitch paths and DST records. All models are designed to be:

- Immutable (frozen dataclasses, read-only arrays, tuple-backed paths)
- Independent of Pillow and of any file format details

Key classes:
- PixelBuffer: An RGBA image as flat interleaved bytes
- Mask: A boolean foreground map
- StitchPoint: An integer needle position in pixel space
- StitchPath: An ordered sequence of stitch points
- EncodedRecord: A packed 3-byte DST stitch record
- DesignHeader: The 512-byte DST header
"""

from rasterstitch.domain.header import DesignHeader
from rasterstitch.domain.raster import Mask, PixelBuffer
from rasterstitch.domain.stitch import EncodedRecord, RecordFlag, StitchPath, StitchPoint

__all__: list[str] = [
    # Enums
    "RecordFlag",
    # Raster types
    "Mask",
    "PixelBuffer",
    # Stitch types
    "StitchPoint",
    "StitchPath",
    "EncodedRecord",
    "DesignHeader",
]
