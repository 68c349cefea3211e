"""Core processing algorithms for rasterstitch.

This module contains the core algorithms for:

- Mask extraction (Rec. 709 luminance, Otsu threshold, manual override)
- Stitch tracing (angled scanline fill with implicit jumps)
- Record encoding (delta splitting, Tajima 3-byte packing)
- DST serialization (header fields, record stream, end record)

All functions are designed to be:
- Pure (no side effects, no shared state between calls)
- Deterministic (identical input gives identical bytes)

Key functions:
- compute_mask: Derive the foreground mask of an image
- trace_stitches: Fill a mask with angled scanline stitches
- split_delta: Split a move into per-record parts
- encode_deltas: Encode a point sequence as stitch records
- serialize: Build a complete DST file

Key classes:
- ConversionSession: Immutable result of thresholding and tracing
- DesignProcessor: Orchestrates file conversion
"""

from rasterstitch.core.dst import DstDesign, build_design, serialize
from rasterstitch.core.encoder import (
    encode_deltas,
    encode_move,
    end_record,
    pack_record,
    split_delta,
)
from rasterstitch.core.geometry import round_half_up, units_per_pixel
from rasterstitch.core.processor import ConversionSession, DesignProcessor
from rasterstitch.core.scanline import trace_stitches
from rasterstitch.core.threshold import (
    compute_mask,
    luminance,
    otsu_threshold,
    resolve_mask,
)

__all__ = [
    # Processor classes
    "ConversionSession",
    "DesignProcessor",
    # DST
    "DstDesign",
    "build_design",
    # Threshold functions
    "compute_mask",
    # Encoder functions
    "encode_deltas",
    "encode_move",
    "end_record",
    "luminance",
    "otsu_threshold",
    "pack_record",
    "resolve_mask",
    "round_half_up",
    "serialize",
    "split_delta",
    # Scanline functions
    "trace_stitches",
    "units_per_pixel",
]
