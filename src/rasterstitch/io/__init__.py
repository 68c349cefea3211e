"""I/O layer for rasterstitch.

This module handles reading source images with Pillow and writing the
finished design files. It keeps Pillow and the filesystem out of the
core algorithms.

Key responsibilities:
- Decode images and painted masks into RGBA pixel buffers
- Write DST files with the default naming convention
- Render SVG and PNG previews of a stitch path

Key classes:
- ImageReader: Load images as pixel buffers
- DesignWriter: Save design files
"""

from rasterstitch.io.preview import render_preview
from rasterstitch.io.reader import ImageReader, read_pixels
from rasterstitch.io.svg import path_data, to_svg
from rasterstitch.io.writer import DesignWriter

__all__ = [
    "DesignWriter",
    "ImageReader",
    "path_data",
    "read_pixels",
    "render_preview",
    "to_svg",
]
