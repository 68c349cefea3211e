"""Rasterstitch - Convert raster images to embroidery machine stitch files.

Rasterstitch derives a foreground mask from an image with automatic (Otsu)
thresholding, fills that mask with angled scanline stitches and writes the
result as a Tajima DST file, optionally alongside an SVG path and a PNG
stitch preview.

Example:
    $ rasterstitch logo.png --hoop 5x7 --angle 30

This will create logo.dst sized to fit a 130 x 180 mm hoop.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
