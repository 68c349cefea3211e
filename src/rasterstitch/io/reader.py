"""Image reader for loading source images and painted masks.

This module provides the ImageReader class for decoding image files with
Pillow and converting them into domain pixel buffers.
"""

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from rasterstitch.domain import PixelBuffer
from rasterstitch.exceptions import ImageLoadError


class ImageReader:
    """Loads raster images and exposes them as RGBA pixel buffers.

    Any Pillow-readable format and mode is accepted; the image is converted
    to RGBA on load.

    Example:
        with ImageReader(Path("logo.png")) as reader:
            pixels = reader.pixels
    """

    def __init__(self, image_path: Path) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to the image file
        """
        self._image_path = image_path
        self._image: Image.Image | None = None
        self._format: str | None = None

    def load(self) -> None:
        """Decode the image file.

        Raises:
            FileNotFoundError: If the image file does not exist
            ImageLoadError: If the file is not a readable image
        """
        if not self._image_path.exists():
            raise FileNotFoundError(f"Image file not found: {self._image_path}")

        try:
            with Image.open(self._image_path) as image:
                self._format = image.format or "unknown"
                self._image = image.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

    def _require_image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Image not loaded. Call load() first.")
        return self._image

    @property
    def format(self) -> str:
        """Return the decoded file format (e.g. 'PNG', 'JPEG').

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        self._require_image()
        return self._format or "unknown"

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height) in pixels.

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        return self._require_image().size

    @property
    def pixels(self) -> PixelBuffer:
        """Return the image as an RGBA pixel buffer.

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        return PixelBuffer.from_array(np.asarray(self._require_image(), dtype=np.uint8))

    def close(self) -> None:
        """Release the decoded image."""
        if self._image is not None:
            self._image.close()
            self._image = None

    def __enter__(self) -> "ImageReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def read_pixels(image_path: Path) -> PixelBuffer:
    """Load an image file as an RGBA pixel buffer."""
    with ImageReader(image_path) as reader:
        return reader.pixels
