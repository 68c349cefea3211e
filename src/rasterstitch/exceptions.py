"""Exception hierarchy for Rasterstitch."""


class RasterStitchError(Exception):
    """Base exception for all Rasterstitch errors."""

    pass


class ImageError(RasterStitchError):
    """Errors related to image or mask loading."""

    pass


class ImageLoadError(ImageError):
    """Error loading an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class MaskDimensionError(ImageError):
    """Manual mask does not match the source image size."""

    def __init__(self, expected: tuple[int, int], actual: tuple[int, int]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Mask size {actual[0]}x{actual[1]} does not match image size "
            f"{expected[0]}x{expected[1]}"
        )


class ExportError(RasterStitchError):
    """Errors related to writing design files."""

    pass


class DesignSaveError(ExportError):
    """Error saving a design file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save design '{path}': {reason}")


class EncodingError(RasterStitchError):
    """Errors in stitch record encoding."""

    pass


class DeltaRangeError(EncodingError, AssertionError):
    """A stitch delta outside the per-record range reached the packer."""

    def __init__(self, delta: int) -> None:
        self.delta = delta
        super().__init__(f"Stitch delta {delta} outside record range [-121, 121]")


class ConfigurationError(RasterStitchError):
    """Invalid conversion configuration."""

    pass


class InvalidCanvasError(ConfigurationError):
    """Canvas size cannot be mapped onto a hoop."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Cannot scale a {width}x{height} canvas to a hoop")
