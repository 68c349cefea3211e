"""Design writer for saving stitch files.

This module provides the DesignWriter class for writing a traced design
as DST, with optional SVG and PNG preview companions.
"""

from pathlib import Path

from rasterstitch.domain import StitchPath
from rasterstitch.exceptions import DesignSaveError
from rasterstitch.io.preview import render_preview
from rasterstitch.io.svg import to_svg

DST_SUFFIX = ".dst"
SVG_SUFFIX = ".svg"
PREVIEW_SUFFIX = "-preview.png"


class DesignWriter:
    """Writes design files next to a chosen DST output path.

    Companion files share the DST file's stem: design.dst, design.svg
    and design-preview.png.

    Example:
        writer = DesignWriter(Path("out/logo.dst"))
        writer.write_dst(data)
        writer.write_svg(path, 200, 120)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the design writer.

        Args:
            output_path: Path of the DST file
        """
        self._output_path = output_path

    @property
    def dst_path(self) -> Path:
        """Path of the DST file."""
        return self._output_path

    @property
    def svg_path(self) -> Path:
        """Path of the SVG companion file."""
        return self._output_path.with_suffix(SVG_SUFFIX)

    @property
    def preview_path(self) -> Path:
        """Path of the PNG preview companion file."""
        return self._output_path.with_name(self._output_path.stem + PREVIEW_SUFFIX)

    def _write(self, path: Path, data: bytes) -> Path:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise DesignSaveError(str(path), str(e)) from e
        return path

    def write_dst(self, data: bytes) -> Path:
        """Write serialized DST bytes.

        Raises:
            DesignSaveError: If the file cannot be written
        """
        return self._write(self.dst_path, data)

    def write_svg(self, path: StitchPath, width: int, height: int) -> Path:
        """Write the SVG rendering of a stitch path.

        Raises:
            DesignSaveError: If the file cannot be written
        """
        return self._write(self.svg_path, to_svg(path, width, height).encode("utf-8"))

    def write_preview(self, path: StitchPath, width: int, height: int, scale: float = 1.0) -> Path:
        """Render and write the PNG stitch preview.

        Raises:
            DesignSaveError: If the file cannot be written
        """
        target = self.preview_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            render_preview(path, width, height, scale=scale).save(target, format="PNG")
        except OSError as e:
            raise DesignSaveError(str(target), str(e)) from e
        return target

    @staticmethod
    def get_design_path(input_path: Path) -> Path:
        """Generate the default DST path for an input image.

        Converts: logo.png -> logo.dst
                  photos/cat.jpeg -> photos/cat.dst

        Args:
            input_path: Source image path

        Returns:
            Path with the .dst extension in the same directory
        """
        return input_path.with_suffix(DST_SUFFIX)
