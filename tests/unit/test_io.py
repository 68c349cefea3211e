"""Unit tests for the image and design file I/O layer.

Tests for ImageReader, DesignWriter, and the SVG and PNG renderers.
"""

from pathlib import Path
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image, ImageColor

from rasterstitch.domain import PixelBuffer, StitchPath
from rasterstitch.exceptions import DesignSaveError, ImageLoadError
from rasterstitch.io.preview import FABRIC_COLOR, render_preview
from rasterstitch.io.reader import ImageReader, read_pixels
from rasterstitch.io.svg import SVG_NAMESPACE, path_data, to_svg
from rasterstitch.io.writer import DesignWriter


@pytest.fixture
def sample_png(tmp_path: Path) -> Path:
    """Write a small RGB image with a dark square."""
    array = np.full((8, 12, 3), 230, dtype=np.uint8)
    array[2:6, 3:9] = 20
    path = tmp_path / "sample.png"
    Image.fromarray(array).save(path)
    return path


@pytest.fixture
def sample_path() -> StitchPath:
    """A short stitch path."""
    return StitchPath([(0, 1), (9, 1), (9, 5)])


class TestImageReader:
    """Tests for ImageReader class."""

    def test_init(self) -> None:
        """Test ImageReader initialization."""
        path = Path("test.png")
        reader = ImageReader(path)
        assert reader._image_path == path
        assert reader._image is None

    def test_load_nonexistent_file(self) -> None:
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = ImageReader(Path("nonexistent.png"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_properties_before_load(self) -> None:
        """Test accessing properties before loading raises RuntimeError."""
        reader = ImageReader(Path("test.png"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.format
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.size
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.pixels

    def test_load_invalid_file(self, tmp_path: Path) -> None:
        """Test a file that is not an image raises ImageLoadError."""
        bogus = tmp_path / "bogus.png"
        bogus.write_bytes(b"definitely not a png")
        with pytest.raises(ImageLoadError) as exc_info:
            ImageReader(bogus).load()
        assert exc_info.value.path == str(bogus)

    def test_load_oversized_image(self, sample_png: Path) -> None:
        """Test Pillow's size guard is reported as ImageLoadError."""
        with patch(
            "rasterstitch.io.reader.Image.open",
            side_effect=Image.DecompressionBombError("image too large"),
        ):
            with pytest.raises(ImageLoadError, match="image too large"):
                ImageReader(sample_png).load()

    def test_load_converts_to_rgba(self, sample_png: Path) -> None:
        """Test an RGB image is exposed as opaque RGBA."""
        with ImageReader(sample_png) as reader:
            assert reader.format == "PNG"
            assert reader.size == (12, 8)
            pixels = reader.pixels

        assert isinstance(pixels, PixelBuffer)
        assert pixels.size == (12, 8)
        array = pixels.as_array()
        assert array.shape == (8, 12, 4)
        assert (array[:, :, 3] == 255).all()
        assert tuple(array[3, 4]) == (20, 20, 20, 255)
        assert tuple(array[0, 0]) == (230, 230, 230, 255)

    def test_grayscale_image(self, tmp_path: Path) -> None:
        """Test a single-channel image is expanded to RGBA."""
        path = tmp_path / "gray.png"
        Image.fromarray(np.full((3, 4), 77, dtype=np.uint8)).save(path)
        array = read_pixels(path).as_array()
        assert tuple(array[1, 1]) == (77, 77, 77, 255)

    def test_close_releases_image(self, sample_png: Path) -> None:
        """Test close drops the decoded image."""
        reader = ImageReader(sample_png)
        reader.load()
        reader.close()
        with pytest.raises(RuntimeError):
            _ = reader.size


class TestPathData:
    """Tests for SVG path data."""

    def test_empty(self) -> None:
        """Test an empty path has no data."""
        assert path_data(StitchPath()) == ""

    def test_single_point(self) -> None:
        """Test a single point is a lone move."""
        assert path_data(StitchPath([(3, 4)])) == "M3,4"

    def test_polyline(self, sample_path: StitchPath) -> None:
        """Test points become a move then lines."""
        assert path_data(sample_path) == "M0,1 L9,1 L9,5"


class TestToSvg:
    """Tests for SVG documents."""

    def test_document(self, sample_path: StitchPath) -> None:
        """Test the document structure."""
        svg = to_svg(sample_path, 12, 8)
        assert svg.startswith(
            f'<svg xmlns="{SVG_NAMESPACE}" width="12" height="8" viewBox="0 0 12 8">'
        )
        assert 'd="M0,1 L9,1 L9,5"' in svg
        assert 'stroke="black"' in svg
        assert 'fill="none"' in svg
        assert 'stroke-width="1"' in svg
        assert svg.endswith("</svg>\n")

    def test_empty_path_has_no_path_element(self) -> None:
        """Test an empty path gives an empty document."""
        svg = to_svg(StitchPath(), 5, 5)
        assert "<path" not in svg
        assert 'viewBox="0 0 5 5"' in svg

    def test_custom_stroke(self, sample_path: StitchPath) -> None:
        """Test stroke options."""
        svg = to_svg(sample_path, 12, 8, stroke="#ff0000", stroke_width=2)
        assert 'stroke="#ff0000"' in svg
        assert 'stroke-width="2"' in svg


class TestRenderPreview:
    """Tests for the PNG preview renderer."""

    def test_canvas_size(self, sample_path: StitchPath) -> None:
        """Test the canvas adds a hoop margin around the image."""
        image = render_preview(sample_path, 100, 50)
        pad = round(50 * 0.12)
        assert image.size == (100 + 2 * pad, 50 + 2 * pad)
        assert image.mode == "RGB"

    def test_scaled(self, sample_path: StitchPath) -> None:
        """Test the scale factor enlarges the canvas."""
        small = render_preview(sample_path, 40, 40)
        large = render_preview(sample_path, 40, 40, scale=2.0)
        assert large.size[0] > small.size[0]

    def test_thread_drawn(self) -> None:
        """Test the path is drawn over the fabric."""
        path = StitchPath([(10, 50), (90, 50)])
        image = render_preview(path, 100, 100)
        pad = round(100 * 0.12)
        assert image.getpixel((pad + 50, pad + 50)) != ImageColor.getrgb(FABRIC_COLOR)

    def test_empty_and_tiny(self) -> None:
        """Test degenerate inputs still render."""
        assert render_preview(StitchPath(), 1, 1).size[0] >= 1
        assert render_preview(StitchPath([(0, 0)]), 3, 3).size[0] >= 3


class TestDesignWriter:
    """Tests for DesignWriter class."""

    def test_companion_paths(self) -> None:
        """Test companion files share the DST stem."""
        writer = DesignWriter(Path("out/logo.dst"))
        assert writer.dst_path == Path("out/logo.dst")
        assert writer.svg_path == Path("out/logo.svg")
        assert writer.preview_path == Path("out/logo-preview.png")

    def test_get_design_path(self) -> None:
        """Test default DST naming."""
        assert DesignWriter.get_design_path(Path("logo.png")) == Path("logo.dst")
        assert DesignWriter.get_design_path(Path("photos/cat.jpeg")) == Path("photos/cat.dst")

    def test_write_dst_creates_parents(self, tmp_path: Path) -> None:
        """Test DST bytes are written and parent directories created."""
        writer = DesignWriter(tmp_path / "nested" / "dir" / "design.dst")
        written = writer.write_dst(b"\x00\x00\xf3")
        assert written.read_bytes() == b"\x00\x00\xf3"

    def test_write_svg(self, tmp_path: Path, sample_path: StitchPath) -> None:
        """Test SVG companion output."""
        writer = DesignWriter(tmp_path / "design.dst")
        written = writer.write_svg(sample_path, 12, 8)
        assert written == tmp_path / "design.svg"
        assert "M0,1 L9,1 L9,5" in written.read_text(encoding="utf-8")

    def test_write_preview(self, tmp_path: Path, sample_path: StitchPath) -> None:
        """Test PNG preview output."""
        writer = DesignWriter(tmp_path / "design.dst")
        written = writer.write_preview(sample_path, 12, 8, scale=2.0)
        with Image.open(written) as image:
            assert image.format == "PNG"

    def test_write_failure(self, tmp_path: Path) -> None:
        """Test filesystem errors raise DesignSaveError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        writer = DesignWriter(blocker / "design.dst")
        with pytest.raises(DesignSaveError):
            writer.write_dst(b"data")
        with pytest.raises(DesignSaveError):
            writer.write_svg(StitchPath(), 1, 1)
