"""Conversion orchestration for the image to stitch file pipeline.

This module ties the pipeline stages together. Each conversion builds its
own ConversionSession, so independent conversions never share mask or path
buffers.

Key components:
- ConversionSession: Immutable result of thresholding and tracing
- DesignProcessor: Main orchestrator class for file conversion
"""

import time
import traceback
from dataclasses import dataclass
from pathlib import Path

from rasterstitch.config import HoopSize, RasterStitchSettings, StitchConfig
from rasterstitch.core.dst import DstDesign, build_design
from rasterstitch.core.geometry import UNITS_PER_MM, units_per_pixel
from rasterstitch.core.scanline import trace_stitches
from rasterstitch.core.threshold import resolve_mask
from rasterstitch.domain import Mask, PixelBuffer, StitchPath
from rasterstitch.exceptions import RasterStitchError
from rasterstitch.io import DesignWriter, ImageReader, read_pixels
from rasterstitch.utils import ConversionLogger, ConversionStats, configure_logging


@dataclass(frozen=True)
class ConversionSession:
    """The traced state of one conversion.

    Attributes:
        pixels: Source image
        mask: Foreground mask used for tracing
        path: Traced stitch path
        stitch: Tracing parameters the path was built with
        threshold: Otsu threshold, or None when a manual mask was used
    """

    pixels: PixelBuffer
    mask: Mask
    path: StitchPath
    stitch: StitchConfig
    threshold: int | None = None

    @property
    def size(self) -> tuple[int, int]:
        """Canvas (width, height) in pixels."""
        return self.pixels.size

    @property
    def used_manual_mask(self) -> bool:
        """Check if the mask came from a painted override."""
        return self.threshold is None

    def units_per_pixel(self, hoop: HoopSize) -> float:
        """Scale from canvas pixels to DST units for a hoop."""
        return units_per_pixel(self.pixels.width, self.pixels.height, hoop)

    def jump_count(self) -> int:
        """Number of moves longer than the configured jump threshold."""
        return self.path.jump_count(self.stitch.jump_threshold_px)


def _elapsed_ms(start: float) -> float:
    return (time.time() - start) * 1000


class DesignProcessor:
    """Orchestrates image to embroidery design conversion.

    Manages the complete workflow:
    1. Load the image (and an optional painted mask)
    2. Derive the foreground mask
    3. Trace scanline stitches
    4. Encode the DST design
    5. Write the DST file and any requested companions

    Example:
        settings = RasterStitchSettings()
        processor = DesignProcessor(settings)
        stats = processor.process(image_path=Path("logo.png"))
    """

    def __init__(self, config: RasterStitchSettings) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Settings containing stitch, export and logging config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
        )
        self.conversion_logger = ConversionLogger(self.logger)

    def trace(self, pixels: PixelBuffer, mask_override: PixelBuffer | None = None) -> ConversionSession:
        """Threshold an image and trace its stitch path.

        Args:
            pixels: Source image
            mask_override: Optional painted mask; used when it has any opacity

        Returns:
            ConversionSession holding mask and path

        Raises:
            MaskDimensionError: If the override size differs from the image
        """
        stitch = self.config.stitch

        start = time.time()
        mask, threshold = resolve_mask(pixels, mask_override)
        self.conversion_logger.log_mask(threshold, mask.count(), _elapsed_ms(start))

        start = time.time()
        path = trace_stitches(mask, stitch.step_px, stitch.angle_deg)
        session = ConversionSession(
            pixels=pixels,
            mask=mask,
            path=path,
            stitch=stitch,
            threshold=threshold,
        )
        self.conversion_logger.log_trace(
            points=len(path),
            jumps=session.jump_count(),
            step_px=stitch.step_px,
            angle_deg=stitch.angle_deg,
            duration_ms=_elapsed_ms(start),
        )
        if path.is_empty():
            self.logger.warning(
                "No foreground found, design will be empty",
                manual_mask=session.used_manual_mask,
            )
        return session

    def encode(self, session: ConversionSession) -> DstDesign:
        """Encode a traced session as a DST design for the configured hoop."""
        export = self.config.export
        start = time.time()
        design = build_design(
            session.path,
            session.units_per_pixel(export.hoop),
            label=export.label,
        )
        header = design.header
        self.conversion_logger.log_encoded(
            records=design.stitch_count,
            byte_count=design.byte_size,
            extent_mm=(header.extent_x / UNITS_PER_MM, header.extent_y / UNITS_PER_MM),
            duration_ms=_elapsed_ms(start),
            header=header.to_dict(),
        )
        return design

    def export(self, session: ConversionSession) -> bytes:
        """Serialize a traced session as DST bytes."""
        return self.encode(session).to_bytes()

    def process(
        self,
        image_path: Path,
        output_path: Path | None = None,
        mask_path: Path | None = None,
    ) -> ConversionStats:
        """Convert an image file into design files.

        Args:
            image_path: Source image
            output_path: DST output path (default: image path with .dst)
            mask_path: Optional painted mask image of the same size

        Returns:
            ConversionStats with counts, timings and written files

        Raises:
            FileNotFoundError: If an input file does not exist
            RasterStitchError: If loading, tracing or writing fails
        """
        self.conversion_logger = ConversionLogger(self.logger)
        stats = self.conversion_logger.stats
        stats.start_time = time.time()

        if output_path is None:
            output_path = DesignWriter.get_design_path(image_path)

        self.logger.info(
            "Starting conversion",
            input=str(image_path),
            output=str(output_path),
            mask=str(mask_path) if mask_path else None,
        )

        step = "load"
        try:
            with ImageReader(image_path) as reader:
                pixels = reader.pixels
                self.conversion_logger.log_image_loaded(image_path, reader.format, reader.size)
            mask_override = read_pixels(mask_path) if mask_path is not None else None

            step = "trace"
            session = self.trace(pixels, mask_override)

            step = "encode"
            data = self.export(session)

            step = "write"
            self._write_outputs(session, data, output_path)
        except RasterStitchError as e:
            self.conversion_logger.log_error(step, e, traceback.format_exc())
            raise

        stats.end_time = time.time()

        self.logger.info(
            "Conversion complete",
            points=stats.point_count,
            records=stats.record_count,
            files=len(stats.output_files),
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _write_outputs(self, session: ConversionSession, data: bytes, output_path: Path) -> None:
        """Write the DST file and the configured companion files."""
        export = self.config.export
        writer = DesignWriter(output_path)
        width, height = session.size

        self.conversion_logger.log_file_written(writer.write_dst(data), "dst")
        if export.write_svg:
            self.conversion_logger.log_file_written(
                writer.write_svg(session.path, width, height), "svg"
            )
        if export.write_preview:
            self.conversion_logger.log_file_written(
                writer.write_preview(session.path, width, height, scale=export.preview_scale),
                "preview",
            )
