"""Logging utilities for Rasterstitch."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

_HANDLER_NAME = "rasterstitch"


@dataclass
class ConversionStats:
    """Statistics from a conversion run."""

    image_size: tuple[int, int] = (0, 0)
    threshold: int | None = None
    manual_mask: bool = False
    foreground_pixels: int = 0
    point_count: int = 0
    jump_count: int = 0
    record_count: int = 0
    byte_count: int = 0
    extent_mm: tuple[float, float] = (0.0, 0.0)
    output_files: list[Path] = field(default_factory=list)
    step_timings_ms: dict[str, float] = field(default_factory=dict)
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def _reset_handlers(root_logger: logging.Logger) -> None:
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    _reset_handlers(root_logger)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("rasterstitch")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ConversionLogger:
    """Logger for tracking conversion steps and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ConversionStats()

    def log_image_loaded(self, path: Path, image_format: str, size: tuple[int, int]) -> None:
        """Log the decoded source image."""
        self._logger.info(
            "Image loaded",
            path=str(path),
            format=image_format,
            width=size[0],
            height=size[1],
        )
        self._stats.image_size = size

    def log_mask(self, threshold: int | None, foreground: int, duration_ms: float) -> None:
        """Log mask derivation."""
        self._logger.info(
            "Mask computed",
            source="manual" if threshold is None else "otsu",
            threshold=threshold,
            foreground_pixels=foreground,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.threshold = threshold
        self._stats.manual_mask = threshold is None
        self._stats.foreground_pixels = foreground
        self._stats.step_timings_ms["mask"] = duration_ms

    def log_trace(
        self,
        points: int,
        jumps: int,
        step_px: float,
        angle_deg: float,
        duration_ms: float,
    ) -> None:
        """Log scanline tracing results."""
        self._logger.info(
            "Stitches traced",
            points=points,
            jumps=jumps,
            step_px=step_px,
            angle_deg=angle_deg,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.point_count = points
        self._stats.jump_count = jumps
        self._stats.step_timings_ms["trace"] = duration_ms

    def log_encoded(
        self,
        records: int,
        byte_count: int,
        extent_mm: tuple[float, float],
        duration_ms: float,
        header: dict[str, Any] | None = None,
    ) -> None:
        """Log DST encoding results, with the header fields when given."""
        self._logger.info(
            "Design encoded",
            records=records,
            header=header,
            bytes=byte_count,
            width_mm=round(extent_mm[0], 1),
            height_mm=round(extent_mm[1], 1),
            duration_ms=round(duration_ms, 2),
        )
        self._stats.record_count = records
        self._stats.byte_count = byte_count
        self._stats.extent_mm = extent_mm
        self._stats.step_timings_ms["encode"] = duration_ms

    def log_file_written(self, path: Path, kind: str) -> None:
        """Log a written output file."""
        self._logger.info("File written", path=str(path), kind=kind)
        self._stats.output_files.append(path)

    def log_error(self, step: str, error: Exception, traceback: str | None = None) -> None:
        """Log a failed conversion step."""
        self._logger.error(
            "Conversion step failed",
            step=step,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((step, str(error)))

    @property
    def stats(self) -> ConversionStats:
        """Get current conversion statistics."""
        return self._stats
