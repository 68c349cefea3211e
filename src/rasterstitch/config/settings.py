"""Configuration settings for Rasterstitch."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class HoopSize(str, Enum):
    """Embroidery hoop selector."""

    HOOP_4X4 = "4x4"
    HOOP_5X7 = "5x7"
    HOOP_6X10 = "6x10"

    @property
    def dimensions_mm(self) -> tuple[float, float]:
        """Usable hoop area as (width, height) in millimetres."""
        return HOOP_DIMENSIONS_MM[self]

    @classmethod
    def from_selector(cls, value: str) -> "HoopSize":
        """Resolve a hoop selector, falling back to the 4x4 hoop.

        Args:
            value: Selector such as "5x7"

        Returns:
            Matching HoopSize, or HOOP_4X4 for unknown selectors
        """
        try:
            return cls(value.lower())
        except ValueError:
            return cls.HOOP_4X4


HOOP_DIMENSIONS_MM: dict[HoopSize, tuple[float, float]] = {
    HoopSize.HOOP_4X4: (100.0, 100.0),
    HoopSize.HOOP_5X7: (130.0, 180.0),
    HoopSize.HOOP_6X10: (160.0, 260.0),
}


class StitchConfig(BaseModel):
    """Configuration for scanline stitch tracing."""

    step_px: float = Field(
        default=4.0,
        ge=1.0,
        le=500.0,
        description="Spacing between scan lines in pixels",
    )
    angle_deg: float = Field(
        default=45.0,
        description="Scan line direction in degrees (0 = horizontal), any value",
    )
    jump_factor: float = Field(
        default=2.0,
        ge=1.0,
        le=10.0,
        description="Gaps longer than jump_factor * step_px count as jumps",
    )

    @property
    def jump_threshold_px(self) -> float:
        """Inter-point distance above which a move is a jump."""
        return self.step_px * self.jump_factor


class ExportConfig(BaseModel):
    """Configuration for design file export."""

    hoop: HoopSize = Field(
        default=HoopSize.HOOP_4X4,
        description="Target hoop, defines the pixel to millimetre scale",
    )
    label: str = Field(
        default="DESIGN",
        min_length=1,
        max_length=16,
        description="Design label written to the DST header",
    )
    write_svg: bool = Field(
        default=False,
        description="Also write an SVG rendering of the stitch path",
    )
    write_preview: bool = Field(
        default=False,
        description="Also write a PNG stitch preview",
    )
    preview_scale: float = Field(
        default=1.0,
        gt=0.0,
        le=8.0,
        description="Scale factor for the PNG preview",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class RasterStitchSettings(BaseModel):
    """Main application settings."""

    stitch: StitchConfig = Field(default_factory=StitchConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RasterStitchSettings:
    """Get default application settings."""
    return RasterStitchSettings()
