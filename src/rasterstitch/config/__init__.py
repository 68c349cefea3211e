"""Configuration management for rasterstitch.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- HoopSize: Hoop selector with physical dimensions
- StitchConfig: Scanline tracing settings
- ExportConfig: Design export settings
- LoggingConfig: Logging settings
- RasterStitchSettings: Main application settings
"""

from rasterstitch.config.settings import (
    ExportConfig,
    HoopSize,
    LoggingConfig,
    RasterStitchSettings,
    StitchConfig,
    get_default_settings,
)

__all__ = [
    "ExportConfig",
    "HoopSize",
    "LoggingConfig",
    "RasterStitchSettings",
    "StitchConfig",
    "get_default_settings",
]
