"""Utility functions for rasterstitch.

This module provides utility functions including:

- Logging setup and configuration
- Conversion statistics tracking
"""

from rasterstitch.utils.logging import (
    ConversionLogger,
    ConversionStats,
    configure_logging,
)

__all__ = [
    "ConversionLogger",
    "ConversionStats",
    "configure_logging",
]
