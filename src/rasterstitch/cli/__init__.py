"""Command-line interface for rasterstitch.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Hoop, angle and spacing options
- Optional SVG and PNG preview output
- Verbose/quiet output modes
- Detailed error reporting
"""

from rasterstitch.cli.app import cli, main

__all__ = ["cli", "main"]
