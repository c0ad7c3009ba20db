"""CLI commands for pnlcalendar.

This package provides the command-line interface: recording entries,
goals and events, and the calendar and chart views.
"""

from pnlcalendar.cli.main import cli, main

__all__ = ["cli", "main"]
