"""CLI commands for MoodMirror.

This package provides the command-line interface for MoodMirror,
including analysis, history, streak, trends and journal commands.
"""

from moodmirror.cli.main import cli, main

__all__ = ["cli", "main"]
