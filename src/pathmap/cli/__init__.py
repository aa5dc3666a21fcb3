"""
CLI module for pathmap.

Provides the command-line interface using Click.
"""

from pathmap.cli.main import cli, main

__all__ = ["main", "cli"]
