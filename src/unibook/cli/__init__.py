"""
unibook CLI module.

This module provides the Click-based command-line interface for unibook.
"""

from .commands import cli, main


__all__ = ["cli", "main"]
