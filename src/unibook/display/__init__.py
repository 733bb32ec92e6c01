"""
Rich-based display system for unibook.

Console logging with emoji prefixes and a progress/summary display for builds.
"""

from .build_display import BuildDisplay
from .constants import EMOJI_MAP, STYLES
from .rich_logger import EmojiLoggerAdapter, build_rich_handler


__all__ = [
    "EMOJI_MAP",
    "STYLES",
    "BuildDisplay",
    "EmojiLoggerAdapter",
    "build_rich_handler",
]
