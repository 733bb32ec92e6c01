"""Rich-based logger configuration for unibook."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from .constants import DATE_FORMAT, EMOJI_MAP, LOG_FORMAT


def build_rich_handler(show_time: bool = True, show_path: bool = False) -> RichHandler:
    """
    Create a Rich handler writing to stderr.

    Args:
        show_time: Show timestamp in logs
        show_path: Show file path in logs

    Returns:
        Configured handler
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=False,
        log_time_format=DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


class EmojiLoggerAdapter(logging.LoggerAdapter[logging.Logger]):
    """
    Logger adapter that adds emojis to log messages.

    Usage:
        logger = EmojiLoggerAdapter(get_logger(__name__), {})
        logger.info("Building page", extra={"emoji": "page"})
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        """Add emoji prefix to messages that request one."""
        extra = kwargs.get("extra", {})
        emoji_key = extra.pop("emoji", None) if isinstance(extra, dict) else None

        if emoji_key and emoji_key in EMOJI_MAP:
            msg = f"{EMOJI_MAP[emoji_key]} {msg}"

        return msg, kwargs
