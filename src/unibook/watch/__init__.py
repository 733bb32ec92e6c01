"""File watching and debounced rebuilds for unibook."""

from .loop import WatchLoop, format_error_chain
from .watcher import BookEventHandler, BookWatcher


__all__ = ["BookEventHandler", "BookWatcher", "WatchLoop", "format_error_chain"]
