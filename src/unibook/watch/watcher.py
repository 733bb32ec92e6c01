"""
Filesystem watcher using Watchdog.

The source directory is watched recursively; book.toml is watched through
its parent directory, filtered to the config file itself.
"""

from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ..logger import get_logger
from .loop import WatchLoop


OBSERVER_JOIN_TIMEOUT = 2.0

# Access notifications; reading sources during a build must not trigger a rebuild
IGNORED_EVENT_TYPES = frozenset({"opened", "closed_no_write"})

logger = get_logger(__name__)


class BookEventHandler(FileSystemEventHandler):
    """Forwards file events to a watch loop."""

    def __init__(self, loop: WatchLoop, only: Path | None = None):
        """
        Args:
            loop: Loop receiving the changed paths
            only: If set, ignore every path except this file
        """
        self.loop = loop
        self.only = only.resolve() if only is not None else None

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type in IGNORED_EVENT_TYPES:
            return

        raw_path = getattr(event, "dest_path", "") or event.src_path
        if isinstance(raw_path, bytes):
            raw_path = raw_path.decode()
        path = Path(raw_path)

        if self.only is not None and path.resolve() != self.only:
            return

        logger.debug(f"{event.event_type}: {path}")
        self.loop.notify(path)


class BookWatcher:
    """Owns the Watchdog observer for one book."""

    def __init__(self, src_dir: Path, config_path: Path, loop: WatchLoop):
        self.src_dir = src_dir
        self.config_path = config_path
        self.loop = loop
        self.observer = Observer()

    def start(self) -> None:
        self.observer.schedule(BookEventHandler(self.loop), str(self.src_dir), recursive=True)
        self.observer.schedule(
            BookEventHandler(self.loop, only=self.config_path),
            str(self.config_path.parent),
            recursive=False,
        )
        self.observer.start()
        logger.info(f"Watching for changes in {self.src_dir}...")

    def stop(self) -> None:
        self.observer.stop()
        self.observer.join(timeout=OBSERVER_JOIN_TIMEOUT)
