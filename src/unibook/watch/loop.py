"""Debounced rebuild loop fed by file-change notifications."""

import queue
import time
from collections.abc import Callable
from pathlib import Path

from ..display.rich_logger import EmojiLoggerAdapter
from ..logger import get_logger
from ..utils.exceptions import UnibookError


logger = EmojiLoggerAdapter(get_logger(__name__), {})


def format_error_chain(error: BaseException) -> str:
    """Render an exception and its ``__cause__`` chain on several lines."""
    lines = [str(error)]
    cause = error.__cause__
    while cause is not None:
        lines.append(f"  Caused by: {cause}")
        cause = cause.__cause__
    return "\n".join(lines)


class WatchLoop:
    """
    Single-threaded event loop that turns change notifications into rebuilds.

    Events are read from a queue. A rebuild only happens when the debounce
    window has elapsed since the previous rebuild finished; events arriving
    inside the window are dropped. Putting ``None`` on the queue ends the loop.
    """

    def __init__(
        self,
        rebuild: Callable[[Path], object],
        debounce: float = 0.5,
        poll_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the loop.

        Args:
            rebuild: Called with the changed path for every accepted event
            debounce: Seconds that must pass between two rebuilds
            poll_interval: Seconds to wait for an event before checking again
            clock: Monotonic time source
        """
        self.rebuild = rebuild
        self.debounce = debounce
        self.poll_interval = poll_interval
        self.clock = clock
        self.events: queue.Queue[Path | None] = queue.Queue()
        self.last_build = clock()
        self.builds = 0

    def notify(self, path: Path) -> None:
        """Queue a change notification."""
        self.events.put(path)

    def stop(self) -> None:
        """Ask the loop to exit once pending events are consumed."""
        self.events.put(None)

    def run(self) -> None:
        """Process events until :meth:`stop` is called."""
        while True:
            try:
                path = self.events.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            if path is None:
                break
            self.handle(path)

    def handle(self, path: Path) -> bool:
        """
        Rebuild for one change unless it falls inside the debounce window.

        Returns:
            True if a rebuild was attempted
        """
        if self.clock() - self.last_build <= self.debounce:
            logger.debug(f"Ignoring change inside debounce window: {path}")
            return False

        logger.info(f"Change detected: {path}", extra={"emoji": "watch"})
        logger.info("Rebuilding...")
        try:
            self.rebuild(path)
        except UnibookError as e:
            logger.error(f"Build failed: {format_error_chain(e)}")
        except Exception:  # pylint: disable=broad-except
            logger.exception("Build failed with an unexpected error")
        else:
            logger.info("Build successful!", extra={"emoji": "success"})

        self.builds += 1
        self.last_build = self.clock()
        return True
