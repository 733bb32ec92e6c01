"""Rich-based build progress display for unibook."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from ..models.document import Page
from .constants import EMOJI_MAP, PROGRESS_COLORS, STYLES


class BuildDisplay:
    """
    Console feedback for a book build.

    Shows a progress bar while pages are rendered and a summary table
    once the build is complete.
    """

    def __init__(self, quiet: bool = False, console: Console | None = None):
        """
        Initialize BuildDisplay.

        Args:
            quiet: If True, suppress all output except errors
            console: Console to print to (defaults to stdout)
        """
        self.console = console or Console()
        self.quiet = quiet
        self.progress: Progress | None = None
        self.task_id: TaskID | None = None
        self.pages_built: list[Page] = []

    def book_title(self, title: str) -> None:
        """Announce the book being built."""
        if self.quiet:
            return
        self.console.print(
            f"{EMOJI_MAP['book']} [{STYLES['book_title']}]{escape(title)}[/{STYLES['book_title']}]"
        )

    def start(self, total_pages: int) -> None:
        """Start the page progress bar."""
        self.pages_built = []
        if self.quiet or total_pages <= 0:
            return

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(
                complete_style=PROGRESS_COLORS["complete"],
                finished_style=PROGRESS_COLORS["finished"],
            ),
            TaskProgressColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=self.console,
            transient=True,
        )
        self.progress.start()
        self.task_id = self.progress.add_task(f"{EMOJI_MAP['page']} Pages", total=total_pages)

    def page_built(self, page: Page) -> None:
        """Record one rendered page and advance the progress bar."""
        self.pages_built.append(page)
        if self.progress is not None and self.task_id is not None:
            self.progress.update(self.task_id, advance=1)

    def finish(self, output_dir: Path) -> None:
        """Stop the progress bar and print a summary of the build."""
        self._stop_progress()
        if self.quiet:
            return

        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("Page", style="bold cyan")
        table.add_column("Output", style=STYLES["path"])
        for page in self.pages_built:
            table.add_row(escape(page.title), escape(page.output_filename))

        self.console.print(
            Panel(
                table,
                title=f"[{STYLES['success']}]{EMOJI_MAP['complete']} Build complete[/{STYLES['success']}]",
                border_style="green",
                padding=(0, 1),
            )
        )
        self.console.print(f"Output in: [{STYLES['path']}]{escape(str(output_dir))}[/{STYLES['path']}]")

    def error(self, message: str) -> None:
        """Stop the progress bar and print an error message."""
        self._stop_progress()
        self.console.print(f"[{STYLES['error']}]{EMOJI_MAP['error']} {escape(message)}[/{STYLES['error']}]")

    def _stop_progress(self) -> None:
        if self.progress is not None:
            self.progress.stop()
            self.progress = None
            self.task_id = None
