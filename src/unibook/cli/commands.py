"""
Click-based CLI commands for unibook.

Subcommands:
- build: generate the site once
- watch: build, then rebuild on every source change
- serve: build, watch, and serve the site over HTTP
- init: create a new book skeleton
- version: print the version
"""

import sys
import threading
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path

import click
import uvicorn
from rich.console import Console
from rich.markup import escape

from ..book.tree import count_declared_pages
from ..build.builder import build_book
from ..display.build_display import BuildDisplay
from ..display.constants import EMOJI_MAP
from ..logger import get_logger, get_valid_log_levels, setup_logger
from ..models.config import CONFIG_FILENAME, load_config
from ..models.settings import UnibookSettings
from ..render.converter import SubprocessConverter, check_converter_available
from ..scaffold import DEFAULT_TITLE, init_book
from ..server.app import create_app
from ..utils.exceptions import UnibookError
from ..watch.loop import WatchLoop
from ..watch.watcher import BookWatcher


# Initialize Rich console for pretty output
console = Console()

logger = get_logger("unibook.cli")


def report_error(error: UnibookError) -> None:
    """Print an error with its full cause chain and exit non-zero."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    cause = error.__cause__
    while cause is not None:
        console.print(f"  Caused by: {escape(str(cause))}")
        cause = cause.__cause__
    sys.exit(1)


def configure(ctx: click.Context, log_level: str | None, log_file: Path | None) -> UnibookSettings:
    """Load runtime settings and set up logging, CLI flags taking precedence."""
    settings = ctx.ensure_object(UnibookSettings)
    overrides = {}
    if log_level:
        overrides["log_level"] = log_level
    if log_file:
        overrides["log_file"] = log_file
    if overrides:
        settings = settings.model_copy(update=overrides)
    setup_logger("unibook", settings.log_level, log_file=settings.log_file)
    logger.debug(f"Runtime settings: {settings!r}")
    return settings


def run_build(book_dir: Path, settings: UnibookSettings, quiet: bool = False) -> None:
    """Full build with progress display."""
    check_converter_available(settings.converter)
    config = load_config(book_dir)

    display = BuildDisplay(quiet=quiet, console=console)
    display.book_title(config.book.title)
    display.start(total_pages=count_declared_pages(config.pages))
    try:
        result = build_book(
            book_dir,
            converter=SubprocessConverter(settings.converter, timeout=settings.converter_timeout),
            on_page=display.page_built,
        )
    except UnibookError:
        display.error("Build failed")
        raise
    display.finish(result.output_dir)


def start_watch(book_dir: Path, settings: UnibookSettings) -> tuple[WatchLoop, BookWatcher]:
    """Start the watchdog observer feeding a new incremental-rebuild loop."""
    config = load_config(book_dir)
    converter = SubprocessConverter(settings.converter, timeout=settings.converter_timeout)

    loop = WatchLoop(
        rebuild=lambda path: build_book(book_dir, changed_path=path, converter=converter),
        debounce=settings.debounce_ms / 1000,
        poll_interval=settings.poll_interval_ms / 1000,
    )
    watcher = BookWatcher(book_dir / config.build.src_dir, book_dir / CONFIG_FILENAME, loop)
    watcher.start()
    return loop, watcher


log_level_option = click.option(
    "--log-level",
    type=click.Choice(get_valid_log_levels(), case_sensitive=False),
    default=None,
    help="Set the logging level (default: UNIBOOK_LOG_LEVEL or INFO).",
)
log_file_option = click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the log to this file.",
)
dir_option = click.option(
    "--dir",
    "-d",
    "book_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=Path("."),
    show_default=True,
    help=f"Directory containing {CONFIG_FILENAME}.",
)


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    unibook - Build a documentation site from Markdown and a table of contents.

    \b
    Examples:
      # Create a new book in ./my-book
      unibook init my-book

      # Build the site into the configured output directory
      unibook build --dir my-book

      # Preview with live rebuilds on http://localhost:3000/
      unibook serve --dir my-book
    """
    # If no subcommand is given, show help
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


@cli.command()
@dir_option
@log_level_option
@log_file_option
@click.option("--quiet", "-q", is_flag=True, default=False, help="Suppress all output except errors.")
@click.pass_context
def build(
    ctx: click.Context,
    book_dir: Path,
    log_level: str | None,
    log_file: Path | None,
    quiet: bool,
) -> None:
    """Build the book."""
    settings = configure(ctx, log_level, log_file)
    try:
        run_build(book_dir, settings, quiet=quiet)
    except UnibookError as e:
        report_error(e)


@cli.command()
@dir_option
@log_level_option
@log_file_option
@click.pass_context
def watch(ctx: click.Context, book_dir: Path, log_level: str | None, log_file: Path | None) -> None:
    """Build the book, then rebuild whenever a source changes."""
    settings = configure(ctx, log_level, log_file)
    try:
        console.print("Initial build...")
        run_build(book_dir, settings)
        loop, watcher = start_watch(book_dir, settings)
    except UnibookError as e:
        report_error(e)

    console.print(f"{EMOJI_MAP['watch']} Press Ctrl+C to stop")
    try:
        loop.run()
    except KeyboardInterrupt:
        pass
    finally:
        watcher.stop()


@cli.command()
@dir_option
@click.option("--port", "-p", type=int, default=None, help="Port to serve on (default: 3000).")
@click.option("--host", type=str, default=None, help="Address to bind (default: 0.0.0.0).")
@log_level_option
@log_file_option
@click.pass_context
def serve(
    ctx: click.Context,
    book_dir: Path,
    port: int | None,
    host: str | None,
    log_level: str | None,
    log_file: Path | None,
) -> None:
    """Build the book and serve it over HTTP, rebuilding on changes."""
    settings = configure(ctx, log_level, log_file)
    port = port or settings.port
    host = host or settings.host
    try:
        run_build(book_dir, settings)
        config = load_config(book_dir)
        loop, watcher = start_watch(book_dir, settings)
    except UnibookError as e:
        report_error(e)

    loop_thread = threading.Thread(target=loop.run, name="unibook-watch", daemon=True)
    loop_thread.start()

    console.print(f"\n{EMOJI_MAP['serve']} Serving book at [bold cyan]http://localhost:{port}/[/bold cyan]")
    console.print("Press Ctrl+C to stop\n")
    try:
        uvicorn.run(create_app(book_dir / config.build.output_dir), host=host, port=port)
    finally:
        watcher.stop()
        loop.stop()
        loop_thread.join(timeout=2.0)


@cli.command()
@click.argument(
    "book_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=Path("."),
)
@click.option("--title", "-t", default=DEFAULT_TITLE, show_default=True, help="Book title.")
def init(book_dir: Path, title: str) -> None:
    """Initialize a new book."""
    try:
        created = init_book(book_dir, title=title)
    except UnibookError as e:
        report_error(e)

    for path in created:
        console.print(f"Created {escape(str(path))}")
    console.print("\n[bold green]✓ Book initialized successfully![/bold green]")
    console.print("Run 'unibook build' to build your book.")


@cli.command()
def version() -> None:
    """Display the version of unibook."""
    try:
        current = package_version("unibook")
    except PackageNotFoundError:
        current = "unknown"
    console.print(f"[bold cyan]unibook[/bold cyan] version {current}")


# Entry point for the CLI
def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
