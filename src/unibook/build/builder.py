"""
Build orchestration: turns the document tree into the generated site.

A full build renders every page, the search index and the redirect landing
page. An incremental build re-renders the single page whose source changed
and refreshes the search index, leaving every other page untouched.
"""

import re
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from html import escape
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..book.tree import build_document_tree
from ..display.rich_logger import EmojiLoggerAdapter
from ..logger import get_logger
from ..models.config import CONFIG_FILENAME, Config, load_config
from ..models.document import DocumentItem, Page, find_page_by_source, first_page, iter_pages
from ..render.converter import Converter, SubprocessConverter
from ..search.index import write_search_index
from ..toc.renderer import TocRenderer
from ..utils.exceptions import AssetError, RenderError
from .assets import AssetRenderer, SnippetAssets


INDEX_FILENAME = "index.html"

_HTML_TAG = re.compile(r"<html\b([^>]*)>", re.IGNORECASE)
_LANG_ATTR = re.compile(r"""(?<![\w:-])lang\s*=\s*("[^"]*"|'[^']*'|[^\s>]+)""", re.IGNORECASE)

logger = EmojiLoggerAdapter(get_logger(__name__), {})


class BuildContext:
    """Scratch space for one build."""

    def __init__(self, temp_dir: Path):
        self.temp_dir = temp_dir

    def toc_path(self, page: Page) -> Path:
        return self.temp_dir / f"toc-{page.slug}.html"


@contextmanager
def build_context() -> Iterator[BuildContext]:
    """Provide a temporary build directory that is always removed afterwards.

    Cleanup errors are ignored; outputs already written stay on disk.
    """
    with tempfile.TemporaryDirectory(prefix="unibook-build-", ignore_cleanup_errors=True) as tmp:
        yield BuildContext(Path(tmp))
    logger.debug("Removed temporary build directory")


class BuildResult(BaseModel):
    """Outcome of a build."""

    model_config = ConfigDict(frozen=True)

    full: bool = Field(..., description="True for a full build, False for incremental")
    pages: tuple[Page, ...] = Field(default=(), description="Pages rendered, in order")
    output_dir: Path


def inject_language(html: str, language: str) -> str:
    """Set the ``lang`` attribute of the root ``<html>`` tag."""
    match = _HTML_TAG.search(html)
    if match is None:
        return html

    attrs = match.group(1)
    lang = f'lang="{escape(language)}"'
    if _LANG_ATTR.search(attrs):
        attrs = _LANG_ATTR.sub(lambda _: lang, attrs, count=1)
    else:
        attrs = f" {lang}{attrs}"

    return f"{html[: match.start()]}<html{attrs}>{html[match.end() :]}"


class Builder:
    """
    Builds the site for a book.

    Pages are rendered strictly in document order, one converter call at a
    time. Any failure aborts the rest of the build.
    """

    def __init__(
        self,
        config: Config,
        items: list[DocumentItem],
        base_dir: Path,
        converter: Converter | None = None,
        on_page: Callable[[Page], None] | None = None,
    ):
        """
        Initialize the builder.

        Args:
            config: Validated book declaration
            items: Document tree built from ``config``
            base_dir: Book root directory (where book.toml lives)
            converter: Render capability (defaults to the external converter)
            on_page: Called after each page is rendered
        """
        self.config = config
        self.items = items
        self.base_dir = base_dir
        self.converter = converter or SubprocessConverter()
        self.on_page = on_page
        self.toc = TocRenderer.from_config(config)
        self.asset_renderer = AssetRenderer(config)

    @property
    def output_dir(self) -> Path:
        return self.base_dir / self.config.build.output_dir

    def build(self) -> BuildResult:
        """Run a full build."""
        self._create_output_dir()
        built = []

        with build_context() as ctx:
            assets = self.asset_renderer.write_snippets(ctx.temp_dir)
            for page in iter_pages(self.items):
                self._build_page(ctx, assets, page)
                built.append(page)

            write_search_index(self.items, self.output_dir)
            logger.info("Generated search index", extra={"emoji": "index"})
            self._write_redirect()

        logger.info(f"Build complete! Output in: {self.output_dir}", extra={"emoji": "complete"})
        return BuildResult(full=True, pages=tuple(built), output_dir=self.output_dir)

    def build_incremental(self, changed_path: Path | None) -> BuildResult:
        """
        Rebuild only what a changed source file affects.

        Falls back to a full build when no path is given, when book.toml
        changed, or when the path does not belong to any page.
        """
        if changed_path is None or changed_path.name == CONFIG_FILENAME:
            return self.build()

        page = find_page_by_source(self.items, changed_path)
        if page is None:
            logger.info(f"{changed_path} is not part of the book, running a full build")
            return self.build()

        logger.info(f"Incremental build: {page.title}")
        self._create_output_dir()
        with build_context() as ctx:
            assets = self.asset_renderer.write_snippets(ctx.temp_dir)
            self._build_page(ctx, assets, page)
            write_search_index(self.items, self.output_dir)

        return BuildResult(full=False, pages=(page,), output_dir=self.output_dir)

    def _create_output_dir(self) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AssetError(f"Failed to create output directory: {self.output_dir}") from e

    def _build_page(self, ctx: BuildContext, assets: SnippetAssets, page: Page) -> None:
        """Render one page with its TOC into the output directory."""
        output_path = self.output_dir / page.output_filename
        logger.info(f"Building: {page.source_path} -> {page.output_filename}", extra={"emoji": "page"})

        toc_path = ctx.toc_path(page)
        try:
            toc_path.write_text(self.toc.render(self.items, page.output_filename), encoding="utf-8")
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AssetError(f"Failed to prepare page: {page.title}") from e

        try:
            self.converter(
                page.source_path,
                output_path,
                header=list(assets.header),
                before_body=[*assets.before_body, toc_path],
                after_body=list(assets.after_body),
            )
        except RenderError as e:
            raise RenderError(
                f"Failed to build page: {page.title} ({page.source_path})",
                page_title=page.title,
                source_path=page.source_path,
                returncode=e.returncode,
                stdout=e.stdout,
                stderr=e.stderr,
            ) from e

        self._set_language(output_path)
        if self.on_page is not None:
            self.on_page(page)

    def _set_language(self, output_path: Path) -> None:
        try:
            html = output_path.read_text(encoding="utf-8")
            output_path.write_text(inject_language(html, self.config.book.language), encoding="utf-8")
        except OSError as e:
            raise AssetError(f"Failed to set language in {output_path}") from e

    def _write_redirect(self) -> None:
        target = first_page(self.items)
        if target is None:
            return

        index_path = self.output_dir / INDEX_FILENAME
        try:
            index_path.write_text(self.asset_renderer.render_redirect(target.output_filename), encoding="utf-8")
        except OSError as e:
            raise AssetError(f"Failed to create {INDEX_FILENAME}") from e
        logger.info(f"Created {INDEX_FILENAME}")


def build_book(
    book_dir: Path,
    changed_path: Path | None = None,
    converter: Converter | None = None,
    on_page: Callable[[Page], None] | None = None,
) -> BuildResult:
    """
    Load book.toml, build the document tree and build the site.

    Args:
        book_dir: Directory containing book.toml
        changed_path: Source that changed (incremental build), or None for a full build
        converter: Render capability (defaults to the external converter)
        on_page: Called after each page is rendered

    Returns:
        What was built
    """
    config = load_config(book_dir)
    items = build_document_tree(config, book_dir)
    builder = Builder(config, items, book_dir, converter=converter, on_page=on_page)
    return builder.build_incremental(changed_path)
