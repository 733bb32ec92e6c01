"""Build the document tree from a validated book declaration."""

from pathlib import Path

from ..logger import get_logger
from ..models.config import Config, ItemConfig
from ..models.document import DocumentItem, Page, Part, Section
from ..utils.exceptions import (
    InvalidExtensionError,
    SectionExtractionError,
    SourceNotFoundError,
    UnsafeSourcePathError,
)


MARKDOWN_EXTENSION = ".md"
HTML_EXTENSION = ".html"
SECTION_MARKER = "## "
SECTION_ID_PREFIX = "2-"
PARENT_DIR = ".."

# Characters the converter leaves unescaped in heading IDs
_UNRESERVED = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")

logger = get_logger(__name__)


def percent_encode(text: str) -> str:
    """Percent-encode everything except ASCII letters, digits, '-' and '_'.

    Each escaped character contributes its UTF-8 bytes as uppercase ``%XX``.
    """
    return "".join(
        char if char in _UNRESERVED else "".join(f"%{byte:02X}" for byte in char.encode("utf-8"))
        for char in text
    )


def section_anchor_id(title: str) -> str:
    """Anchor ID the converter assigns to a level-2 heading."""
    return SECTION_ID_PREFIX + percent_encode(title)


def source_to_html_filename(relative_path: str) -> str:
    """Derive the output filename of a page, keeping its directories.

    Examples:
        intro.md -> intro.html
        guide/setup.md -> guide/setup.html

    Raises:
        InvalidExtensionError: If the path does not end with .md
    """
    if not relative_path.endswith(MARKDOWN_EXTENSION) or relative_path == MARKDOWN_EXTENSION:
        raise InvalidExtensionError(f"Source file must have .md extension: {relative_path}")
    return relative_path[: -len(MARKDOWN_EXTENSION)] + HTML_EXTENSION


def extract_sections(markdown_path: Path) -> tuple[Section, ...]:
    """Collect the level-2 headings of a Markdown file.

    Only lines starting with exactly ``"## "`` count; other heading levels
    are ignored.

    Raises:
        SectionExtractionError: If the file cannot be read
    """
    try:
        content = markdown_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SectionExtractionError(f"Failed to read markdown file: {markdown_path}") from e

    sections = []
    for line in content.splitlines():
        if line.startswith(SECTION_MARKER):
            title = line[len(SECTION_MARKER) :].strip()
            sections.append(Section(title=title, id=section_anchor_id(title)))
    return tuple(sections)


class DocumentTreeBuilder:
    """Turns the ordered [[pages]] declaration into parts and pages.

    Resolution is fail-fast: the first missing or invalid source aborts the
    whole build and no partial tree is returned.
    """

    def __init__(self, config: Config, base_dir: Path):
        self.config = config
        self.base_dir = base_dir
        self.src_dir = (base_dir / config.build.src_dir).resolve()

    def build(self) -> list[DocumentItem]:
        """Build the ordered list of top-level document items."""
        items: list[DocumentItem] = []
        entries = self.config.pages
        index = 0

        while index < len(entries):
            entry = entries[index]
            index += 1

            if not entry.is_part:
                items.append(self.resolve_page(entry.title, entry.path or ""))
                continue

            if entry.items is not None:
                children = [self.resolve_page(child.title, child.path) for child in entry.items]
            else:
                children = []
                while index < len(entries) and not entries[index].is_part:
                    page_entry = entries[index]
                    children.append(self.resolve_page(page_entry.title, page_entry.path or ""))
                    index += 1

            items.append(Part(title=entry.title, level=entry.level, children=tuple(children)))

        logger.debug(f"Document tree: {len(items)} top-level items")
        return items

    def resolve_page(self, title: str, relative_path: str) -> Page:
        """Resolve one declared page into a Page with its sections.

        Raises:
            UnsafeSourcePathError: If the path is absolute or contains '..'
            SourceNotFoundError: If the source file does not exist
            InvalidExtensionError: If the source is not a .md file
            SectionExtractionError: If the source cannot be read
        """
        declared = Path(relative_path)
        if declared.is_absolute() or PARENT_DIR in declared.parts:
            raise UnsafeSourcePathError(
                f"Source path must be relative to {self.src_dir} without '..': {relative_path}"
            )

        source_path = self.src_dir / declared
        if not source_path.exists():
            raise SourceNotFoundError(relative_path, source_path)

        output_filename = source_to_html_filename(relative_path)
        return Page(
            title=title,
            source_path=source_path.resolve(),
            output_filename=output_filename,
            sections=extract_sections(source_path),
        )


def build_document_tree(config: Config, base_dir: Path) -> list[DocumentItem]:
    """Build the document tree for the book rooted at ``base_dir``."""
    return DocumentTreeBuilder(config, base_dir).build()


def count_declared_pages(entries: list[ItemConfig]) -> int:
    """Number of pages a declaration produces, explicit children included."""
    total = 0
    for entry in entries:
        if entry.is_part:
            total += len(entry.items or [])
        else:
            total += 1
    return total


__all__ = [
    "DocumentTreeBuilder",
    "build_document_tree",
    "count_declared_pages",
    "extract_sections",
    "percent_encode",
    "section_anchor_id",
    "source_to_html_filename",
]
