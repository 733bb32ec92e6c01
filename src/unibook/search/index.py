"""Search index generation for the built site."""

from pathlib import Path

from pydantic import BaseModel, Field

from ..logger import get_logger
from ..models.document import DocumentItem, iter_pages
from ..utils.exceptions import SearchIndexError


SEARCH_INDEX_FILENAME = "search-index.json"
CODE_FENCE = "```"

logger = get_logger(__name__)


class SearchEntry(BaseModel):
    """One searchable page."""

    title: str
    url: str
    content: str


class SearchIndex(BaseModel):
    """The search-index.json document."""

    pages: list[SearchEntry] = Field(default_factory=list)


def strip_markdown(text: str) -> str:
    """Remove lightweight Markdown syntax, keeping fenced code content.

    Fence lines themselves are dropped. Outside code blocks, leading heading,
    list and blockquote markers are removed along with bold, italic and
    inline-code characters.
    """
    lines = []
    in_code_block = False

    for line in text.splitlines():
        if line.strip().startswith(CODE_FENCE):
            in_code_block = not in_code_block
            continue

        if in_code_block:
            lines.append(line)
            continue

        cleaned = line.lstrip("#").lstrip("-").lstrip("*").lstrip(">")
        cleaned = cleaned.replace("**", "").replace("__", "")
        for char in "*_`":
            cleaned = cleaned.replace(char, "")
        lines.append(cleaned)

    return " ".join(lines)


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def extract_text(markdown_path: Path) -> str:
    """Plain searchable text of a Markdown file.

    Raises:
        SearchIndexError: If the file cannot be read
    """
    try:
        content = markdown_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SearchIndexError(f"Failed to read markdown file: {markdown_path}") from e
    return normalize_whitespace(strip_markdown(content))


def build_search_index(items: list[DocumentItem]) -> SearchIndex:
    """Build the index entries for every page in document order."""
    return SearchIndex(
        pages=[
            SearchEntry(
                title=page.title,
                url=page.output_filename,
                content=extract_text(page.source_path),
            )
            for page in iter_pages(items)
        ]
    )


def write_search_index(items: list[DocumentItem], output_dir: Path) -> Path:
    """
    Generate search-index.json in the output directory.

    Args:
        items: Document tree
        output_dir: Root of the generated site

    Returns:
        Path of the written index

    Raises:
        SearchIndexError: If a page cannot be read or the index cannot be written
    """
    index = build_search_index(items)
    index_path = output_dir / SEARCH_INDEX_FILENAME
    try:
        index_path.write_text(index.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise SearchIndexError(f"Failed to write search index: {index_path}") from e

    logger.debug(f"Search index: {len(index.pages)} pages -> {index_path}")
    return index_path
