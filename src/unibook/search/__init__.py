"""Search index generation for unibook."""

from .index import (
    SEARCH_INDEX_FILENAME,
    SearchEntry,
    SearchIndex,
    build_search_index,
    extract_text,
    strip_markdown,
    write_search_index,
)


__all__ = [
    "SEARCH_INDEX_FILENAME",
    "SearchEntry",
    "SearchIndex",
    "build_search_index",
    "extract_text",
    "strip_markdown",
    "write_search_index",
]
