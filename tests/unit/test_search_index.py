"""Unit tests for search index generation."""

import json
from pathlib import Path

import pytest

from unibook.models.document import Page, Part
from unibook.search.index import (
    SEARCH_INDEX_FILENAME,
    build_search_index,
    extract_text,
    strip_markdown,
    write_search_index,
)
from unibook.utils.exceptions import SearchIndexError


class TestStripMarkdown:
    """Tests for Markdown syntax removal."""

    def test_heading_markers(self):
        """Test that leading heading markers are removed."""
        assert strip_markdown("## Title").strip() == "Title"

    def test_emphasis_and_code(self):
        """Test that bold, italic and inline code markers are removed."""
        assert strip_markdown("**bold** _it_ `code`") == "bold it code"

    def test_list_and_quote_markers(self):
        """Test that list and blockquote markers are removed."""
        assert strip_markdown("- item").strip() == "item"
        assert strip_markdown("> quote").strip() == "quote"

    def test_code_block_content_kept(self):
        """Test that fence lines are dropped but code is kept verbatim."""
        text = "before\n```python\nx = a * b_c\n```\nafter"
        assert strip_markdown(text) == "before x = a * b_c after"


class TestExtractText:
    """Tests for page text extraction."""

    def test_whitespace_collapsed(self, tmp_path):
        """Test that runs of whitespace become single spaces."""
        source = tmp_path / "page.md"
        source.write_text("# Title\n\n\nSome   **text**\n\n- item\n", encoding="utf-8")
        assert extract_text(source) == "Title Some text item"

    def test_unreadable(self, tmp_path):
        """Test that a missing file raises SearchIndexError."""
        with pytest.raises(SearchIndexError):
            extract_text(tmp_path / "missing.md")


class TestBuildIndex:
    """Tests for the index document."""

    @pytest.fixture
    def items(self, tmp_path):
        (tmp_path / "a.md").write_text("# Alpha\n\nFirst page.\n", encoding="utf-8")
        (tmp_path / "b.md").write_text("# Beta\n", encoding="utf-8")
        return [
            Page(title="Alpha", source_path=tmp_path / "a.md", output_filename="a.html"),
            Part(
                title="Part",
                children=(Page(title="Beta", source_path=tmp_path / "b.md", output_filename="guide/b.html"),),
            ),
        ]

    def test_entries_in_document_order(self, items):
        """Test that every page is indexed in order with its output URL."""
        index = build_search_index(items)
        assert [(e.title, e.url) for e in index.pages] == [("Alpha", "a.html"), ("Beta", "guide/b.html")]
        assert index.pages[0].content == "Alpha First page."

    def test_write_json(self, items, tmp_path):
        """Test the JSON layout written to the output directory."""
        output_dir = tmp_path / "out"
        output_dir.mkdir()

        path = write_search_index(items, output_dir)

        assert path == output_dir / SEARCH_INDEX_FILENAME
        data = json.loads(path.read_text(encoding="utf-8"))
        assert list(data) == ["pages"]
        assert data["pages"][1] == {"title": "Beta", "url": "guide/b.html", "content": "Beta"}

    def test_write_failure(self, items, tmp_path):
        """Test that an unwritable output directory raises SearchIndexError."""
        with pytest.raises(SearchIndexError):
            write_search_index(items, tmp_path / "does-not-exist")

    def test_empty_tree(self):
        """Test that an empty tree yields an empty index."""
        assert build_search_index([]).pages == []


def test_missing_page_source_fails_index():
    """Test that a page whose source vanished aborts indexing."""
    page = Page(title="Gone", source_path=Path("/nonexistent/gone.md"), output_filename="gone.html")
    with pytest.raises(SearchIndexError):
        build_search_index([page])
