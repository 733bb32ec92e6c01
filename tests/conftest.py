"""Shared pytest fixtures and configuration for unibook tests."""

from pathlib import Path
from textwrap import dedent

import pytest

from unibook.models.config import Config
from unibook.utils.exceptions import RenderError


BOOK_TOML = dedent(
    """\
    [book]
    title = "Test Book"
    description = "A book for tests"
    authors = ["Tester"]
    language = "en"

    [build]
    src_dir = "src"
    output_dir = "docs"

    [[pages]]
    title = "Introduction"
    path = "intro.md"

    [[pages]]
    title = "Chapter 1"
    path = "chapter1.md"
    """
)

INTRO_MD = dedent(
    """\
    # Introduction

    Welcome to the **test** book.

    ## Getting Started

    Run `unibook build`.
    """
)

CHAPTER1_MD = dedent(
    """\
    # Chapter 1

    ## Section 1.1

    - First item
    - Second item

    ```
    def hello():
        pass
    ```

    ## Section 1.2

    > A quote
    """
)


class FakeConverter:
    """Records every render call and writes a small standalone HTML page."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.calls: list[dict] = []

    def __call__(self, source, output, *, header, before_body, after_body):
        self.calls.append(
            {
                "source": Path(source),
                "output": Path(output),
                "header": [Path(p) for p in header],
                "before_body": [Path(p) for p in before_body],
                "after_body": [Path(p) for p in after_body],
                # Snippets live in a temporary directory, capture them now
                "toc": Path(before_body[-1]).read_text(encoding="utf-8"),
            }
        )
        if self.fail_on is not None and Path(source).name == self.fail_on:
            raise RenderError("unidoc failed with exit code 1", returncode=1, stderr="boom")

        body = Path(source).read_text(encoding="utf-8")
        Path(output).write_text(
            f"<!DOCTYPE html>\n<html>\n<head></head>\n<body>\n{body}</body>\n</html>\n",
            encoding="utf-8",
        )

    @property
    def rendered(self) -> list[str]:
        return [call["source"].name for call in self.calls]


@pytest.fixture
def fake_converter() -> FakeConverter:
    """Converter stand-in that needs no external executable."""
    return FakeConverter()


@pytest.fixture
def book_dir(tmp_path) -> Path:
    """A minimal book with two pages."""
    root = tmp_path / "book"
    src = root / "src"
    src.mkdir(parents=True)
    (root / "book.toml").write_text(BOOK_TOML, encoding="utf-8")
    (src / "intro.md").write_text(INTRO_MD, encoding="utf-8")
    (src / "chapter1.md").write_text(CHAPTER1_MD, encoding="utf-8")
    return root


@pytest.fixture
def make_config():
    """Build a Config from a list of [[pages]] entries."""

    def _make(pages, **tables) -> Config:
        data = {"book": {"title": "Test Book"}, "pages": pages}
        data.update(tables)
        return Config.model_validate(data)

    return _make


@pytest.fixture
def write_sources(tmp_path):
    """Create Markdown sources under tmp_path/src and return tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / "src" / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on location."""
    for item in items:
        # Auto-mark integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        # Auto-mark unit tests
        elif "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
