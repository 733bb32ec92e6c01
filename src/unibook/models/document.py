"""Immutable document tree built from the book declaration."""

from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Section(BaseModel):
    """A level-2 heading inside a page."""

    model_config = ConfigDict(frozen=True)

    title: str
    id: str = Field(..., description="Anchor ID assigned by the converter, e.g. 2-Intro")


class Page(BaseModel):
    """A Markdown source rendered to one HTML file."""

    model_config = ConfigDict(frozen=True)

    title: str
    source_path: Path = Field(..., description="Absolute path of the Markdown source")
    output_filename: str = Field(..., description="Output path relative to the output dir")
    sections: tuple[Section, ...] = ()

    @property
    def slug(self) -> str:
        """Filesystem-safe name used for per-page temporary files."""
        return self.output_filename.removesuffix(".html").replace("/", "__")


class Part(BaseModel):
    """A heading-only node owning an ordered list of pages."""

    model_config = ConfigDict(frozen=True)

    title: str
    level: int = Field(default=1, ge=1)
    children: tuple[Page, ...] = ()

    def contains(self, output_filename: str | None) -> bool:
        """Check whether a child page renders to ``output_filename``."""
        if output_filename is None:
            return False
        return any(page.output_filename == output_filename for page in self.children)


# Top-level entries: a part with its pages, or a standalone page
DocumentItem = Part | Page


def iter_pages(items: list[DocumentItem]) -> Iterator[Page]:
    """Yield every page in document order."""
    for item in items:
        match item:
            case Part(children=children):
                yield from children
            case Page():
                yield item


def first_page(items: list[DocumentItem]) -> Page | None:
    """Return the first page in document order, if any."""
    return next(iter_pages(items), None)


def find_page_by_source(items: list[DocumentItem], source_path: Path) -> Page | None:
    """Find the page whose canonical source path equals ``source_path``."""
    target = source_path.resolve()
    for page in iter_pages(items):
        if page.source_path.resolve() == target:
            return page
    return None
