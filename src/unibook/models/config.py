"""Pydantic models for the book declaration (book.toml)."""

import tomllib
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..utils.exceptions import ConfigError


CONFIG_FILENAME = "book.toml"


class SectionVisibility(StrEnum):
    """When H2 section links are shown in the TOC."""

    ALWAYS = "always"
    CURRENT = "current"
    NEVER = "never"

    @classmethod
    def parse(cls, value: str) -> "SectionVisibility":
        """Map a configured value to a visibility, defaulting to CURRENT."""
        try:
            return cls(value)
        except ValueError:
            return cls.CURRENT


class BookConfig(BaseModel):
    """The [book] table: metadata shown in the generated site."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Book title shown in the TOC header")
    description: str | None = None
    authors: list[str] = Field(default_factory=list)
    language: str = Field(default="ja", description="Value of the root lang attribute")
    theme: str = Field(default="light", description="Default color theme")


class BuildConfig(BaseModel):
    """The [build] table: source/output locations and URL prefix."""

    model_config = ConfigDict(frozen=True)

    src_dir: Path = Field(default=Path("src"), description="Markdown source directory")
    output_dir: Path = Field(default=Path("docs"), description="Generated site directory")
    base_path: str = Field(default="", description="URL prefix the site is served under")


class TocConfig(BaseModel):
    """The [toc] table: table of contents display options."""

    model_config = ConfigDict(frozen=True)

    # "always", "current" or "never"; anything else behaves as "current"
    show_sections: str = SectionVisibility.CURRENT.value
    # Parts with level >= foldlevel start collapsed; 0 disables folding
    foldlevel: int = Field(default=0, ge=0)

    @property
    def visibility(self) -> SectionVisibility:
        return SectionVisibility.parse(self.show_sections)


class PageItem(BaseModel):
    """A page listed explicitly under a part."""

    model_config = ConfigDict(frozen=True)

    title: str
    path: str


class ItemConfig(BaseModel):
    """One entry of the ordered [[pages]] array.

    Without ``path`` the entry is a part (a heading-only node); with ``path``
    it is a page. ``items`` is only meaningful for parts:

    - ``None``: collect the following page entries automatically
    - ``[]``: the part has no children
    - ``[...]``: exactly these children
    """

    model_config = ConfigDict(frozen=True)

    title: str
    path: str | None = None
    level: int = Field(default=1, ge=1, description="Nesting level of a part")
    items: list[PageItem] | None = None

    @property
    def is_part(self) -> bool:
        return self.path is None


class Config(BaseModel):
    """Complete, validated book declaration."""

    model_config = ConfigDict(frozen=True)

    book: BookConfig
    build: BuildConfig = Field(default_factory=BuildConfig)
    toc: TocConfig = Field(default_factory=TocConfig)
    pages: list[ItemConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_declaration(self) -> "Config":
        if not self.book.title.strip():
            raise ValueError("Book title cannot be empty")
        if not self.pages:
            raise ValueError(f"No pages defined in {CONFIG_FILENAME}")

        seen: set[str] = set()
        for title in self.declared_titles():
            if title in seen:
                raise ValueError(f"Duplicate page title: {title}")
            seen.add(title)
        return self

    def declared_titles(self) -> list[str]:
        """Titles of every entry, explicit children included, in order."""
        titles = []
        for item in self.pages:
            titles.append(item.title)
            titles.extend(child.title for child in item.items or [])
        return titles

    @classmethod
    def from_toml(cls, text: str) -> "Config":
        """Parse and validate a book declaration from TOML text.

        Raises:
            ConfigError: If the text is not valid TOML or fails validation
        """
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse {CONFIG_FILENAME}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid {CONFIG_FILENAME}") from e

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load and validate the book declaration stored at ``path``."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read config file: {path}") from e
        return cls.from_toml(text)


def load_config(book_dir: Path) -> Config:
    """Load ``book.toml`` from a book directory.

    Raises:
        ConfigError: If the file is missing or invalid
    """
    config_path = book_dir / CONFIG_FILENAME
    if not config_path.is_file():
        raise ConfigError(
            f"{CONFIG_FILENAME} not found in {book_dir}. "
            "Run 'unibook init' to create a new book."
        )
    return Config.from_file(config_path)
