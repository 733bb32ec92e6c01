"""Unit tests for the book.toml models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from unibook.models.config import (
    CONFIG_FILENAME,
    Config,
    SectionVisibility,
    load_config,
)
from unibook.utils.exceptions import ConfigError


MINIMAL_TOML = """
[book]
title = "My Book"

[[pages]]
title = "Intro"
path = "intro.md"
"""


class TestDefaults:
    """Tests for values filled in when tables are omitted."""

    def test_minimal_declaration(self):
        """Test that only [book] title and one page are required."""
        config = Config.from_toml(MINIMAL_TOML)
        assert config.book.title == "My Book"
        assert config.book.language == "ja"
        assert config.book.theme == "light"
        assert config.book.authors == []
        assert config.build.src_dir == Path("src")
        assert config.build.output_dir == Path("docs")
        assert config.build.base_path == ""
        assert config.toc.show_sections == "current"
        assert config.toc.foldlevel == 0

    def test_item_defaults(self):
        """Test that items default to level 1 and no explicit children."""
        config = Config.from_toml(MINIMAL_TOML)
        item = config.pages[0]
        assert item.level == 1
        assert item.items is None
        assert item.is_part is False

    def test_entry_without_path_is_part(self):
        """Test that an entry without a path is a part."""
        config = Config.from_toml(MINIMAL_TOML + '\n[[pages]]\ntitle = "Part I"\n')
        assert config.pages[1].is_part is True

    def test_models_are_frozen(self):
        """Test that a loaded declaration cannot be mutated."""
        config = Config.from_toml(MINIMAL_TOML)
        with pytest.raises(ValidationError):
            config.book.title = "Other"


class TestSectionVisibility:
    """Tests for the show_sections policy."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("always", SectionVisibility.ALWAYS),
            ("current", SectionVisibility.CURRENT),
            ("never", SectionVisibility.NEVER),
            ("sometimes", SectionVisibility.CURRENT),
            ("", SectionVisibility.CURRENT),
        ],
    )
    def test_parse(self, value, expected):
        """Test that unknown values fall back to current."""
        assert SectionVisibility.parse(value) is expected

    def test_toc_visibility_property(self):
        """Test that TocConfig exposes the parsed policy."""
        config = Config.from_toml(MINIMAL_TOML + '\n[toc]\nshow_sections = "bogus"\n')
        assert config.toc.visibility is SectionVisibility.CURRENT


class TestValidation:
    """Tests for declaration-level validation."""

    def test_empty_title_rejected(self):
        """Test that a blank book title is rejected."""
        text = MINIMAL_TOML.replace('"My Book"', '"   "')
        with pytest.raises(ConfigError) as exc_info:
            Config.from_toml(text)
        assert "Book title cannot be empty" in str(exc_info.value.__cause__)

    def test_no_pages_rejected(self):
        """Test that a declaration without pages is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            Config.from_toml('[book]\ntitle = "Empty"\n')
        assert "No pages defined" in str(exc_info.value.__cause__)

    def test_duplicate_titles_rejected(self):
        """Test that two entries with the same title are rejected."""
        text = MINIMAL_TOML + '\n[[pages]]\ntitle = "Intro"\npath = "other.md"\n'
        with pytest.raises(ConfigError) as exc_info:
            Config.from_toml(text)
        assert "Duplicate page title: Intro" in str(exc_info.value.__cause__)

    def test_duplicate_title_in_explicit_children(self):
        """Test that explicit part children take part in the duplicate check."""
        text = MINIMAL_TOML + (
            '\n[[pages]]\ntitle = "Part I"\nitems = [{ title = "Intro", path = "again.md" }]\n'
        )
        with pytest.raises(ConfigError) as exc_info:
            Config.from_toml(text)
        assert "Duplicate page title: Intro" in str(exc_info.value.__cause__)

    def test_negative_foldlevel_rejected(self):
        """Test that foldlevel must not be negative."""
        with pytest.raises(ConfigError):
            Config.from_toml(MINIMAL_TOML + "\n[toc]\nfoldlevel = -1\n")

    def test_zero_level_rejected(self):
        """Test that part levels start at 1."""
        with pytest.raises(ConfigError):
            Config.from_toml(MINIMAL_TOML + '\n[[pages]]\ntitle = "P"\nlevel = 0\n')

    def test_invalid_toml(self):
        """Test that TOML syntax errors become ConfigError."""
        with pytest.raises(ConfigError, match="Failed to parse book.toml"):
            Config.from_toml("[book\ntitle = ")

    def test_declared_titles_order(self):
        """Test that children follow their part in declaration order."""
        text = MINIMAL_TOML + (
            '\n[[pages]]\ntitle = "Part I"\n'
            'items = [{ title = "A", path = "a.md" }, { title = "B", path = "b.md" }]\n'
        )
        assert Config.from_toml(text).declared_titles() == ["Intro", "Part I", "A", "B"]


class TestLoadConfig:
    """Tests for loading book.toml from disk."""

    def test_load_from_directory(self, tmp_path):
        """Test loading a valid book.toml."""
        (tmp_path / CONFIG_FILENAME).write_text(MINIMAL_TOML, encoding="utf-8")
        config = load_config(tmp_path)
        assert config.pages[0].path == "intro.md"

    def test_missing_file(self, tmp_path):
        """Test that a missing book.toml suggests running init."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert "book.toml not found" in str(exc_info.value)
        assert "unibook init" in str(exc_info.value)

    def test_from_file_unreadable(self, tmp_path):
        """Test that a directory in place of the file is reported."""
        with pytest.raises(ConfigError, match="Failed to read config file"):
            Config.from_file(tmp_path)
