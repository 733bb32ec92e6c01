"""Unit tests for runtime settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from unibook.models.settings import UnibookSettings


class TestUnibookSettings:
    """Tests for UnibookSettings."""

    def test_defaults(self, monkeypatch, tmp_path):
        """Test the built-in defaults."""
        monkeypatch.chdir(tmp_path)
        settings = UnibookSettings()
        assert settings.converter == "unidoc"
        assert settings.converter_timeout is None
        assert settings.debounce_ms == 500
        assert settings.poll_interval_ms == 100
        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.log_level == "INFO"
        assert settings.log_file is None

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test that UNIBOOK_ variables are honored."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("UNIBOOK_CONVERTER", "pandoc")
        monkeypatch.setenv("UNIBOOK_PORT", "8080")
        monkeypatch.setenv("UNIBOOK_LOG_FILE", "build.log")

        settings = UnibookSettings()

        assert settings.converter == "pandoc"
        assert settings.port == 8080
        assert settings.log_file == Path("build.log")

    def test_invalid_port(self, monkeypatch, tmp_path):
        """Test that out-of-range ports are rejected."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("UNIBOOK_PORT", "70000")
        with pytest.raises(ValidationError):
            UnibookSettings()
