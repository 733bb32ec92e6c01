"""Custom exception hierarchy for unibook."""

from pathlib import Path


class UnibookError(Exception):
    """Base exception for all unibook errors."""


class ConfigError(UnibookError):
    """Raised when book.toml is missing, malformed or invalid."""


class ResolutionError(UnibookError):
    """Raised when a declared page cannot be resolved to a source file."""


class SourceNotFoundError(ResolutionError):
    """Raised when a page's Markdown source does not exist."""

    def __init__(self, relative_path: str, resolved_path: Path):
        self.relative_path = relative_path
        self.resolved_path = resolved_path
        super().__init__(
            f"Source file not found: {relative_path} (looking for: {resolved_path})"
        )


class InvalidExtensionError(ResolutionError):
    """Raised when a page's source path does not end with .md."""


class UnsafeSourcePathError(ResolutionError):
    """Raised when a page's source path is absolute or climbs out with '..'."""


class SectionExtractionError(UnibookError):
    """Raised when a page's source cannot be read for headings."""


class RenderError(UnibookError):
    """Raised when the external converter fails to render a page."""

    def __init__(
        self,
        message: str,
        *,
        page_title: str | None = None,
        source_path: Path | None = None,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ):
        super().__init__(message)
        self.page_title = page_title
        self.source_path = source_path
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class ConverterNotFoundError(RenderError):
    """Raised when the converter executable is not installed or not in PATH."""


class AssetError(UnibookError):
    """Raised when writing build assets or generated pages fails."""


class SearchIndexError(UnibookError):
    """Raised when the search index cannot be generated."""
