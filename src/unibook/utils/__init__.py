"""Shared utilities for unibook."""

from .exceptions import (
    AssetError,
    ConfigError,
    ConverterNotFoundError,
    InvalidExtensionError,
    RenderError,
    ResolutionError,
    SearchIndexError,
    SectionExtractionError,
    SourceNotFoundError,
    UnibookError,
    UnsafeSourcePathError,
)


__all__ = [
    "AssetError",
    "ConfigError",
    "ConverterNotFoundError",
    "InvalidExtensionError",
    "RenderError",
    "ResolutionError",
    "SearchIndexError",
    "SectionExtractionError",
    "SourceNotFoundError",
    "UnibookError",
    "UnsafeSourcePathError",
]
