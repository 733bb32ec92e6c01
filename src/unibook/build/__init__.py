"""Site generation for unibook."""

from .assets import AssetRenderer, SnippetAssets
from .builder import (
    INDEX_FILENAME,
    BuildContext,
    Builder,
    BuildResult,
    build_book,
    build_context,
    inject_language,
)


__all__ = [
    "INDEX_FILENAME",
    "AssetRenderer",
    "BuildContext",
    "BuildResult",
    "Builder",
    "SnippetAssets",
    "build_book",
    "build_context",
    "inject_language",
]
