"""Data models for unibook."""

from .config import (
    CONFIG_FILENAME,
    BookConfig,
    BuildConfig,
    Config,
    ItemConfig,
    PageItem,
    SectionVisibility,
    TocConfig,
    load_config,
)
from .document import (
    DocumentItem,
    Page,
    Part,
    Section,
    find_page_by_source,
    first_page,
    iter_pages,
)
from .settings import UnibookSettings


__all__ = [
    "CONFIG_FILENAME",
    "BookConfig",
    "BuildConfig",
    "Config",
    "DocumentItem",
    "ItemConfig",
    "Page",
    "PageItem",
    "Part",
    "Section",
    "SectionVisibility",
    "TocConfig",
    "UnibookSettings",
    "find_page_by_source",
    "first_page",
    "iter_pages",
    "load_config",
]
