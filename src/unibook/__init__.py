"""unibook - multi-page documentation sites from Markdown and a declarative TOC."""

from .book import build_document_tree
from .build import Builder, build_book
from .models import Config, load_config
from .toc import TocRenderer


__all__ = ["Builder", "Config", "TocRenderer", "build_book", "build_document_tree", "load_config"]
