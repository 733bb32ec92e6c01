"""Scaffolding for new books."""

from .book import DEFAULT_TITLE, init_book


__all__ = ["DEFAULT_TITLE", "init_book"]
