"""Table of contents rendering for unibook."""

from .renderer import TocRenderer, convert_math_delimiters, html_escape, normalize_base_path


__all__ = ["TocRenderer", "convert_math_delimiters", "html_escape", "normalize_base_path"]
