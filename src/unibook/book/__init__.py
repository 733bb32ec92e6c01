"""Document tree construction for unibook."""

from .tree import (
    DocumentTreeBuilder,
    build_document_tree,
    count_declared_pages,
    extract_sections,
    percent_encode,
    section_anchor_id,
    source_to_html_filename,
)


__all__ = [
    "DocumentTreeBuilder",
    "build_document_tree",
    "count_declared_pages",
    "extract_sections",
    "percent_encode",
    "section_anchor_id",
    "source_to_html_filename",
]
