"""
TOC renderer - builds the navigation sidebar for every page.

The markup is assembled by plain string concatenation so that identical
input always yields byte-identical output.
"""

from html import escape

from ..models.config import Config, SectionVisibility
from ..models.document import DocumentItem, Page, Part


FOLD_ICON = (
    '<svg class="fold-icon" width="12" height="12" viewBox="0 0 12 12">'
    '<path d="M3 4.5l3 3 3-3" stroke="currentColor" stroke-width="1.5" '
    'fill="none" stroke-linecap="round"/></svg>'
)

SEARCH_ICON = (
    '<svg width="16" height="16" viewBox="0 0 16 16" fill="currentColor">'
    '<path d="M11.742 10.344a6.5 6.5 0 1 0-1.397 1.398h-.001c.03.04.062.078.098.115l3.85 '
    "3.85a1 1 0 0 0 1.415-1.414l-3.85-3.85a1.007 1.007 0 0 0-.115-.1zM12 6.5a5.5 5.5 0 1 "
    '1-11 0 5.5 5.5 0 0 1 11 0z"/></svg>'
)


def normalize_base_path(base_path: str) -> str:
    """Normalize a URL prefix to ``/prefix`` (leading slash, no trailing slash).

    An empty prefix stays empty, so links become ``/page.html``.
    """
    stripped = base_path.strip("/")
    if not stripped:
        return ""
    return f"/{stripped}"


def convert_math_delimiters(text: str) -> str:
    """Rewrite inline ``$...$`` math to ``\\(...\\)``.

    An unterminated ``$`` is kept literally together with what follows it.
    """
    result: list[str] = []
    buffer: list[str] = []
    in_math = False

    for char in text:
        if char == "$":
            if in_math:
                result.append("\\(" + "".join(buffer) + "\\)")
                buffer.clear()
            in_math = not in_math
        elif in_math:
            buffer.append(char)
        else:
            result.append(char)

    if in_math:
        result.append("$" + "".join(buffer))

    return "".join(result)


def html_escape(text: str) -> str:
    """Escape text for HTML after converting its math delimiters."""
    return escape(convert_math_delimiters(text))


class TocRenderer:
    """
    Renders the document tree as a navigation sidebar.

    Handles:
    - Current page highlighting
    - Folding of parts at or above the configured fold level
    - Section (H2) links according to the visibility policy
    - A base path prefix for every link
    """

    def __init__(
        self,
        book_title: str,
        show_sections: str | SectionVisibility = SectionVisibility.CURRENT,
        base_path: str = "",
        foldlevel: int = 0,
    ):
        """
        Initialize the TOC renderer.

        Args:
            book_title: Title shown in the sidebar header
            show_sections: "always", "current" or "never" (unknown values act as "current")
            base_path: URL prefix the site is served under
            foldlevel: Parts with level >= foldlevel start folded (0 disables)
        """
        self.book_title = book_title
        self.visibility = SectionVisibility.parse(str(show_sections))
        self.base_path = normalize_base_path(base_path)
        self.foldlevel = foldlevel

    @classmethod
    def from_config(cls, config: Config) -> "TocRenderer":
        return cls(
            book_title=config.book.title,
            show_sections=config.toc.show_sections,
            base_path=config.build.base_path,
            foldlevel=config.toc.foldlevel,
        )

    def is_folded(self, part: Part, current_page: str | None) -> bool:
        """Whether a part starts collapsed when rendering ``current_page``."""
        if part.contains(current_page):
            return False
        return self.foldlevel > 0 and part.level >= self.foldlevel

    def shows_sections(self, is_current: bool) -> bool:
        """Whether a page's section links are rendered."""
        if self.visibility is SectionVisibility.ALWAYS:
            return True
        if self.visibility is SectionVisibility.NEVER:
            return False
        return is_current

    def page_href(self, page: Page, anchor: str | None = None) -> str:
        href = f"{self.base_path}/{escape(page.output_filename)}"
        if anchor is not None:
            href += f"#{escape(anchor)}"
        return href

    def render(self, items: list[DocumentItem], current_page: str | None = None) -> str:
        """
        Render the sidebar and open the content wrapper.

        Args:
            items: Top-level document items in order
            current_page: Output filename of the page being rendered, if any

        Returns:
            Navigation markup
        """
        html = '<nav id="toc-sidebar">\n'
        html += f'  <div class="toc-header"><h2>{html_escape(self.book_title)}</h2></div>\n'
        html += '  <button id="search-button" class="search-button" title="Search (Ctrl+K)">\n'
        html += f"    {SEARCH_ICON}\n"
        html += "    Search\n"
        html += "  </button>\n"
        html += '  <ul class="toc-list">\n'

        for item in items:
            match item:
                case Part():
                    html += self._render_part(item, current_page)
                case Page():
                    html += self._render_page(item, current_page)

        html += "  </ul>\n"
        html += "</nav>\n"
        html += '<div id="content-wrapper">\n'
        return html

    def _render_part(self, part: Part, current_page: str | None) -> str:
        folded = self.is_folded(part, current_page) and bool(part.children)
        fold_class = " foldable" if folded else ""
        collapsed_class = " collapsed" if folded else ""
        css_class = f"toc-part toc-part-level-{part.level}{fold_class}"

        if not part.children:
            return f'    <li class="{css_class}">{html_escape(part.title)}</li>\n'

        html = f'    <li class="{css_class}">\n'
        html += f'      <div class="toc-part-header{collapsed_class}">\n'
        html += f'        <button class="toc-fold-toggle" aria-label="Toggle section">{FOLD_ICON}</button>\n'
        html += f"        <span>{html_escape(part.title)}</span>\n"
        html += "      </div>\n"
        html += f'      <ul class="toc-children{collapsed_class}">\n'

        for page in part.children:
            is_current = page.output_filename == current_page
            current_class = " current" if is_current else ""
            html += "        <li>\n"
            html += (
                f'          <a href="{self.page_href(page)}" '
                f'class="toc-page-child toc-page-indent-{part.level}{current_class}">'
                f"{html_escape(page.title)}</a>\n"
            )
            if self.shows_sections(is_current) and page.sections:
                html += self._render_sections(
                    page, f"toc-sections toc-sections-indent-{part.level}", indent=10
                )
            html += "        </li>\n"

        html += "      </ul>\n"
        html += "    </li>\n"
        return html

    def _render_page(self, page: Page, current_page: str | None) -> str:
        is_current = page.output_filename == current_page
        current_attr = ' class="current"' if is_current else ""

        html = "    <li>\n"
        html += f'      <a href="{self.page_href(page)}"{current_attr}>{html_escape(page.title)}</a>\n'
        if self.shows_sections(is_current) and page.sections:
            html += self._render_sections(page, "toc-sections", indent=6)
        html += "    </li>\n"
        return html

    def _render_sections(self, page: Page, css_class: str, indent: int) -> str:
        pad = " " * indent
        html = f'{pad}<ul class="{css_class}">\n'
        for section in page.sections:
            html += (
                f'{pad}  <li><a href="{self.page_href(page, section.id)}">'
                f"{html_escape(section.title)}</a></li>\n"
            )
        html += f"{pad}</ul>\n"
        return html
