"""
Static include snippets shared by every page of a build.

Snippets are rendered once per build from the Jinja2 templates in
``templates/`` into the build's temporary directory and handed to the
converter in a fixed order:

- header:      style.html
- before-body: controls.html, then the page's own toc-<slug>.html
- after-body:  wrapper-end.html, search.html
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, ConfigDict, Field

from ..models.config import Config
from ..search.index import SEARCH_INDEX_FILENAME
from ..toc.renderer import normalize_base_path
from ..utils.exceptions import AssetError


THEMES = ("light", "dark", "sepia")

HEADER_SNIPPETS = ("style.html",)
BEFORE_BODY_SNIPPETS = ("controls.html",)
AFTER_BODY_SNIPPETS = ("wrapper-end.html", "search.html")
REDIRECT_TEMPLATE = "index.html.j2"


class SnippetAssets(BaseModel):
    """Paths of the rendered snippets, grouped by injection point."""

    model_config = ConfigDict(frozen=True)

    header: tuple[Path, ...] = Field(default=(), description="Included in <head>")
    before_body: tuple[Path, ...] = Field(default=(), description="Included before the page body")
    after_body: tuple[Path, ...] = Field(default=(), description="Included after the page body")


class AssetRenderer:
    """Renders snippet and redirect templates for a book."""

    def __init__(self, config: Config):
        self.config = config

        templates_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(enabled_extensions=("html", "j2")),
            keep_trailing_newline=True,
        )

    def render_snippet(self, name: str) -> str:
        """Render one snippet template (``name`` without the .j2 suffix)."""
        template = self.env.get_template(f"{name}.j2")
        return template.render(
            theme=self.config.book.theme,
            themes=THEMES,
            base_path=normalize_base_path(self.config.build.base_path),
            index_filename=SEARCH_INDEX_FILENAME,
        )

    def write_snippets(self, directory: Path) -> SnippetAssets:
        """
        Write every static snippet into ``directory``.

        Raises:
            AssetError: If a snippet cannot be written
        """

        def write(names: tuple[str, ...]) -> tuple[Path, ...]:
            paths = []
            for name in names:
                path = directory / name
                try:
                    path.write_text(self.render_snippet(name), encoding="utf-8")
                except OSError as e:
                    raise AssetError(f"Failed to write {name}") from e
                paths.append(path)
            return tuple(paths)

        return SnippetAssets(
            header=write(HEADER_SNIPPETS),
            before_body=write(BEFORE_BODY_SNIPPETS),
            after_body=write(AFTER_BODY_SNIPPETS),
        )

    def render_redirect(self, target: str) -> str:
        """Landing page that immediately redirects to ``target``."""
        template = self.env.get_template(REDIRECT_TEMPLATE)
        return template.render(target=target, title=self.config.book.title)
