"""Skeleton book written by ``unibook init``."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..logger import get_logger
from ..models.config import CONFIG_FILENAME
from ..utils.exceptions import ConfigError


DEFAULT_TITLE = "My Book"

# Template name -> path relative to the book root
SKELETON = {
    "book.toml.j2": Path(CONFIG_FILENAME),
    "intro.md.j2": Path("src") / "intro.md",
    "chapter1.md.j2": Path("src") / "chapter1.md",
}

logger = get_logger(__name__)


def init_book(book_dir: Path, title: str = DEFAULT_TITLE) -> list[Path]:
    """
    Create a minimal two-page book in ``book_dir``.

    Args:
        book_dir: Book root, created if missing
        title: Title written to book.toml

    Returns:
        Paths of the created files

    Raises:
        ConfigError: If book.toml already exists
    """
    if (book_dir / CONFIG_FILENAME).exists():
        raise ConfigError(f"{CONFIG_FILENAME} already exists in {book_dir}")

    # Markdown and TOML output, no HTML escaping
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=False,
        keep_trailing_newline=True,
    )

    created = []
    for template_name, relative in SKELETON.items():
        path = book_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(env.get_template(template_name).render(title=title), encoding="utf-8")
        logger.debug(f"Created {path}")
        created.append(path)
    return created
