"""FastAPI application serving the generated site."""

from pathlib import Path

from fastapi import FastAPI, Response
from fastapi.responses import PlainTextResponse

from ..logger import get_logger


INDEX_FILENAME = "index.html"

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css",
    ".js": "application/javascript",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

logger = get_logger(__name__)


def content_type_for(path: Path) -> str:
    """Content type for a file, chosen by extension only."""
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_request_path(output_dir: Path, url_path: str) -> Path | None:
    """Map a request path to a file inside ``output_dir``.

    Returns:
        The file path, or None if the path escapes the output directory
    """
    relative = url_path.lstrip("/")
    root = output_dir.resolve()
    candidate = (root / (relative or INDEX_FILENAME)).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


def create_app(output_dir: Path) -> FastAPI:
    """
    Build the static file application.

    Args:
        output_dir: Directory holding the generated site

    Returns:
        FastAPI application
    """
    app = FastAPI(title="unibook", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/{url_path:path}")
    def serve_file(url_path: str) -> Response:
        """Serve one file from the output directory."""
        file_path = resolve_request_path(output_dir, url_path)
        if file_path is None or not file_path.is_file():
            return PlainTextResponse("404 Not Found", status_code=404)

        try:
            content = file_path.read_bytes()
        except OSError:
            logger.exception(f"Failed to read {file_path}")
            return PlainTextResponse("500 Internal Server Error", status_code=500)

        return Response(content=content, headers={"Content-Type": content_type_for(file_path)})

    return app
