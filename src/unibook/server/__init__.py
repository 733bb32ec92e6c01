"""Preview HTTP server for unibook."""

from .app import content_type_for, create_app, resolve_request_path


__all__ = ["content_type_for", "create_app", "resolve_request_path"]
