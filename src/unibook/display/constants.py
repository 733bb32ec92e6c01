"""Constants for Rich display system."""

# Emoji mappings for build operations
EMOJI_MAP = {
    "success": "✓",
    "error": "✗",
    "book": "📚",
    "page": "📄",
    "index": "🔎",
    "watch": "👀",
    "serve": "🌐",
    "complete": "✓",
}

# Rich markup styles for different message types
STYLES = {
    "success": "bold green",
    "error": "bold red",
    "book_title": "bold cyan",
    "path": "green",
}

# Log format
LOG_FORMAT = "%(message)s"
DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"

# Progress bar colors
PROGRESS_COLORS = {
    "complete": "green",
    "finished": "bright_green",
}
