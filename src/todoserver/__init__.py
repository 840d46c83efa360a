"""Todo query service: filtered, sorted retrieval over a todo store."""

__version__ = "0.1.0"
