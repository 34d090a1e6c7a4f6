"""includeall: resolve and apply include-everything eager-load paths."""

__version__ = "0.1.0"
