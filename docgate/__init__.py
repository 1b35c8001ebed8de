"""Rate-limited client for document creation requests."""

__version__ = "0.1.0"
