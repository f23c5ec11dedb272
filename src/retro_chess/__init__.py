"""Two-player chess rules engine with an HTTP session API."""

__version__ = "0.1.0"
