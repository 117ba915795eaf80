"""findctl - depth-bounded filename search with saved sessions."""

__version__ = "0.1.0"
