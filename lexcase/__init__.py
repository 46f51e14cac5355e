"""LexCase: case management API for lawyers."""

__version__ = "0.1.0"
