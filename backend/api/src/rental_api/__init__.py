"""REST API package for the rental booking backend."""

__version__ = "0.1.0"
