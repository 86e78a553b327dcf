"""taskboard: a minimalist life manager."""

__version__ = "0.1.0"
