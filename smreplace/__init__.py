"""Confirmed find-and-replace on one column of a SQLite media database."""

from .core import VERSION as __version__

__all__ = ["__version__"]
