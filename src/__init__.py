"""Cached AI content processing engine."""

from contentengine.version import __version__

__all__ = ["__version__"]
