"""Bundled command line utilities."""

from shared.version import __version__

__all__ = ["__version__"]
