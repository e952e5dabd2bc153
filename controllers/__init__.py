"""Controller package exports."""

from shared.version import __version__ as _APP_VERSION

__version__ = _APP_VERSION

__all__: list[str] = ["__version__"]
