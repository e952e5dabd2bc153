"""Project version and release metadata."""

from __future__ import annotations

VERSION = "1.0.0"
RELEASE_NAME = "metrics-fastly v1.0.0"
RELEASE_DATE = "2026-10-18"

__version__ = VERSION
__codename__ = RELEASE_NAME
__release_date__ = RELEASE_DATE
# Keep in sync with ``pyproject.toml``'s ``project.version``.
DEFAULT_VERSION = __version__


def get_version_info() -> dict[str, str]:
    """Return the version metadata for consumers."""

    return {
        "version": __version__,
        "codename": __codename__,
        "release_date": __release_date__,
    }


__all__ = [
    "VERSION",
    "RELEASE_NAME",
    "RELEASE_DATE",
    "__version__",
    "__codename__",
    "__release_date__",
    "DEFAULT_VERSION",
    "get_version_info",
]
