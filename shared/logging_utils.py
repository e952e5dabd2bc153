"""Centralised logging helpers for the collector."""

from __future__ import annotations

import logging
import sys
from typing import Iterable

_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_NOISY_LOGGERS: tuple[str, ...] = (
    "urllib3",
    "urllib3.connectionpool",
)


def configure_default_logging(level: int | str = logging.WARNING) -> None:
    """Initialise logging on stderr so stdout only carries metric lines."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=_DEFAULT_FORMAT, stream=sys.stderr)


def silence_http_loggers(extra_loggers: Iterable[str] | None = None) -> None:
    """Keep transport level chatter out of the collector logs."""

    targets = list(_NOISY_LOGGERS)
    if extra_loggers:
        targets.extend(str(name) for name in extra_loggers)

    for name in targets:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_default_logging", "silence_http_loggers"]
