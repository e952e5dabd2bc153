"""Entry point for ``python -m tools`` exposing bundled CLI utilities."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from . import __version__, metrics_fastly

LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m tools",
        description="Command line utilities for the Fastly metrics collector",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="Command to run (for example metrics-fastly)",
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Extra arguments for the selected command",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"metrics-fastly tools {__version__}",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    parsed = parser.parse_args(list(argv) if argv is not None else None)

    command = parsed.command or ""
    args = parsed.args or []

    if command in {"metrics-fastly", "metrics_fastly"}:
        LOGGER.debug("Delegating to tools.metrics_fastly with args: %s", args)
        return metrics_fastly.main(args)

    if not command:
        parser.print_help()
        return 0

    parser.error(f"Unknown command: {command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
