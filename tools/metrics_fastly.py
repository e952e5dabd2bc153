"""Collect Fastly stats and print them as Graphite plaintext metrics."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from controllers.collector import CollectorOptions, run_collection
from domain.models import DEFAULT_SAMPLE_RATE, REGIONS, SAMPLE_RATES, StatsQuery
from infrastructure.fastly.auth import credentials_from_options
from shared.config import settings
from shared.errors import AppError, ConfigError
from shared.logging_utils import configure_default_logging, silence_http_loggers
from shared.version import __version__

LOGGER = logging.getLogger(__name__)

# Sensu check exit codes
EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_UNKNOWN = 3


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="metrics-fastly",
        description="Fetch Fastly stats and output Graphite metrics",
    )
    parser.add_argument("-u", "--user", help="Fastly user account, requires --password")
    parser.add_argument("-p", "--password", help="Fastly user account's password. Used with --user")
    parser.add_argument("-k", "--key", help="Fastly API Key")
    parser.add_argument(
        "-f", "--from", dest="from_time", metavar="TIME", help="Start of the time range to gather metrics from"
    )
    parser.add_argument("-t", "--to", dest="to_time", metavar="TIME", help="End of the time range")
    parser.add_argument(
        "-b",
        "--by",
        choices=SAMPLE_RATES,
        default=DEFAULT_SAMPLE_RATE,
        help=(
            "Sample rate of metrics, date ranges vary by rate. minute => 30 mins ago to now, "
            "hour => 1 day ago to now, day => 1 month ago to now"
        ),
    )
    parser.add_argument("-r", "--region", choices=REGIONS, help="Limit the query to a certain region")
    parser.add_argument(
        "-c",
        "--scheme",
        default=None,
        help="Metric naming scheme, text to prepend to metric (default: <hostname>.fastly)",
    )
    parser.add_argument("-d", "--field", help="Fetch specific field")
    parser.add_argument(
        "-a", "--aggregate", action="store_true", help="Fetch stats aggregated across all services"
    )
    parser.add_argument(
        "-s", "--service", metavar="SERVICE_ID", help="Fetch a specific service, must be its ID. Not name"
    )
    parser.add_argument(
        "-g", "--usage", action="store_true", help="Fetch usage across all services grouped by region"
    )
    parser.add_argument(
        "-v",
        "--usage-service",
        dest="service_usage",
        action="store_true",
        help="Fetch usage across all services grouped by service",
    )
    parser.add_argument(
        "-n",
        "--translate",
        action="store_true",
        help="Translate Service IDs into Service Names (Performance Hit)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"metrics-fastly {__version__}")

    return parser.parse_args(list(argv) if argv is not None else None)


def build_options(args: argparse.Namespace) -> CollectorOptions:
    """Merge CLI arguments with settings; CLI values win."""

    credentials = credentials_from_options(
        key=args.key or settings.FASTLY_API_KEY,
        user=args.user or settings.FASTLY_USER,
        password=args.password or settings.FASTLY_PASSWORD,
    )
    query = StatsQuery(
        service=args.service,
        field=args.field,
        aggregate=args.aggregate,
        usage=args.usage,
        service_usage=args.service_usage,
        from_time=args.from_time,
        to_time=args.to_time,
        by=args.by,
        region=args.region,
    )
    return CollectorOptions(
        credentials=credentials,
        query=query,
        scheme=args.scheme or settings.FASTLY_SCHEME,
        translate=args.translate,
    )


def main(argv: Sequence[str] | None = None, *, stream: TextIO | None = None) -> int:
    args = parse_args(argv)
    configure_default_logging(args.log_level or settings.LOG_LEVEL)
    silence_http_loggers()

    try:
        emitted = run_collection(build_options(args), stream=stream)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except AppError as exc:
        LOGGER.error("Fastly collection failed: %s", exc)
        print(f"Check failed to run: {exc}", file=sys.stderr)
        return EXIT_UNKNOWN

    LOGGER.debug("Emitted %d metrics", emitted)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
