"""Fastly API adapters: authentication and the stats client."""

from .auth import FastlyAuth, credentials_from_options
from .client import FastlyStatsClient, build_params, build_path
from .ports import IStatsProvider

__all__ = [
    "FastlyAuth",
    "FastlyStatsClient",
    "IStatsProvider",
    "build_params",
    "build_path",
    "credentials_from_options",
]
