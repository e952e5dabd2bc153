from shared.version import __version__ as _APP_VERSION

from .models import (
    REGIONS,
    SAMPLE_RATES,
    ApiKeyCredentials,
    Credentials,
    MetricTriple,
    QueryMode,
    Session,
    StatsQuery,
    UserPasswordCredentials,
)

__version__ = _APP_VERSION

__all__ = [
    "REGIONS",
    "SAMPLE_RATES",
    "ApiKeyCredentials",
    "Credentials",
    "MetricTriple",
    "QueryMode",
    "Session",
    "StatsQuery",
    "UserPasswordCredentials",
    "__version__",
]
