from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional, Union

SAMPLE_RATES: tuple[str, ...] = ("minute", "hour", "day")
REGIONS: tuple[str, ...] = ("usa", "europe", "anzac", "africa", "asia", "latam")
DEFAULT_SAMPLE_RATE = "day"


@dataclass(frozen=True)
class ApiKeyCredentials:
    """Fastly API token sent verbatim in the ``Fastly-Key`` header."""

    key: str

    def __repr__(self) -> str:
        return "ApiKeyCredentials(key='***')"


@dataclass(frozen=True)
class UserPasswordCredentials:
    """Account credentials exchanged for a session cookie via ``/login``."""

    user: str
    password: str

    def __repr__(self) -> str:
        return f"UserPasswordCredentials(user={self.user!r}, password='***')"


Credentials = Union[ApiKeyCredentials, UserPasswordCredentials]


@dataclass(frozen=True)
class Session:
    """Credential context attached to every outgoing request.

    Attributes:
        api_key: Raw API key when authenticating with a token.
        cookie: Session cookie obtained from a login exchange.
    """

    api_key: Optional[str] = None
    cookie: Optional[str] = None

    @property
    def is_login(self) -> bool:
        return bool(self.cookie)

    def headers(self) -> dict[str, str]:
        if self.cookie:
            return {"Cookie": self.cookie}
        if self.api_key:
            return {"Fastly-Key": self.api_key}
        return {}

    def __repr__(self) -> str:
        kind = "cookie" if self.cookie else "api_key" if self.api_key else "anonymous"
        return f"Session(kind={kind!r})"


class QueryMode(str, Enum):
    """Path selecting mode of a stats request, listed by precedence."""

    AGGREGATE = "aggregate"
    USAGE = "usage"
    USAGE_BY_SERVICE = "usage_by_service"
    BY_SERVICE = "service"
    BY_FIELD = "field"
    DEFAULT = "default"


@dataclass(frozen=True)
class StatsQuery:
    """Options describing a single stats request.

    Attributes:
        service: Service ID to restrict the query to.
        field: Single stats field to fetch.
        aggregate: Fetch stats aggregated across all services.
        usage: Fetch usage across all services grouped by region.
        service_usage: Fetch usage across all services grouped by service.
        from_time: Start of the time range, passed through to the API.
        to_time: End of the time range, passed through to the API.
        by: Sample rate, one of ``minute``, ``hour`` or ``day``.
        region: Optional region filter.
    """

    service: Optional[str] = None
    field: Optional[str] = None
    aggregate: bool = False
    usage: bool = False
    service_usage: bool = False
    from_time: Optional[str] = None
    to_time: Optional[str] = None
    by: Optional[str] = DEFAULT_SAMPLE_RATE
    region: Optional[str] = None

    def __post_init__(self) -> None:
        if self.by is not None and self.by not in SAMPLE_RATES:
            raise ValueError(f"by must be one of {', '.join(SAMPLE_RATES)}")
        if self.region is not None and self.region not in REGIONS:
            raise ValueError(f"region must be one of {', '.join(REGIONS)}")

    @property
    def mode(self) -> QueryMode:
        if self.aggregate:
            return QueryMode.AGGREGATE
        if self.usage:
            return QueryMode.USAGE
        if self.service_usage:
            return QueryMode.USAGE_BY_SERVICE
        if self.service:
            return QueryMode.BY_SERVICE
        if self.field:
            return QueryMode.BY_FIELD
        return QueryMode.DEFAULT


class MetricTriple(NamedTuple):
    """A flattened metric ready for emission."""

    name: str
    value: Any
    timestamp: Optional[int] = None
