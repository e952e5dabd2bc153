"""HTTP client for the Fastly stats API.

Builds the stats request from a :class:`~domain.models.StatsQuery`, performs
exactly one request per logical fetch and turns transport or decoding issues
into the shared error hierarchy. Service metadata lookups used for name
translation go through the same helper.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional
from urllib.parse import quote, quote_plus

import requests

from domain.models import Session, StatsQuery
from infrastructure.http.session import build_session
from shared.errors import HttpError, ParseError, TimeoutError

logger = logging.getLogger(__name__)


def build_params(query: StatsQuery) -> str:
    """Return the query string for ``query``; unset fields are omitted."""

    pairs = (
        ("by", query.by),
        ("from", query.from_time),
        ("to", query.to_time),
        ("region", query.region),
    )
    return "&".join(f"{key}={quote_plus(str(value))}" for key, value in pairs if value)


def build_path(query: StatsQuery) -> str:
    """Return the stats path honouring aggregate > usage > usage_by_service."""

    if query.aggregate:
        return "stats/aggregate"
    if query.usage:
        return "stats/usage"
    if query.service_usage:
        return "stats/usage_by_service"
    path = "stats"
    if query.service:
        path += f"/service/{quote(query.service, safe='')}"
    if query.field:
        path += f"/field/{quote(query.field, safe='')}"
    return path


class FastlyStatsClient:
    """Dedicated HTTP client for the Fastly stats and service endpoints."""

    def __init__(
        self,
        *,
        base_url: str = "https://api.fastly.com",
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
        timeout: float = 15.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or build_session(user_agent or "metrics-fastly/1.0", timeout=timeout)

    @property
    def http(self) -> requests.Session:
        return self._session

    # Public API -----------------------------------------------------------
    def fetch(self, query: StatsQuery, session: Session) -> Any:
        """Perform the stats request and return the decoded JSON document."""

        path = build_path(query)
        params = build_params(query)
        logger.debug("Fetching Fastly stats", extra={"path": path, "mode": query.mode.value})
        return self._request_json(path, session, params=params)

    def get_service(self, service_id: str, session: Session) -> Any:
        """Return the metadata document of ``service_id``."""

        return self._request_json(f"service/{quote(service_id, safe='')}", session)

    # Internal helpers ----------------------------------------------------
    def _request_json(self, path: str, session: Session, *, params: str = "") -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        if params:
            url = f"{url}?{params}"
        headers = {"Content-Type": "application/json"}
        headers.update(session.headers())
        start = time.time()
        try:
            response = self._session.get(url, headers=headers)
        except requests.Timeout as exc:
            raise TimeoutError(f"Timed out requesting /{path}") from exc
        except requests.RequestException as exc:
            raise HttpError(f"Request to /{path} failed: {exc}") from exc

        status = response.status_code
        logger.info(
            "Fastly request done",
            extra={"path": path, "status": status, "elapsed_ms": int((time.time() - start) * 1000)},
        )
        if not 200 <= status < 300:
            detail = self._extract_error_detail(response)
            raise HttpError(f"Fastly API error {status} on /{path}: {detail}", status_code=status)
        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON response from /{path}") from exc

    @staticmethod
    def _extract_error_detail(response: requests.Response) -> str:
        try:
            data = response.json()
        except Exception:  # pragma: no cover - best effort logging
            return getattr(response, "text", "") or "unknown error"
        if isinstance(data, Mapping):
            message = data.get("msg") or data.get("message") or data.get("detail")
            if message:
                return str(message)
        return getattr(response, "text", "") or "unknown error"


__all__ = ["FastlyStatsClient", "build_params", "build_path"]
