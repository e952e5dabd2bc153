"""Run one metrics collection: login, fetch, flatten and emit."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, TextIO

from application.metrics_flattener import flatten
from domain.models import Credentials, StatsQuery
from infrastructure.fastly.auth import FastlyAuth
from infrastructure.fastly.client import FastlyStatsClient
from infrastructure.http.session import build_session
from infrastructure.output.graphite import Emitter, GraphiteEmitter
from services.service_names import ServiceNameCache, ServiceNameResolver
from shared.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectorOptions:
    """Everything a single collection run needs.

    Attributes:
        credentials: API key or user/password, chosen once at startup.
        query: Stats request options.
        scheme: Metric prefix, e.g. ``myhost.fastly``.
        translate: Resolve service IDs into service names.
    """

    credentials: Optional[Credentials]
    query: StatsQuery
    scheme: str
    translate: bool = False


def collect_metrics(
    options: CollectorOptions,
    *,
    auth: FastlyAuth,
    client: FastlyStatsClient,
    emitter: Emitter,
    cache: Optional[ServiceNameCache] = None,
) -> int:
    """Emit every metric of one stats response and return how many were sent.

    Authentication, fetch and decoding errors propagate; once the response is
    parsed, flattening and emission always run to completion.
    """

    start = time.time()
    session = auth.authenticate(options.credentials)
    payload = client.fetch(options.query, session)
    resolver = ServiceNameResolver(
        client,
        session,
        translate=options.translate,
        cache=cache,
    )

    emitted = 0
    for metric in flatten(payload, options.scheme, resolver):
        emitter.emit(metric)
        emitted += 1

    logger.info(
        "Fastly metrics emitted",
        extra={
            "emitted": emitted,
            "mode": options.query.mode.value,
            "resolved_services": len(resolver.cache),
            "elapsed_ms": int((time.time() - start) * 1000),
        },
    )
    return emitted


def run_collection(
    options: CollectorOptions,
    *,
    stream: Optional[TextIO] = None,
    base_url: Optional[str] = None,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
) -> int:
    """Wire the real HTTP collaborators and run :func:`collect_metrics`."""

    base_url = base_url or settings.FASTLY_API_BASE_URL
    http = build_session(
        user_agent or settings.USER_AGENT,
        timeout=timeout or settings.FASTLY_TIMEOUT,
    )
    with http:
        auth = FastlyAuth(session=http, base_url=base_url)
        client = FastlyStatsClient(base_url=base_url, session=http)
        emitter = GraphiteEmitter(stream)
        return collect_metrics(options, auth=auth, client=client, emitter=emitter)


__all__ = ["CollectorOptions", "collect_metrics", "run_collection"]
