"""Translate opaque Fastly service IDs into metric friendly names.

Translation costs one extra API call per distinct service, so it is opt-in.
Every outcome (including failed lookups) is memoised in a
:class:`ServiceNameCache` that lives for a single collection run.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional

from domain.models import Session
from infrastructure.fastly.ports import IStatsProvider
from shared.errors import AppError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[.\s]")


def normalize_service_name(name: str) -> str:
    """Replace dots and whitespace so the name is a single metric segment."""

    return _UNSAFE_CHARS.sub("_", name)


class ServiceNameCache(MutableMapping[str, str]):
    """Per-run mapping of service ID to display name, write-once per key."""

    def __init__(self) -> None:
        self._names: Dict[str, str] = {}

    def __getitem__(self, service_id: str) -> str:
        return self._names[service_id]

    def __setitem__(self, service_id: str, name: str) -> None:
        if service_id in self._names:
            raise KeyError(f"service {service_id!r} already resolved")
        self._names[service_id] = name

    def __delitem__(self, service_id: str) -> None:
        raise TypeError("ServiceNameCache entries cannot be removed")

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)


class ServiceNameResolver:
    """Resolve service IDs to names, falling back to the ID on any failure."""

    def __init__(
        self,
        provider: IStatsProvider,
        session: Session,
        *,
        translate: bool = False,
        cache: Optional[ServiceNameCache] = None,
    ) -> None:
        self._provider = provider
        self._session = session
        self._translate = translate
        self._cache = cache if cache is not None else ServiceNameCache()

    @property
    def cache(self) -> ServiceNameCache:
        return self._cache

    @property
    def translate(self) -> bool:
        return self._translate

    def __call__(self, service_id: Any) -> Any:
        return self.resolve(service_id)

    def resolve(self, service_id: Any) -> Any:
        if not self._translate or service_id is None:
            return service_id
        key = str(service_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        resolved = self._lookup(key)
        self._cache[key] = resolved
        return resolved

    def _lookup(self, service_id: str) -> str:
        try:
            payload = self._provider.get_service(service_id, self._session)
        except AppError as exc:
            logger.warning("Service lookup failed for %s: %s", service_id, exc)
            return service_id

        name = payload.get("name") if isinstance(payload, Mapping) else None
        if not isinstance(name, str):
            logger.warning("Service %s has no usable name; keeping the ID", service_id)
            return service_id
        normalized = normalize_service_name(name)
        if not normalized:
            logger.warning("Service %s has an empty name; keeping the ID", service_id)
            return service_id
        logger.debug("Resolved service %s -> %s", service_id, normalized)
        return normalized


__all__ = ["ServiceNameCache", "ServiceNameResolver", "normalize_service_name"]
