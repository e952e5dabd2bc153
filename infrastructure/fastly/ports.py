# infrastructure/fastly/ports.py
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from domain.models import Session, StatsQuery


@runtime_checkable
class IStatsProvider(Protocol):
    """Port for any Fastly-like stats source."""

    def fetch(self, query: StatsQuery, session: Session) -> Any: ...
    def get_service(self, service_id: str, session: Session) -> Any: ...
