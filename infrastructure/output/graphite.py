# infrastructure/output/graphite.py
from __future__ import annotations

import sys
import time
from typing import Callable, Optional, Protocol, TextIO, runtime_checkable

from domain.models import MetricTriple


@runtime_checkable
class Emitter(Protocol):
    """Sink accepting flattened metrics."""

    def emit(self, metric: MetricTriple) -> None: ...


class GraphiteEmitter:
    """Write metrics as Graphite plaintext lines: ``name<TAB>value<TAB>timestamp``.

    Metrics without a timestamp are stamped with the current epoch second.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        clock: Callable[[], float] = time.time,
        separator: str = "\t",
    ) -> None:
        self._stream = stream
        self._clock = clock
        self._separator = separator
        self.count = 0

    def format(self, metric: MetricTriple) -> str:
        timestamp = metric.timestamp
        if timestamp is None:
            timestamp = int(self._clock())
        return self._separator.join((metric.name, str(metric.value), str(timestamp)))

    def emit(self, metric: MetricTriple) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(self.format(metric) + "\n")
        self.count += 1


__all__ = ["Emitter", "GraphiteEmitter"]
