"""Metric emission sinks."""

from .graphite import Emitter, GraphiteEmitter

__all__ = ["Emitter", "GraphiteEmitter"]
