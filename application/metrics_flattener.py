"""Flatten Fastly stats documents into dotted metric triples.

The ``data`` member of a stats response changes shape with the query mode:

* object of arrays: ``{"data": {"<service>": [{"start_time": .., "service_id": .., "hits": ..}]}}``
* object of objects: ``{"data": {"usage": {"<service>": {"bandwidth": ..}}}}`` or
  flat aggregate summaries such as ``{"data": {"usa": {"requests": ..}}}``
* bare array: ``{"data": [{"start_time": .., "hits": ..}]}``

Every shape is walked lazily in document order and yields
:class:`~domain.models.MetricTriple` values. Shapes that are not recognised
produce no output.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Iterator, Mapping, Sequence

from domain.models import MetricTriple

logger = logging.getLogger(__name__)

TIMESTAMP_KEY = "start_time"
SERVICE_KEY = "service_id"

Resolver = Callable[[Any], Any]


class NodeShape(str, Enum):
    ARRAY = "array"
    OBJECT_OF_ARRAYS = "object_of_arrays"
    OBJECT_OF_OBJECTS = "object_of_objects"
    MAPPING = "mapping"
    NUMBER = "number"
    OTHER = "other"


def _identity(value: Any) -> Any:
    return value


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def classify_shape(node: Any) -> NodeShape:
    """Classify a JSON node once so callers can dispatch exhaustively."""

    if isinstance(node, Mapping):
        return NodeShape.MAPPING
    if isinstance(node, (list, tuple)):
        return NodeShape.ARRAY
    if _is_numeric(node):
        return NodeShape.NUMBER
    return NodeShape.OTHER


def classify_group(node: Any) -> NodeShape:
    """Classify a value found under a top-level ``data`` key."""

    shape = classify_shape(node)
    if shape is NodeShape.ARRAY:
        return NodeShape.OBJECT_OF_ARRAYS
    if shape is NodeShape.MAPPING:
        return NodeShape.OBJECT_OF_OBJECTS
    return NodeShape.OTHER


def metric_name(prefix: str, *segments: Any) -> str:
    return ".".join([str(prefix), *(str(segment) for segment in segments)])


def _flatten_record(
    record: Any,
    prefix: str,
    resolve: Resolver,
) -> Iterator[MetricTriple]:
    """Emit one triple per field of a time-series record.

    ``start_time`` and ``service_id`` are removed from a copy of the record;
    the first becomes the timestamp, the second the service segment.
    """

    if classify_shape(record) is not NodeShape.MAPPING:
        return
    fields = dict(record)
    timestamp = fields.pop(TIMESTAMP_KEY, None)
    service_id = fields.pop(SERVICE_KEY, None)
    segments: Sequence[Any] = ()
    if service_id is not None:
        resolved = resolve(service_id)
        if resolved is not None and resolved != "":
            segments = (resolved,)

    for field, value in fields.items():
        if classify_shape(value) is not NodeShape.NUMBER:
            logger.debug("Skipping non numeric field %s", field)
            continue
        yield MetricTriple(metric_name(prefix, *segments, field), value, timestamp)


def _flatten_object_of_objects(
    key: str, group: Mapping[str, Any], prefix: str, resolve: Resolver
) -> Iterator[MetricTriple]:
    for inner_key, inner in group.items():
        shape = classify_shape(inner)
        if shape is NodeShape.MAPPING:
            service = resolve(inner_key)
            for field, value in inner.items():
                if classify_shape(value) is not NodeShape.NUMBER:
                    continue
                yield MetricTriple(metric_name(prefix, key, service, field), value)
        elif shape is NodeShape.NUMBER:
            yield MetricTriple(metric_name(prefix, key, inner_key), inner)


def flatten(
    response: Any,
    prefix: str,
    resolve: Resolver = _identity,
) -> Iterator[MetricTriple]:
    """Lazily yield every metric triple contained in a stats ``response``."""

    data = response.get("data") if isinstance(response, Mapping) else None
    shape = classify_shape(data)

    if shape is NodeShape.ARRAY:
        for record in data:
            yield from _flatten_record(record, prefix, resolve)
    elif shape is NodeShape.MAPPING:
        for key, group in data.items():
            group_shape = classify_group(group)
            if group_shape is NodeShape.OBJECT_OF_ARRAYS:
                for record in group:
                    yield from _flatten_record(record, prefix, resolve)
            elif group_shape is NodeShape.OBJECT_OF_OBJECTS:
                yield from _flatten_object_of_objects(key, group, prefix, resolve)
    else:
        logger.debug("Unrecognised stats payload shape: %s", shape.value)


__all__ = [
    "MetricTriple",
    "NodeShape",
    "classify_group",
    "classify_shape",
    "flatten",
    "metric_name",
]
