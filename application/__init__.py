"""Application services for the Fastly metrics collector."""

from shared.version import __version__ as _APP_VERSION

from .metrics_flattener import NodeShape, classify_shape, flatten, metric_name

__version__ = _APP_VERSION

__all__ = [
    "NodeShape",
    "classify_shape",
    "flatten",
    "metric_name",
    "__version__",
]
