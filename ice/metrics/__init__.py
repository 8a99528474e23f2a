from .registry import MetricDefinition, compute_ratios, get_all_metrics, get_metric, register_metric
from . import ratios  # noqa: F401  (registers the tracked ratios)

__all__ = [
    "MetricDefinition",
    "compute_ratios",
    "get_all_metrics",
    "get_metric",
    "register_metric",
]
