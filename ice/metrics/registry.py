from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from ice.models.enums import MetricGroup, MetricKey

if TYPE_CHECKING:
    from ice.models.metrics import BusinessMetrics

# Global registry -- maps MetricKey -> MetricDefinition
_REGISTRY: dict[MetricKey, MetricDefinition] = {}


@dataclass(frozen=True)
class MetricDefinition:
    """One tracked ratio: how to compute it and which direction is good."""

    key: MetricKey
    label: str
    description: str
    group: MetricGroup
    higher_is_better: bool
    ratio_fn: Callable[[BusinessMetrics], float]


def register_metric(
    key: MetricKey,
    label: str,
    description: str,
    group: MetricGroup,
    higher_is_better: bool = True,
) -> Callable:
    """Decorator to register a ratio function as a tracked metric."""

    def decorator(fn: Callable[[BusinessMetrics], float]) -> Callable[[BusinessMetrics], float]:
        _REGISTRY[key] = MetricDefinition(
            key=key,
            label=label,
            description=description,
            group=group,
            higher_is_better=higher_is_better,
            ratio_fn=fn,
        )
        return fn

    return decorator


def get_metric(key: MetricKey) -> MetricDefinition:
    """Look up a metric definition by key."""
    return _REGISTRY[key]


def get_all_metrics() -> dict[MetricKey, MetricDefinition]:
    """Return the full registry (read-only copy)."""
    return dict(_REGISTRY)


def compute_ratios(metrics: BusinessMetrics) -> dict[MetricKey, float]:
    """Evaluate every registered ratio for one set of business figures."""
    return {key: definition.ratio_fn(metrics) for key, definition in _REGISTRY.items()}
