"""Composite health score and trend classification."""

from __future__ import annotations

from typing import Optional

from ice.engine.result import HealthScore, PercentileScores
from ice.models.enums import HealthTrend, MetricKey

# Fixed weighting policy; must sum to 1.0.
HEALTH_WEIGHTS: dict[MetricKey, float] = {
    MetricKey.NET_PROFIT_MARGIN: 0.25,
    MetricKey.GROSS_PROFIT_MARGIN: 0.20,
    MetricKey.COGS_RATIO: 0.15,
    MetricKey.CURRENT_RATIO: 0.12,
    MetricKey.LABOR_COST_RATIO: 0.10,
    MetricKey.DEBT_TO_EQUITY: 0.10,
    MetricKey.PENSION_CONTRIBUTION_RATE: 0.08,
}

_HEALTH_BANDS: list[tuple[float, str]] = [
    (80.0, "Excellent"),
    (60.0, "Good"),
    (40.0, "Fair"),
]
_LOWEST_BAND = "Needs Attention"


def composite_score(scores: PercentileScores) -> float:
    """Weighted average of the seven percentile scores, clamped to [0, 100]."""
    weighted = sum(scores.get(key) * weight for key, weight in HEALTH_WEIGHTS.items())
    return max(0.0, min(100.0, weighted))


def determine_trend(
    current: float,
    previous: Optional[float],
    threshold: float = 2.0,
) -> HealthTrend:
    """Compare against the prior stored composite; no prior means STABLE."""
    if previous is None:
        return HealthTrend.STABLE
    delta = current - previous
    if delta > threshold:
        return HealthTrend.IMPROVING
    if delta < -threshold:
        return HealthTrend.DECLINING
    return HealthTrend.STABLE


def health_label(score: float) -> str:
    for floor, label in _HEALTH_BANDS:
        if score >= floor:
            return label
    return _LOWEST_BAND


def compose_health(
    scores: PercentileScores,
    previous_score: Optional[float] = None,
    threshold: float = 2.0,
) -> HealthScore:
    score = composite_score(scores)
    return HealthScore(
        score=score,
        trend=determine_trend(score, previous_score, threshold),
        label=health_label(score),
        previous_score=previous_score,
    )
