"""Piecewise-linear peer ranking against p25/p50/p75 breakpoints.

Anchors: p25 -> 25, p50 -> 50, p75 -> 75. Between anchors the score is
linearly interpolated. Beyond the outer anchors it is extrapolated over a
tail span and clamped to [0, 100]:

    below the low anchor:  span = max(|low|, mid - low)
    above the high anchor: span = max(0.5 * |high|, high - mid)

Lower-is-better ratios are scored on the sorted breakpoints and mirrored,
so the lowest breakpoint is the best-performing anchor (score 75).
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from ice.engine.errors import InvalidInput, MissingBenchmarkData
from ice.engine.result import PercentileScores
from ice.metrics import get_metric
from ice.models.benchmarks import IndustryBenchmarks, MetricBenchmark
from ice.models.enums import MetricKey

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50.0


def _clamp(score: float) -> float:
    return max(0.0, min(100.0, score))


def _score_ascending(value: float, low: float, mid: float, high: float) -> float:
    """Score a value where larger is better, given ordered breakpoints."""
    if value <= low:
        if value == low:
            return 25.0
        span = max(abs(low), mid - low)
        if span <= 0:
            return 0.0
        return 25.0 * max(0.0, 1.0 - (low - value) / span)
    if value <= mid:
        return 25.0 + 25.0 * (value - low) / (mid - low)
    if value <= high:
        return 50.0 + 25.0 * (value - mid) / (high - mid)
    span = max(0.5 * abs(high), high - mid)
    if span <= 0:
        return 100.0
    return 75.0 + 25.0 * min(1.0, (value - high) / span)


def percentile_score(
    value: float,
    p25: Optional[float],
    p50: Optional[float],
    p75: Optional[float],
    higher_is_better: bool = True,
    metric: Optional[str] = None,
) -> float:
    """Rank a ratio against its peer breakpoints on a continuous 0-100 scale.

    A flat benchmark (p25 == p50 == p75) carries no signal and yields
    exactly 50. A missing breakpoint raises MissingBenchmarkData.
    """
    if p25 is None or p50 is None or p75 is None:
        missing = [name for name, v in (("p25", p25), ("p50", p50), ("p75", p75)) if v is None]
        raise MissingBenchmarkData(
            f"Benchmark for {metric or 'metric'} is missing {', '.join(missing)}",
            metric=metric,
        )
    if not all(math.isfinite(p) for p in (p25, p50, p75)):
        raise InvalidInput(
            f"{metric or 'metric'} breakpoints must be finite, got ({p25}, {p50}, {p75})"
        )
    if value is None or math.isnan(value):
        raise InvalidInput(f"{metric or 'metric'} value must be a number, got {value!r}")

    if p25 == p50 == p75:
        return NEUTRAL_SCORE

    if higher_is_better:
        if not (p25 <= p50 <= p75):
            raise InvalidInput(
                f"{metric or 'metric'} breakpoints must satisfy p25 <= p50 <= p75 "
                f"when higher is better, got ({p25}, {p50}, {p75})"
            )
        return _clamp(_score_ascending(value, p25, p50, p75))

    low, mid, high = sorted((p25, p50, p75))
    return _clamp(100.0 - _score_ascending(value, low, mid, high))


def score_metric(key: MetricKey, value: float, benchmark: MetricBenchmark) -> float:
    """Score one tracked ratio using its registered direction."""
    definition = get_metric(key)
    return percentile_score(
        value,
        benchmark.p25,
        benchmark.p50,
        benchmark.p75,
        higher_is_better=definition.higher_is_better,
        metric=key.value,
    )


def score_all(
    ratios: dict[MetricKey, float],
    benchmarks: IndustryBenchmarks,
) -> PercentileScores:
    """Compute all seven percentile scores; any failure fails the whole run."""
    scores: dict[str, float] = {}
    for key in MetricKey:
        try:
            score = score_metric(key, ratios[key], benchmarks.for_metric(key))
        except MissingBenchmarkData as exc:
            exc.industry_id = benchmarks.industry_id
            exc.revenue_tier = benchmarks.revenue_tier.value
            raise
        logger.debug("Scored %s: value=%.4f percentile=%.1f", key.value, ratios[key], score)
        scores[key.value] = score
    return PercentileScores(**scores)
