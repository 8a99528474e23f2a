"""Core calibration engine.

Takes one period of business figures + a resolved peer benchmark record ->
produces an immutable CalibrationResult. No I/O: fetching benchmarks and
persisting results are the caller's job.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from ice.config.settings import Settings
from ice.engine.errors import InvalidInput
from ice.engine.health import compose_health
from ice.engine.insights import generate_quick_fixes
from ice.engine.opportunity import calculate_opportunities
from ice.engine.percentile import score_all
from ice.engine.projection import project_scenarios
from ice.engine.result import CalibrationResult
from ice.engine.tiers import resolve_tier
from ice.metrics import compute_ratios
from ice.models.benchmarks import IndustryBenchmarks
from ice.models.enums import RevenueTier
from ice.models.metrics import BusinessMetrics

logger = logging.getLogger(__name__)


def coerce_metrics(metrics: Union[BusinessMetrics, Mapping[str, Any]]) -> BusinessMetrics:
    """Validate a raw mapping into BusinessMetrics, raising InvalidInput."""
    if isinstance(metrics, BusinessMetrics):
        return metrics
    if not isinstance(metrics, Mapping):
        raise InvalidInput(f"metrics must be a mapping, got {type(metrics).__name__}")
    try:
        return BusinessMetrics.model_validate(metrics)
    except ValidationError as exc:
        raise InvalidInput.from_validation_error(exc, "metrics") from exc


def coerce_benchmarks(
    benchmarks: Union[IndustryBenchmarks, Mapping[str, Any]],
) -> IndustryBenchmarks:
    """Validate a raw mapping into IndustryBenchmarks, raising InvalidInput."""
    if isinstance(benchmarks, IndustryBenchmarks):
        return benchmarks
    if not isinstance(benchmarks, Mapping):
        raise InvalidInput(f"benchmarks must be a mapping, got {type(benchmarks).__name__}")
    try:
        return IndustryBenchmarks.model_validate(benchmarks)
    except ValidationError as exc:
        raise InvalidInput.from_validation_error(exc, "benchmarks") from exc


class CalibrationEngine:
    """Stateless engine that benchmarks a business against its peers."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    def calibrate(
        self,
        metrics: Union[BusinessMetrics, Mapping[str, Any]],
        benchmarks: Union[IndustryBenchmarks, Mapping[str, Any]],
        revenue_tier: Optional[Union[RevenueTier, str]] = None,
        previous_health_score: Optional[float] = None,
    ) -> CalibrationResult:
        """Run the full calibration.

        revenue_tier overrides classification of metrics.revenue when the
        caller has already picked a tier. previous_health_score is the last
        stored composite, used for the trend; None on a first run.
        """
        metrics = coerce_metrics(metrics)
        benchmarks = coerce_benchmarks(benchmarks)
        if previous_health_score is not None and not (0 <= previous_health_score <= 100):
            raise InvalidInput(
                f"previous_health_score must be within [0, 100], got {previous_health_score}",
                details=[{"loc": "previous_health_score", "msg": "out of range"}],
            )

        tier = resolve_tier(metrics.revenue, revenue_tier)
        if benchmarks.revenue_tier is not tier:
            logger.warning(
                "Benchmark tier %s differs from business tier %s for industry %s",
                benchmarks.revenue_tier.value,
                tier.value,
                benchmarks.industry_id,
            )

        ratios = compute_ratios(metrics)
        scores = score_all(ratios, benchmarks)
        health = compose_health(
            scores,
            previous_score=previous_health_score,
            threshold=self._settings.trend_threshold,
        )
        opportunities = calculate_opportunities(
            metrics, ratios, scores, benchmarks, self._settings
        )
        without_scenario, with_scenario = project_scenarios(
            revenue=metrics.revenue,
            net_income=metrics.net_income,
            total_opportunity=opportunities.total,
            growth_rate=self._settings.growth_rate,
            ramp_years=self._settings.ramp_years,
        )
        quick_fixes = generate_quick_fixes(
            metrics, ratios, scores, opportunities, benchmarks, self._settings
        )

        logger.info(
            "Calibrated industry %s tier %s: health=%.1f (%s) opportunity=%.0f fixes=%d",
            benchmarks.industry_id,
            tier.value,
            health.score,
            health.trend.value,
            opportunities.total,
            len(quick_fixes),
        )

        return CalibrationResult(
            revenue_tier=tier,
            benchmark_tier=benchmarks.revenue_tier,
            industry_id=benchmarks.industry_id,
            percentile_scores=scores,
            health=health,
            opportunities=opportunities,
            without_scenario=without_scenario,
            with_scenario=with_scenario,
            quick_fixes=tuple(quick_fixes),
            ratios=ratios,
        )
