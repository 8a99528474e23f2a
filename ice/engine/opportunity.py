"""Convert below-median percentile gaps into annual dollar opportunities."""

from __future__ import annotations

from ice.config.settings import Settings
from ice.engine.percentile import NEUTRAL_SCORE
from ice.engine.result import Opportunities, PercentileScores
from ice.models.benchmarks import IndustryBenchmarks
from ice.models.enums import MetricKey
from ice.models.metrics import BusinessMetrics


def ratio_gap_opportunity(
    actual: float,
    score: float,
    median: float,
    revenue: float,
    higher_is_better: bool = True,
) -> float:
    """Dollar value of moving a revenue-based ratio to the peer median.

    Zero when the business is already at or above the median (score >= 50)
    or when there is no revenue to scale the gap by.
    """
    if score >= NEUTRAL_SCORE or revenue <= 0:
        return 0.0
    gap = (median - actual) if higher_is_better else (actual - median)
    return max(0.0, gap * revenue)


def target_pension_contribution(
    metrics: BusinessMetrics,
    median_rate: float,
    settings: Settings,
) -> float:
    """Peer-median contribution, capped by the statutory limit and affordability."""
    affordable = max(0.0, metrics.net_income) * settings.affordable_pension_share
    return max(0.0, min(median_rate * metrics.revenue, settings.max_pension_contribution, affordable))


def pension_opportunity(
    metrics: BusinessMetrics,
    score: float,
    median_rate: float,
    settings: Settings,
) -> float:
    """Tax saved by raising contributions to the capped peer-median target."""
    if score >= NEUTRAL_SCORE or metrics.revenue <= 0:
        return 0.0
    target = target_pension_contribution(metrics, median_rate, settings)
    additional = max(0.0, target - metrics.pension_contributions)
    return additional * settings.assumed_tax_rate


def calculate_opportunities(
    metrics: BusinessMetrics,
    ratios: dict[MetricKey, float],
    scores: PercentileScores,
    benchmarks: IndustryBenchmarks,
    settings: Settings,
) -> Opportunities:
    """Per-dimension opportunities; the total is their sum."""
    revenue = ratio_gap_opportunity(
        ratios[MetricKey.NET_PROFIT_MARGIN],
        scores.net_profit_margin,
        benchmarks.net_profit_margin.p50,
        metrics.revenue,
    )
    cogs = ratio_gap_opportunity(
        ratios[MetricKey.COGS_RATIO],
        scores.cogs_ratio,
        benchmarks.cogs_ratio.p50,
        metrics.revenue,
        higher_is_better=False,
    )
    labor = ratio_gap_opportunity(
        ratios[MetricKey.LABOR_COST_RATIO],
        scores.labor_cost_ratio,
        benchmarks.labor_cost_ratio.p50,
        metrics.revenue,
        higher_is_better=False,
    )
    pension = pension_opportunity(
        metrics,
        scores.pension_contribution_rate,
        benchmarks.pension_contribution_rate.p50,
        settings,
    )
    return Opportunities(revenue=revenue, cogs=cogs, labor=labor, pension=pension)
