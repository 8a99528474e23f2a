"""Prioritized quick-fix recommendations for below-median ratios."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from ice.config.settings import Settings
from ice.engine.opportunity import ratio_gap_opportunity
from ice.engine.percentile import NEUTRAL_SCORE
from ice.engine.result import (
    Opportunities,
    PercentileScores,
    QuickFix,
    QuickFixSummary,
)
from ice.metrics import get_metric
from ice.models.benchmarks import IndustryBenchmarks
from ice.models.enums import (
    Complexity,
    ImplementationTimeframe,
    MetricKey,
    QuickFixCategory,
)
from ice.models.metrics import BusinessMetrics

TIMEFRAME_BY_CATEGORY: dict[QuickFixCategory, ImplementationTimeframe] = {
    QuickFixCategory.PRICING: ImplementationTimeframe.THIRTY_DAYS,
    QuickFixCategory.CASH_FLOW: ImplementationTimeframe.IMMEDIATE,
    QuickFixCategory.COST_REDUCTION: ImplementationTimeframe.NINETY_DAYS,
    QuickFixCategory.RETIREMENT_PLAN: ImplementationTimeframe.NINETY_DAYS,
    QuickFixCategory.TAX_STRATEGY: ImplementationTimeframe.LONG_TERM,
    QuickFixCategory.INSURANCE: ImplementationTimeframe.THIRTY_DAYS,
    QuickFixCategory.OTHER: ImplementationTimeframe.LONG_TERM,
}

COMPLEXITY_BY_CATEGORY: dict[QuickFixCategory, Complexity] = {
    QuickFixCategory.PRICING: Complexity.MEDIUM,
    QuickFixCategory.COST_REDUCTION: Complexity.HIGH,
    QuickFixCategory.RETIREMENT_PLAN: Complexity.LOW,
    QuickFixCategory.TAX_STRATEGY: Complexity.MEDIUM,
    QuickFixCategory.CASH_FLOW: Complexity.MEDIUM,
    QuickFixCategory.INSURANCE: Complexity.LOW,
    QuickFixCategory.OTHER: Complexity.MEDIUM,
}

# Dollar thresholds -> impact points, checked top-down.
_IMPACT_POINTS: list[tuple[float, int]] = [
    (50_000, 5),
    (20_000, 4),
    (10_000, 3),
    (5_000, 2),
]

_NEAR_TERM = {ImplementationTimeframe.IMMEDIATE, ImplementationTimeframe.THIRTY_DAYS}


@dataclass(frozen=True)
class _FixContext:
    metrics: BusinessMetrics
    ratios: dict[MetricKey, float]
    scores: PercentileScores
    opportunities: Opportunities
    benchmarks: IndustryBenchmarks
    settings: Settings


@dataclass(frozen=True)
class _FixRule:
    category: QuickFixCategory
    action: str
    required_action: str
    impact_fn: Callable[[_FixContext], float]


def _gross_margin_impact(ctx: _FixContext) -> float:
    return ratio_gap_opportunity(
        ctx.ratios[MetricKey.GROSS_PROFIT_MARGIN],
        ctx.scores.gross_profit_margin,
        ctx.benchmarks.gross_profit_margin.p50,
        ctx.metrics.revenue,
    )


def _working_capital_impact(ctx: _FixContext) -> float:
    """Carrying cost of the current-asset shortfall against the median ratio."""
    target_assets = ctx.benchmarks.current_ratio.p50 * ctx.metrics.current_liabilities
    shortfall = max(0.0, target_assets - ctx.metrics.current_assets)
    return shortfall * ctx.settings.cost_of_capital


def _leverage_impact(ctx: _FixContext) -> float:
    """Interest saved by refinancing liabilities above the median leverage."""
    target_liabilities = ctx.benchmarks.debt_to_equity.p50 * ctx.metrics.total_equity
    excess = max(0.0, ctx.metrics.total_liabilities - target_liabilities)
    return excess * ctx.settings.refinancing_spread


_RULES: dict[MetricKey, _FixRule] = {
    MetricKey.GROSS_PROFIT_MARGIN: _FixRule(
        category=QuickFixCategory.PRICING,
        action="Raise gross margin from {current:.1%} to {target:.1%}",
        required_action=(
            "Review pricing strategy: tiered pricing, premium service options, "
            "or an across-the-board price adjustment."
        ),
        impact_fn=_gross_margin_impact,
    ),
    MetricKey.NET_PROFIT_MARGIN: _FixRule(
        category=QuickFixCategory.PRICING,
        action="Lift net margin from {current:.1%} to {target:.1%}",
        required_action=(
            "Reprice low-margin work and cut overhead until net margin reaches "
            "the peer median."
        ),
        impact_fn=lambda ctx: ctx.opportunities.revenue,
    ),
    MetricKey.COGS_RATIO: _FixRule(
        category=QuickFixCategory.COST_REDUCTION,
        action="Reduce COGS from {current:.1%} to {target:.1%} of revenue",
        required_action=(
            "Renegotiate supplier contracts, evaluate inventory management, "
            "and review waste and shrinkage."
        ),
        impact_fn=lambda ctx: ctx.opportunities.cogs,
    ),
    MetricKey.LABOR_COST_RATIO: _FixRule(
        category=QuickFixCategory.COST_REDUCTION,
        action="Bring labor cost from {current:.1%} to {target:.1%} of revenue",
        required_action=(
            "Review scheduling, overtime and staffing levels against workload."
        ),
        impact_fn=lambda ctx: ctx.opportunities.labor,
    ),
    MetricKey.CURRENT_RATIO: _FixRule(
        category=QuickFixCategory.CASH_FLOW,
        action="Raise current ratio from {current:.2f} to {target:.2f}",
        required_action=(
            "Build cash reserves, tighten receivables collection, and set up a "
            "backup line of credit."
        ),
        impact_fn=_working_capital_impact,
    ),
    MetricKey.DEBT_TO_EQUITY: _FixRule(
        category=QuickFixCategory.COST_REDUCTION,
        action="Reduce debt-to-equity from {current:.2f} to {target:.2f}",
        required_action=(
            "Refinance high-interest debt into term financing and direct "
            "surplus cash to principal."
        ),
        impact_fn=_leverage_impact,
    ),
    MetricKey.PENSION_CONTRIBUTION_RATE: _FixRule(
        category=QuickFixCategory.RETIREMENT_PLAN,
        action="Increase retirement contributions from {current:.1%} to {target:.1%} of revenue",
        required_action=(
            "Open or expand a Solo 401(k) or SEP-IRA to capture deductible "
            "contributions."
        ),
        impact_fn=lambda ctx: ctx.opportunities.pension,
    ),
}


def severity_points(score: float) -> int:
    """1-5 points for how far below the median a score sits."""
    return min(5, max(1, math.ceil((NEUTRAL_SCORE - score) / 10)))


def impact_points(annual_impact: float) -> int:
    for threshold, points in _IMPACT_POINTS:
        if annual_impact >= threshold:
            return points
    return 1 if annual_impact > 0 else 0


def priority_for(score: float, annual_impact: float) -> int:
    """Higher for a larger gap and a larger dollar impact (range 1-10)."""
    return severity_points(score) + impact_points(annual_impact)


def generate_quick_fixes(
    metrics: BusinessMetrics,
    ratios: dict[MetricKey, float],
    scores: PercentileScores,
    opportunities: Opportunities,
    benchmarks: IndustryBenchmarks,
    settings: Settings,
) -> list[QuickFix]:
    """One fix per below-median ratio, sorted by priority then impact.

    An empty list means every ratio is at or above the peer median.
    """
    ctx = _FixContext(metrics, ratios, scores, opportunities, benchmarks, settings)
    fixes: list[QuickFix] = []

    for key, rule in _RULES.items():
        score = scores.get(key)
        if score >= NEUTRAL_SCORE:
            continue
        current = ratios[key]
        target = benchmarks.for_metric(key).p50
        impact = max(0.0, rule.impact_fn(ctx))
        fixes.append(
            QuickFix(
                metric=key,
                category=rule.category,
                action=rule.action.format(current=current, target=target),
                required_action=f"{get_metric(key).label}: {rule.required_action}",
                current_value=current,
                recommended_value=target,
                annual_impact=impact,
                implementation=TIMEFRAME_BY_CATEGORY[rule.category],
                complexity=COMPLEXITY_BY_CATEGORY[rule.category],
                priority=priority_for(score, impact),
            )
        )

    fixes.sort(key=lambda fix: (-fix.priority, -fix.annual_impact))
    return fixes


def summarize_quick_fixes(fixes: list[QuickFix]) -> QuickFixSummary:
    """Total impact, near-term action count and per-category totals."""
    by_category: dict[QuickFixCategory, tuple[int, float]] = {
        category: (0, 0.0) for category in QuickFixCategory
    }
    total = 0.0
    near_term = 0
    for fix in fixes:
        total += fix.annual_impact
        count, impact = by_category[fix.category]
        by_category[fix.category] = (count + 1, impact + fix.annual_impact)
        if fix.implementation in _NEAR_TERM:
            near_term += 1
    return QuickFixSummary(
        total_annual_impact=total,
        near_term_actions=near_term,
        by_category=by_category,
        top_priority=fixes[0] if fixes else None,
    )
