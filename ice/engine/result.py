"""Immutable result data structures for a calibration run."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from ice.models.enums import (
    Complexity,
    HealthTrend,
    ImplementationTimeframe,
    MetricKey,
    QuickFixCategory,
    RevenueTier,
)


@dataclass(frozen=True)
class PercentileScores:
    """One 0-100 peer ranking per tracked ratio."""

    gross_profit_margin: float
    net_profit_margin: float
    cogs_ratio: float
    labor_cost_ratio: float
    current_ratio: float
    debt_to_equity: float
    pension_contribution_rate: float

    def get(self, key: MetricKey) -> float:
        return getattr(self, key.value)

    def as_dict(self) -> dict[MetricKey, float]:
        return {key: self.get(key) for key in MetricKey}


@dataclass(frozen=True)
class Opportunities:
    """Annual dollar gain available from closing each gap to the peer median."""

    revenue: float
    cogs: float
    labor: float
    pension: float

    @property
    def total(self) -> float:
        return self.revenue + self.cogs + self.labor + self.pension

    def breakdown(self) -> dict[str, float]:
        return {
            "revenue": self.revenue,
            "cogs": self.cogs,
            "labor": self.labor,
            "pension": self.pension,
        }


@dataclass(frozen=True)
class HealthScore:
    """Weighted composite of the percentile scores plus a trend."""

    score: float
    trend: HealthTrend
    label: str
    previous_score: Optional[float] = None


@dataclass(frozen=True)
class YearProjection:
    """Single year in a five-year projection."""

    year: int
    revenue: float
    net_income: float
    realized_opportunity: float
    cumulative_net_income: float


@dataclass(frozen=True)
class ScenarioProjection:
    """Year-0 baseline plus five projected years under one assumption set."""

    name: str
    baseline_revenue: float
    baseline_net_income: float
    years: tuple[YearProjection, ...]

    @property
    def final_year(self) -> YearProjection:
        return self.years[-1]


@dataclass(frozen=True)
class QuickFix:
    """One prioritized, actionable recommendation."""

    metric: MetricKey
    category: QuickFixCategory
    action: str
    required_action: str
    current_value: float
    recommended_value: float
    annual_impact: float
    implementation: ImplementationTimeframe
    complexity: Complexity
    priority: int


@dataclass(frozen=True)
class QuickFixSummary:
    """Totals across a quick-fix list."""

    total_annual_impact: float
    near_term_actions: int
    by_category: Mapping[QuickFixCategory, tuple[int, float]] = field(hash=False)
    top_priority: Optional[QuickFix] = None

    def __post_init__(self):
        object.__setattr__(self, "by_category", MappingProxyType(dict(self.by_category)))


@dataclass(frozen=True)
class CalibrationResult:
    """Top-level result object for a complete calibration run."""

    revenue_tier: RevenueTier
    benchmark_tier: RevenueTier
    industry_id: str
    percentile_scores: PercentileScores
    health: HealthScore
    opportunities: Opportunities
    without_scenario: ScenarioProjection
    with_scenario: ScenarioProjection
    quick_fixes: tuple[QuickFix, ...] = field(default_factory=tuple)
    ratios: Mapping[MetricKey, float] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Read-only views so the result cannot be edited after the run.
        object.__setattr__(self, "quick_fixes", tuple(self.quick_fixes))
        object.__setattr__(self, "ratios", MappingProxyType(dict(self.ratios)))
