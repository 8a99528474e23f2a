"""Pydantic models for externally supplied peer percentile breakpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ice.metrics import get_metric

from .enums import MetricKey, RevenueTier


class MetricBenchmark(BaseModel):
    """25th/50th/75th percentile breakpoints for one ratio in one cohort."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    p25: Optional[float] = None
    p50: Optional[float] = None
    p75: Optional[float] = None

    def is_complete(self) -> bool:
        return self.p25 is not None and self.p50 is not None and self.p75 is not None

    def is_degenerate(self) -> bool:
        """True when all three breakpoints coincide (no ranking signal)."""
        return self.is_complete() and self.p25 == self.p50 == self.p75


class IndustryBenchmarks(BaseModel):
    """Peer breakpoints for every tracked ratio, for one industry x revenue tier."""

    model_config = ConfigDict(frozen=True)

    industry_id: str
    naics_code: Optional[str] = None
    industry_title: Optional[str] = None
    revenue_tier: RevenueTier
    data_year: Optional[int] = None
    sample_size: Optional[int] = Field(default=None, ge=0)

    gross_profit_margin: MetricBenchmark = Field(default_factory=MetricBenchmark)
    net_profit_margin: MetricBenchmark = Field(default_factory=MetricBenchmark)
    cogs_ratio: MetricBenchmark = Field(default_factory=MetricBenchmark)
    labor_cost_ratio: MetricBenchmark = Field(default_factory=MetricBenchmark)
    current_ratio: MetricBenchmark = Field(default_factory=MetricBenchmark)
    debt_to_equity: MetricBenchmark = Field(default_factory=MetricBenchmark)
    pension_contribution_rate: MetricBenchmark = Field(default_factory=MetricBenchmark)

    @model_validator(mode="after")
    def higher_is_better_breakpoints_ordered(self) -> IndustryBenchmarks:
        for key in MetricKey:
            bench = self.for_metric(key)
            if not bench.is_complete() or not get_metric(key).higher_is_better:
                continue
            if not (bench.p25 <= bench.p50 <= bench.p75):
                raise ValueError(
                    f"{key.value} breakpoints must be ordered: p25 ({bench.p25}) "
                    f"<= p50 ({bench.p50}) <= p75 ({bench.p75})"
                )
        return self

    def for_metric(self, key: MetricKey) -> MetricBenchmark:
        return getattr(self, key.value)
