"""Pydantic models for the benchmark dataset file."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ice.models.benchmarks import IndustryBenchmarks, MetricBenchmark
from ice.models.enums import MetricKey, RevenueTier


class IndustryClassification(BaseModel):
    """One NAICS classification node."""

    id: str
    naics_code: str
    title: str
    short_title: Optional[str] = None
    level: int = Field(ge=2, le=6)
    parent_code: Optional[str] = None


class BenchmarkRow(BaseModel):
    """One industry x tier cohort; each ratio is a [p25, p50, p75] triple."""

    industry_id: str
    revenue_tier: RevenueTier
    sample_size: Optional[int] = Field(default=None, ge=0)
    data_year: Optional[int] = None

    gross_profit_margin: Optional[list[Optional[float]]] = None
    net_profit_margin: Optional[list[Optional[float]]] = None
    cogs_ratio: Optional[list[Optional[float]]] = None
    labor_cost_ratio: Optional[list[Optional[float]]] = None
    current_ratio: Optional[list[Optional[float]]] = None
    debt_to_equity: Optional[list[Optional[float]]] = None
    pension_contribution_rate: Optional[list[Optional[float]]] = None

    @field_validator(*(key.value for key in MetricKey))
    @classmethod
    def triple_has_three_values(
        cls, v: Optional[list[Optional[float]]]
    ) -> Optional[list[Optional[float]]]:
        if v is not None and len(v) != 3:
            raise ValueError(f"expected [p25, p50, p75], got {len(v)} values")
        return v

    def to_benchmarks(
        self,
        industry: Optional[IndustryClassification],
        default_year: Optional[int] = None,
    ) -> IndustryBenchmarks:
        metrics: dict[str, MetricBenchmark] = {}
        for key in MetricKey:
            triple = getattr(self, key.value)
            if triple is None:
                metrics[key.value] = MetricBenchmark()
            else:
                metrics[key.value] = MetricBenchmark(p25=triple[0], p50=triple[1], p75=triple[2])
        return IndustryBenchmarks(
            industry_id=self.industry_id,
            naics_code=industry.naics_code if industry else None,
            industry_title=industry.title if industry else None,
            revenue_tier=self.revenue_tier,
            data_year=self.data_year or default_year,
            sample_size=self.sample_size,
            **metrics,
        )


class BenchmarkDataset(BaseModel):
    """Top-level benchmark dataset file."""

    data_year: Optional[int] = None
    industries: list[IndustryClassification] = Field(min_length=1)
    benchmarks: list[BenchmarkRow] = Field(default_factory=list)
