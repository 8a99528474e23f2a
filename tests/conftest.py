"""Shared test fixtures for the calibration engine test suite."""

import pytest

from ice.config.settings import Settings
from ice.engine.calibrator import CalibrationEngine
from ice.models.benchmarks import IndustryBenchmarks, MetricBenchmark
from ice.models.enums import RevenueTier
from ice.models.metrics import BusinessMetrics


def make_bench(p25, p50, p75) -> MetricBenchmark:
    """Helper to build a MetricBenchmark with minimal boilerplate."""
    return MetricBenchmark(p25=p25, p50=p50, p75=p75)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def engine(settings) -> CalibrationEngine:
    return CalibrationEngine(settings)


@pytest.fixture
def glass_metrics() -> BusinessMetrics:
    """$776K glass manufacturer running at a loss -- the reference scenario.

    Net margin is about -6.7% against a peer median of 8%.
    """
    return BusinessMetrics(
        revenue=776_000,
        cost_of_goods_sold=420_000,
        gross_profit=356_000,
        net_income=-51_900,
        wages=180_000,
        pension_contributions=0,
        current_assets=125_000,
        current_liabilities=95_000,
        total_liabilities=285_000,
        total_equity=120_000,
    )


@pytest.fixture
def glass_benchmarks() -> IndustryBenchmarks:
    """Glass Product Manufacturing (NAICS 327215), $1M-$3M cohort."""
    return IndustryBenchmarks(
        industry_id="327215",
        naics_code="327215",
        industry_title="Glass Product Manufacturing",
        revenue_tier=RevenueTier.TIER_1M_3M,
        data_year=2024,
        sample_size=89,
        gross_profit_margin=make_bench(0.32, 0.42, 0.52),
        net_profit_margin=make_bench(0.02, 0.08, 0.15),
        cogs_ratio=make_bench(0.48, 0.58, 0.68),
        labor_cost_ratio=make_bench(0.15, 0.22, 0.28),
        current_ratio=make_bench(1.1, 1.8, 2.8),
        debt_to_equity=make_bench(0.4, 0.9, 1.8),
        pension_contribution_rate=make_bench(0.01, 0.02, 0.04),
    )


@pytest.fixture
def healthy_metrics() -> BusinessMetrics:
    """A business beating the glass cohort median on every ratio."""
    return BusinessMetrics(
        revenue=2_000_000,
        cost_of_goods_sold=900_000,
        gross_profit=1_100_000,
        net_income=360_000,
        wages=280_000,
        pension_contributions=70_000,
        current_assets=600_000,
        current_liabilities=200_000,
        total_liabilities=300_000,
        total_equity=800_000,
    )


@pytest.fixture
def glass_metrics_payload() -> dict:
    """The reference scenario as a camelCase request body."""
    return {
        "revenue": 776_000,
        "costOfGoodsSold": 420_000,
        "grossProfit": 356_000,
        "netIncome": -51_900,
        "wages": 180_000,
        "pensionContributions": 0,
        "currentAssets": 125_000,
        "currentLiabilities": 95_000,
        "totalLiabilities": 285_000,
        "totalEquity": 120_000,
    }
