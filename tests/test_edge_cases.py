"""Edge case tests for degenerate and extreme inputs."""

import math

import pytest

from ice.models.benchmarks import IndustryBenchmarks, MetricBenchmark
from ice.models.enums import MetricKey, RevenueTier
from ice.models.metrics import BusinessMetrics


def _flat_benchmarks() -> IndustryBenchmarks:
    flat = {key.value: MetricBenchmark(p25=0.5, p50=0.5, p75=0.5) for key in MetricKey}
    return IndustryBenchmarks(industry_id="flat", revenue_tier=RevenueTier.TIER_0_250K, **flat)


def _zero_metrics() -> BusinessMetrics:
    return BusinessMetrics(
        revenue=0,
        cost_of_goods_sold=0,
        gross_profit=0,
        net_income=0,
        wages=0,
        pension_contributions=0,
        current_assets=0,
        current_liabilities=0,
        total_liabilities=0,
        total_equity=0,
    )


class TestZeroRevenue:
    def test_zero_business_calibrates(self, engine, glass_benchmarks):
        result = engine.calibrate(_zero_metrics(), glass_benchmarks)
        assert result.revenue_tier is RevenueTier.TIER_0_250K
        assert result.opportunities.total == 0.0
        assert all(0.0 <= s <= 100.0 for s in result.percentile_scores.as_dict().values())

    def test_zero_revenue_fixes_have_no_ratio_impact(self, engine, glass_benchmarks):
        result = engine.calibrate(_zero_metrics(), glass_benchmarks)
        for fix in result.quick_fixes:
            assert fix.annual_impact >= 0.0


class TestInfiniteRatios:
    def test_no_liabilities_scores_top_of_range(self, engine, glass_benchmarks):
        metrics = BusinessMetrics(
            revenue=1_500_000,
            cost_of_goods_sold=800_000,
            gross_profit=700_000,
            net_income=150_000,
            wages=300_000,
            pension_contributions=30_000,
            current_assets=200_000,
            current_liabilities=0,
            total_liabilities=0,
            total_equity=0,
        )
        result = engine.calibrate(metrics, glass_benchmarks)
        assert math.isinf(result.ratios[MetricKey.CURRENT_RATIO])
        assert result.percentile_scores.current_ratio == 100.0
        assert result.ratios[MetricKey.DEBT_TO_EQUITY] == 0.0

    def test_zero_equity_with_debt_scores_bottom(self, engine, glass_benchmarks):
        metrics = BusinessMetrics(
            revenue=1_500_000,
            cost_of_goods_sold=800_000,
            gross_profit=700_000,
            net_income=150_000,
            wages=300_000,
            pension_contributions=30_000,
            current_assets=200_000,
            current_liabilities=100_000,
            total_liabilities=500_000,
            total_equity=0,
        )
        result = engine.calibrate(metrics, glass_benchmarks)
        assert result.percentile_scores.debt_to_equity == 0.0
        de_fix = next(f for f in result.quick_fixes if f.metric is MetricKey.DEBT_TO_EQUITY)
        assert de_fix.annual_impact == pytest.approx(50_000)


class TestDegenerateBenchmarks:
    def test_flat_benchmarks_give_neutral_health(self, engine, glass_metrics):
        result = engine.calibrate(glass_metrics, _flat_benchmarks())
        assert all(s == 50.0 for s in result.percentile_scores.as_dict().values())
        assert result.health.score == pytest.approx(50.0)
        assert result.quick_fixes == ()
        assert result.opportunities.total == 0.0


class TestExtremeValues:
    def test_huge_revenue(self, engine, glass_benchmarks):
        metrics = BusinessMetrics(
            revenue=5e10,
            cost_of_goods_sold=2e10,
            gross_profit=3e10,
            net_income=5e9,
            wages=1e10,
            pension_contributions=1e8,
            current_assets=1e10,
            current_liabilities=5e9,
            total_liabilities=1e10,
            total_equity=2e10,
        )
        result = engine.calibrate(metrics, glass_benchmarks)
        assert result.revenue_tier is RevenueTier.TIER_25M_PLUS
        assert 0.0 <= result.health.score <= 100.0
