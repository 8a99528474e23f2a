"""Regression tests for the glass manufacturer scenario -- guards against calculation drift."""

import pytest

from ice.benchmarks import StaticBenchmarkSource, resolve_benchmarks
from ice.engine.calibrator import CalibrationEngine
from ice.engine.tiers import classify_revenue
from ice.models.enums import HealthTrend, MetricKey, QuickFixCategory, RevenueTier


class TestGlassManufacturerRegression:
    """Regression baselines for the $776K loss-making glass fabricator."""

    def _run(self, glass_metrics, glass_benchmarks):
        return CalibrationEngine().calibrate(glass_metrics, glass_benchmarks)

    def test_health_score_baseline(self, glass_metrics, glass_benchmarks):
        """Composite sits around 30 -- well under the median, but not zero."""
        result = self._run(glass_metrics, glass_benchmarks)
        assert 25 < result.health.score < 35, (
            f"Health score {result.health.score:.1f} drifted from ~30.2"
        )

    def test_revenue_opportunity_baseline(self, glass_metrics, glass_benchmarks):
        """Closing the net margin gap to 8% is worth about $114K a year."""
        result = self._run(glass_metrics, glass_benchmarks)
        assert result.opportunities.revenue == pytest.approx(113_980, rel=1e-6), (
            f"Revenue opportunity {result.opportunities.revenue:,.0f} drifted"
        )

    def test_total_opportunity_baseline(self, glass_metrics, glass_benchmarks):
        result = self._run(glass_metrics, glass_benchmarks)
        assert result.opportunities.total == pytest.approx(123_260, rel=1e-6)

    def test_top_fix_is_pricing(self, glass_metrics, glass_benchmarks):
        """The net margin fix outranks everything else."""
        result = self._run(glass_metrics, glass_benchmarks)
        top = result.quick_fixes[0]
        assert top.metric is MetricKey.NET_PROFIT_MARGIN
        assert top.category is QuickFixCategory.PRICING
        assert top.priority == 10

    def test_labor_cost_reduction_fix_present(self, glass_metrics, glass_benchmarks):
        result = self._run(glass_metrics, glass_benchmarks)
        assert any(
            fix.metric is MetricKey.LABOR_COST_RATIO
            and fix.category is QuickFixCategory.COST_REDUCTION
            for fix in result.quick_fixes
        )

    def test_year_five_gap(self, glass_metrics, glass_benchmarks):
        """With changes, year 5 net income swings from about -$60K to about +$83K."""
        result = self._run(glass_metrics, glass_benchmarks)
        without = result.without_scenario.final_year.net_income
        with_changes = result.with_scenario.final_year.net_income
        assert without == pytest.approx(-60_166, abs=1)
        assert with_changes == pytest.approx(82_726, abs=1)

    def test_seed_dataset_calibration(self, glass_metrics):
        """Through the packaged dataset the business is benchmarked in its own tier."""
        source = StaticBenchmarkSource.from_file()
        tier = classify_revenue(glass_metrics.revenue)
        benchmarks = resolve_benchmarks(source, "327215", tier)
        result = CalibrationEngine().calibrate(glass_metrics, benchmarks)

        assert tier is RevenueTier.TIER_500K_1M
        assert result.benchmark_tier is RevenueTier.TIER_500K_1M
        assert result.health.trend is HealthTrend.STABLE
        assert result.health.score < 50
        assert result.opportunities.revenue == pytest.approx((0.05 + 51_900 / 776_000) * 776_000)
