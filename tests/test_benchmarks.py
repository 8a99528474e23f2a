"""Tests for the benchmark dataset loader, lookups and fallback policy."""

import json

import pytest
from pydantic import ValidationError

from ice.benchmarks import StaticBenchmarkSource, load_dataset, resolve_benchmarks
from ice.benchmarks.schema import BenchmarkDataset
from ice.engine.errors import MissingBenchmarkData
from ice.models.enums import MetricKey, RevenueTier


@pytest.fixture(scope="module")
def source() -> StaticBenchmarkSource:
    return StaticBenchmarkSource.from_file()


class TestLoadDataset:
    def test_seed_dataset_loads(self):
        dataset = load_dataset()
        assert dataset.data_year == 2024
        assert len(dataset.industries) > 10
        assert len(dataset.benchmarks) > 10

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "nope.json")

    def test_custom_file(self, tmp_path):
        path = tmp_path / "bench.json"
        path.write_text(
            json.dumps(
                {
                    "data_year": 2023,
                    "industries": [
                        {"id": "1", "naics_code": "11", "title": "Agriculture", "level": 2}
                    ],
                    "benchmarks": [
                        {
                            "industry_id": "1",
                            "revenue_tier": "TIER_0_250K",
                            "net_profit_margin": [0.01, 0.05, 0.1],
                        }
                    ],
                }
            )
        )
        source = StaticBenchmarkSource.from_file(path)
        record = source.get("1", RevenueTier.TIER_0_250K)
        assert record.data_year == 2023
        assert record.net_profit_margin.p50 == 0.05
        assert record.cogs_ratio.p50 is None

    def test_triple_must_have_three_values(self):
        with pytest.raises(ValidationError):
            BenchmarkDataset.model_validate(
                {
                    "industries": [{"id": "1", "naics_code": "11", "title": "A", "level": 2}],
                    "benchmarks": [
                        {
                            "industry_id": "1",
                            "revenue_tier": "TIER_0_250K",
                            "cogs_ratio": [0.1, 0.2],
                        }
                    ],
                }
            )

    def test_requires_at_least_one_industry(self):
        with pytest.raises(ValidationError):
            BenchmarkDataset.model_validate({"industries": [], "benchmarks": []})

    def test_rows_for_unknown_industries_skipped(self):
        dataset = BenchmarkDataset.model_validate(
            {
                "industries": [{"id": "1", "naics_code": "11", "title": "A", "level": 2}],
                "benchmarks": [{"industry_id": "999", "revenue_tier": "TIER_0_250K"}],
            }
        )
        source = StaticBenchmarkSource(dataset)
        assert not source.has_benchmark("999")


class TestStaticSource:
    def test_exact_lookup_carries_metadata(self, source):
        record = source.get("327215", RevenueTier.TIER_1M_3M)
        assert record.industry_title == "Glass Product Manufacturing"
        assert record.naics_code == "327215"
        assert record.sample_size == 89
        assert record.data_year == 2024
        assert record.net_profit_margin.p50 == 0.08

    def test_every_seed_cohort_complete(self, source):
        for industry in source.industries():
            for tier in RevenueTier:
                record = source.get(industry.id, tier)
                if record is None:
                    continue
                for key in MetricKey:
                    assert record.for_metric(key).is_complete(), (industry.id, tier, key)

    def test_missing_pair_returns_none(self, source):
        assert source.get("327215", RevenueTier.TIER_25M_PLUS) is None

    def test_parent_of_follows_naics_code(self, source):
        assert source.parent_of("238220").id == "238"
        assert source.parent_of("238").id == "23"
        assert source.parent_of("23") is None
        assert source.parent_of("unknown") is None

    def test_industries_sorted_by_code(self, source):
        codes = [industry.naics_code for industry in source.industries()]
        assert codes == sorted(codes)

    def test_any_tier_picks_lowest_band(self, source):
        assert source.get_any_tier("238220").revenue_tier is RevenueTier.TIER_500K_1M


class TestResolveBenchmarks:
    def test_exact_match(self, source):
        record = resolve_benchmarks(source, "327215", RevenueTier.TIER_500K_1M)
        assert record.industry_id == "327215"
        assert record.revenue_tier is RevenueTier.TIER_500K_1M

    def test_falls_back_to_parent_same_tier(self, source):
        record = resolve_benchmarks(source, "238320", RevenueTier.TIER_3M_5M)
        assert record.industry_id == "238"
        assert record.revenue_tier is RevenueTier.TIER_3M_5M

    def test_parent_preferred_over_other_tier(self, source):
        """238220 has other tiers, but the parent has the exact tier."""
        record = resolve_benchmarks(source, "238220", RevenueTier.TIER_3M_5M)
        assert record.industry_id == "238"

    def test_falls_back_to_any_tier(self, source):
        record = resolve_benchmarks(source, "238220", RevenueTier.TIER_10M_25M)
        assert record.industry_id == "238220"
        assert record.revenue_tier is RevenueTier.TIER_500K_1M

    def test_gives_up_when_nothing_found(self, source):
        with pytest.raises(MissingBenchmarkData) as exc_info:
            resolve_benchmarks(source, "236118", RevenueTier.TIER_500K_1M)
        assert exc_info.value.industry_id == "236118"
        assert exc_info.value.revenue_tier == "TIER_500K_1M"

    def test_unknown_industry(self, source):
        with pytest.raises(MissingBenchmarkData):
            resolve_benchmarks(source, "000000", RevenueTier.TIER_500K_1M)
