"""Load, validate, and look up benchmark cohorts from a JSON dataset."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from ice.benchmarks.base import BenchmarkSource
from ice.benchmarks.schema import BenchmarkDataset, IndustryClassification
from ice.models.benchmarks import IndustryBenchmarks
from ice.models.enums import RevenueTier

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent / "data"


def load_dataset(file_path: Path | None = None) -> BenchmarkDataset:
    """Load and validate a benchmark dataset from a JSON file.

    If no path is provided, loads the packaged seed dataset.
    """
    if file_path is None:
        file_path = _DATA_DIR / "industry_benchmarks.json"

    if not file_path.exists():
        raise FileNotFoundError(f"Benchmark dataset not found: {file_path}")

    with open(file_path, "r") as f:
        raw = json.load(f)

    return BenchmarkDataset.model_validate(raw)


class StaticBenchmarkSource(BenchmarkSource):
    """In-memory benchmark lookups over a validated dataset."""

    def __init__(self, dataset: BenchmarkDataset):
        self._industries: dict[str, IndustryClassification] = {
            industry.id: industry for industry in dataset.industries
        }
        self._by_code: dict[str, IndustryClassification] = {
            industry.naics_code: industry for industry in dataset.industries
        }
        self._cohorts: dict[tuple[str, RevenueTier], IndustryBenchmarks] = {}
        for row in dataset.benchmarks:
            industry = self._industries.get(row.industry_id)
            if industry is None:
                logger.warning("Skipping benchmark for unknown industry %s", row.industry_id)
                continue
            self._cohorts[(row.industry_id, row.revenue_tier)] = row.to_benchmarks(
                industry, default_year=dataset.data_year
            )
        logger.info(
            "Loaded %d industries and %d benchmark cohorts",
            len(self._industries),
            len(self._cohorts),
        )

    @classmethod
    def from_file(cls, file_path: Path | None = None) -> StaticBenchmarkSource:
        return cls(load_dataset(file_path))

    def get(self, industry_id: str, tier: RevenueTier) -> Optional[IndustryBenchmarks]:
        return self._cohorts.get((industry_id, tier))

    def get_any_tier(self, industry_id: str) -> Optional[IndustryBenchmarks]:
        # Tiers are checked in band order so the answer is deterministic.
        for tier in RevenueTier:
            found = self._cohorts.get((industry_id, tier))
            if found is not None:
                return found
        return None

    def industry(self, industry_id: str) -> Optional[IndustryClassification]:
        return self._industries.get(industry_id)

    def parent_of(self, industry_id: str) -> Optional[IndustryClassification]:
        industry = self._industries.get(industry_id)
        if industry is None or industry.parent_code is None:
            return None
        return self._by_code.get(industry.parent_code)

    def industries(self) -> list[IndustryClassification]:
        return sorted(self._industries.values(), key=lambda i: i.naics_code)
