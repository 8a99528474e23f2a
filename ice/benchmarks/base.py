from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ice.benchmarks.schema import IndustryClassification
from ice.models.benchmarks import IndustryBenchmarks
from ice.models.enums import RevenueTier


class BenchmarkSource(ABC):
    """Abstract base for peer benchmark lookups."""

    @abstractmethod
    def get(self, industry_id: str, tier: RevenueTier) -> Optional[IndustryBenchmarks]:
        """Return the benchmark for an exact industry x tier pair, or None."""
        ...

    @abstractmethod
    def get_any_tier(self, industry_id: str) -> Optional[IndustryBenchmarks]:
        """Return any benchmark recorded for the industry, or None."""
        ...

    @abstractmethod
    def industry(self, industry_id: str) -> Optional[IndustryClassification]:
        """Return the classification record for an industry id, or None."""
        ...

    @abstractmethod
    def parent_of(self, industry_id: str) -> Optional[IndustryClassification]:
        """Return the broader parent classification, or None at the top level."""
        ...

    @abstractmethod
    def industries(self) -> list[IndustryClassification]:
        """Return all known classifications, ordered by NAICS code."""
        ...

    def has_benchmark(self, industry_id: str) -> bool:
        return self.get_any_tier(industry_id) is not None
