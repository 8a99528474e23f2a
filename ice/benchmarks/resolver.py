"""Caller-side benchmark fallback policy.

The engine only ever receives one resolved IndustryBenchmarks record. This
module is what a caller uses to find it:

1. exact industry x tier
2. parent industry x same tier
3. any tier of the requested industry
"""

from __future__ import annotations

import logging

from ice.benchmarks.base import BenchmarkSource
from ice.engine.errors import MissingBenchmarkData
from ice.models.benchmarks import IndustryBenchmarks
from ice.models.enums import RevenueTier

logger = logging.getLogger(__name__)


def resolve_benchmarks(
    source: BenchmarkSource,
    industry_id: str,
    tier: RevenueTier,
) -> IndustryBenchmarks:
    """Find the best available benchmark, raising MissingBenchmarkData if none."""
    exact = source.get(industry_id, tier)
    if exact is not None:
        return exact

    parent = source.parent_of(industry_id)
    if parent is not None:
        from_parent = source.get(parent.id, tier)
        if from_parent is not None:
            logger.info(
                "No %s benchmark for %s; using parent industry %s",
                tier.value,
                industry_id,
                parent.id,
            )
            return from_parent

    any_tier = source.get_any_tier(industry_id)
    if any_tier is not None:
        logger.info(
            "No %s benchmark for %s or its parent; using tier %s",
            tier.value,
            industry_id,
            any_tier.revenue_tier.value,
        )
        return any_tier

    raise MissingBenchmarkData(
        f"No benchmark data available for industry {industry_id}",
        industry_id=industry_id,
        revenue_tier=tier.value,
    )
