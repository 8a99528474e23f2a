"""Revenue tier classification.

Bands are lower-bound inclusive, upper-bound exclusive, and together
cover [0, inf) with no gaps:

    TIER_0_250K     [0,          250_000)
    TIER_250K_500K  [250_000,    500_000)
    TIER_500K_1M    [500_000,    1_000_000)
    TIER_1M_3M      [1_000_000,  3_000_000)
    TIER_3M_5M      [3_000_000,  5_000_000)
    TIER_5M_10M     [5_000_000,  10_000_000)
    TIER_10M_25M    [10_000_000, 25_000_000)
    TIER_25M_PLUS   [25_000_000, inf)
"""

from __future__ import annotations

import math
from typing import Optional, Union

from ice.engine.errors import InvalidInput
from ice.models.enums import RevenueTier

_TIER_BOUNDS: list[tuple[RevenueTier, float, float]] = [
    (RevenueTier.TIER_0_250K, 0, 250_000),
    (RevenueTier.TIER_250K_500K, 250_000, 500_000),
    (RevenueTier.TIER_500K_1M, 500_000, 1_000_000),
    (RevenueTier.TIER_1M_3M, 1_000_000, 3_000_000),
    (RevenueTier.TIER_3M_5M, 3_000_000, 5_000_000),
    (RevenueTier.TIER_5M_10M, 5_000_000, 10_000_000),
    (RevenueTier.TIER_10M_25M, 10_000_000, 25_000_000),
    (RevenueTier.TIER_25M_PLUS, 25_000_000, math.inf),
]

_TIER_LABELS: dict[RevenueTier, str] = {
    RevenueTier.TIER_0_250K: "$0 - $250K",
    RevenueTier.TIER_250K_500K: "$250K - $500K",
    RevenueTier.TIER_500K_1M: "$500K - $1M",
    RevenueTier.TIER_1M_3M: "$1M - $3M",
    RevenueTier.TIER_3M_5M: "$3M - $5M",
    RevenueTier.TIER_5M_10M: "$5M - $10M",
    RevenueTier.TIER_10M_25M: "$10M - $25M",
    RevenueTier.TIER_25M_PLUS: "$25M+",
}


def tier_bounds(tier: RevenueTier) -> tuple[float, float]:
    """Return the [lower, upper) revenue range for a tier."""
    for candidate, low, high in _TIER_BOUNDS:
        if candidate is tier:
            return low, high
    raise InvalidInput(f"Unknown revenue tier: {tier!r}")


def classify_revenue(revenue: float) -> RevenueTier:
    """Map a non-negative revenue figure to exactly one RevenueTier."""
    if revenue is None or math.isnan(revenue):
        raise InvalidInput("revenue must be a number")
    if revenue < 0:
        raise InvalidInput(
            f"revenue cannot be negative, got {revenue}",
            details=[{"loc": "revenue", "msg": "must be >= 0"}],
        )
    for tier, low, high in _TIER_BOUNDS:
        if low <= revenue < high:
            return tier
    # Only +inf reaches here.
    return RevenueTier.TIER_25M_PLUS


def parse_tier(value: Union[RevenueTier, str]) -> RevenueTier:
    """Coerce a tier name into the enumeration, rejecting anything else."""
    if isinstance(value, RevenueTier):
        return value
    try:
        return RevenueTier(value)
    except ValueError:
        raise InvalidInput(
            f"Unknown revenue tier: {value!r}",
            details=[{"loc": "revenue_tier", "msg": "not a recognised tier"}],
        ) from None


def resolve_tier(
    revenue: float,
    override: Optional[Union[RevenueTier, str]] = None,
) -> RevenueTier:
    """Use an explicit tier when the caller picked one, else classify revenue."""
    if override is not None:
        return parse_tier(override)
    return classify_revenue(revenue)


def tier_label(tier: RevenueTier) -> str:
    return _TIER_LABELS[tier]
