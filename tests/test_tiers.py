"""Tests for revenue tier classification."""

import math

import pytest

from ice.engine.errors import InvalidInput
from ice.engine.tiers import (
    classify_revenue,
    parse_tier,
    resolve_tier,
    tier_bounds,
    tier_label,
)
from ice.models.enums import RevenueTier


class TestClassifyRevenue:
    @pytest.mark.parametrize(
        "revenue, expected",
        [
            (0, RevenueTier.TIER_0_250K),
            (249_999.99, RevenueTier.TIER_0_250K),
            (250_000, RevenueTier.TIER_250K_500K),
            (500_000, RevenueTier.TIER_500K_1M),
            (776_000, RevenueTier.TIER_500K_1M),
            (1_000_000, RevenueTier.TIER_1M_3M),
            (3_000_000, RevenueTier.TIER_3M_5M),
            (5_000_000, RevenueTier.TIER_5M_10M),
            (10_000_000, RevenueTier.TIER_10M_25M),
            (25_000_000, RevenueTier.TIER_25M_PLUS),
            (1e12, RevenueTier.TIER_25M_PLUS),
        ],
    )
    def test_revenue_maps_to_expected_tier(self, revenue, expected):
        assert classify_revenue(revenue) is expected

    def test_boundary_belongs_to_higher_tier(self):
        """A revenue exactly on a boundary lands in the tier that starts there."""
        for tier in RevenueTier:
            low, _ = tier_bounds(tier)
            assert classify_revenue(low) is tier

    def test_tiers_are_contiguous_and_exhaustive(self):
        """Each tier's upper bound is the next tier's lower bound; the last is open."""
        tiers = list(RevenueTier)
        assert tier_bounds(tiers[0])[0] == 0
        for current, following in zip(tiers, tiers[1:]):
            assert tier_bounds(current)[1] == tier_bounds(following)[0]
        assert math.isinf(tier_bounds(tiers[-1])[1])

    def test_infinite_revenue_is_top_tier(self):
        assert classify_revenue(math.inf) is RevenueTier.TIER_25M_PLUS

    def test_negative_revenue_rejected(self):
        with pytest.raises(InvalidInput) as exc_info:
            classify_revenue(-1)
        assert exc_info.value.details[0]["loc"] == "revenue"

    def test_nan_revenue_rejected(self):
        with pytest.raises(InvalidInput):
            classify_revenue(float("nan"))


class TestTierOverride:
    def test_override_bypasses_classification(self):
        assert resolve_tier(776_000, RevenueTier.TIER_1M_3M) is RevenueTier.TIER_1M_3M

    def test_override_accepts_tier_name(self):
        assert resolve_tier(776_000, "TIER_3M_5M") is RevenueTier.TIER_3M_5M

    def test_no_override_classifies_revenue(self):
        assert resolve_tier(776_000) is RevenueTier.TIER_500K_1M

    def test_unknown_tier_name_rejected(self):
        with pytest.raises(InvalidInput) as exc_info:
            parse_tier("TIER_HUGE")
        assert exc_info.value.details[0]["loc"] == "revenue_tier"


class TestTierLabels:
    def test_every_tier_has_a_label(self):
        for tier in RevenueTier:
            assert tier_label(tier).startswith("$")

    def test_top_tier_label_is_open_ended(self):
        assert tier_label(RevenueTier.TIER_25M_PLUS) == "$25M+"
