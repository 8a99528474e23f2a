"""Five-year "without changes" vs "with recommended changes" projections.

Both paths start from the same year-0 baseline. The without path compounds
the baseline at a flat growth rate. The with path phases the total
opportunity in linearly over the ramp period, then keeps it fully realized,
compounding at the same rate:

    without[n] = NI * (1 + g)^n
    with[n]    = (NI + opportunity * min(1, n / ramp)) * (1 + g)^n
"""

from __future__ import annotations

from ice.engine.errors import InvalidInput
from ice.engine.result import ScenarioProjection, YearProjection

HORIZON_YEARS = 5

WITHOUT_SCENARIO = "without"
WITH_SCENARIO = "with"


def realization_fraction(year: int, ramp_years: int) -> float:
    """Share of the opportunity realized in a given year."""
    if ramp_years <= 0:
        raise InvalidInput(f"ramp_years must be positive, got {ramp_years}")
    return min(1.0, year / ramp_years)


def _project(
    name: str,
    revenue: float,
    net_income: float,
    growth_rate: float,
    opportunity: float,
    ramp_years: int,
) -> ScenarioProjection:
    years: list[YearProjection] = []
    cumulative = 0.0
    for year in range(1, HORIZON_YEARS + 1):
        growth = (1 + growth_rate) ** year
        realized = opportunity * realization_fraction(year, ramp_years)
        projected_net_income = (net_income + realized) * growth
        cumulative += projected_net_income
        years.append(
            YearProjection(
                year=year,
                revenue=revenue * growth,
                net_income=projected_net_income,
                realized_opportunity=realized * growth,
                cumulative_net_income=cumulative,
            )
        )
    return ScenarioProjection(
        name=name,
        baseline_revenue=revenue,
        baseline_net_income=net_income,
        years=tuple(years),
    )


def project_scenarios(
    revenue: float,
    net_income: float,
    total_opportunity: float,
    growth_rate: float = 0.03,
    ramp_years: int = 3,
) -> tuple[ScenarioProjection, ScenarioProjection]:
    """Return (without, with) projections sharing the same baseline."""
    if growth_rate <= -1:
        raise InvalidInput(f"growth_rate must be greater than -1, got {growth_rate}")
    if total_opportunity < 0:
        raise InvalidInput(f"total_opportunity cannot be negative, got {total_opportunity}")

    without = _project(WITHOUT_SCENARIO, revenue, net_income, growth_rate, 0.0, ramp_years)
    with_changes = _project(
        WITH_SCENARIO, revenue, net_income, growth_rate, total_opportunity, ramp_years
    )
    return without, with_changes
