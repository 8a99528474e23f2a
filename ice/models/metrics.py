"""Pydantic model for the raw financial figures of one fiscal period."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Tolerance for grossProfit vs revenue - COGS, in currency units.
_GROSS_PROFIT_TOLERANCE = 1.0


class BusinessMetrics(BaseModel):
    """Current-period figures for one business, in a single currency.

    Net income and gross profit may be negative (loss-making periods);
    every other amount must be non-negative. Every amount must be finite.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
        allow_inf_nan=False,
    )

    revenue: float = Field(ge=0)
    cost_of_goods_sold: float = Field(ge=0)
    gross_profit: float
    net_income: float
    wages: float = Field(ge=0)
    pension_contributions: float = Field(ge=0)
    current_assets: float = Field(ge=0)
    current_liabilities: float = Field(ge=0)
    total_liabilities: float = Field(ge=0)
    total_equity: float = Field(ge=0)

    @model_validator(mode="after")
    def gross_profit_matches_revenue_less_cogs(self) -> BusinessMetrics:
        expected = self.revenue - self.cost_of_goods_sold
        if abs(self.gross_profit - expected) > _GROSS_PROFIT_TOLERANCE:
            raise ValueError(
                f"gross_profit ({self.gross_profit}) must equal revenue - "
                f"cost_of_goods_sold ({expected})"
            )
        return self
