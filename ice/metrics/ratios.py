"""The seven tracked financial ratios.

Each function is pure. Revenue-based ratios are 0.0 when revenue is 0;
balance-sheet ratios go to +inf when the denominator is 0 and the
numerator is positive, and to 0.0 when both are 0.
"""

from __future__ import annotations

import math

from ice.metrics.registry import register_metric
from ice.models.enums import MetricGroup, MetricKey
from ice.models.metrics import BusinessMetrics


def _share_of_revenue(amount: float, revenue: float) -> float:
    if revenue == 0:
        return 0.0
    return amount / revenue


def _balance_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.inf if numerator > 0 else 0.0
    return numerator / denominator


@register_metric(
    key=MetricKey.GROSS_PROFIT_MARGIN,
    label="Gross Profit Margin",
    description="Gross profit as a share of revenue.",
    group=MetricGroup.PROFITABILITY,
)
def gross_profit_margin(metrics: BusinessMetrics) -> float:
    """gross_profit / revenue"""
    return _share_of_revenue(metrics.gross_profit, metrics.revenue)


@register_metric(
    key=MetricKey.NET_PROFIT_MARGIN,
    label="Net Profit Margin",
    description="Net income as a share of revenue.",
    group=MetricGroup.PROFITABILITY,
)
def net_profit_margin(metrics: BusinessMetrics) -> float:
    """net_income / revenue"""
    return _share_of_revenue(metrics.net_income, metrics.revenue)


@register_metric(
    key=MetricKey.COGS_RATIO,
    label="COGS Ratio",
    description="Cost of goods sold as a share of revenue.",
    group=MetricGroup.EFFICIENCY,
    higher_is_better=False,
)
def cogs_ratio(metrics: BusinessMetrics) -> float:
    """cost_of_goods_sold / revenue"""
    return _share_of_revenue(metrics.cost_of_goods_sold, metrics.revenue)


@register_metric(
    key=MetricKey.LABOR_COST_RATIO,
    label="Labor Cost Ratio",
    description="Wages as a share of revenue.",
    group=MetricGroup.EFFICIENCY,
    higher_is_better=False,
)
def labor_cost_ratio(metrics: BusinessMetrics) -> float:
    """wages / revenue"""
    return _share_of_revenue(metrics.wages, metrics.revenue)


@register_metric(
    key=MetricKey.CURRENT_RATIO,
    label="Current Ratio",
    description="Current assets over current liabilities.",
    group=MetricGroup.LIQUIDITY,
)
def current_ratio(metrics: BusinessMetrics) -> float:
    """current_assets / current_liabilities"""
    return _balance_ratio(metrics.current_assets, metrics.current_liabilities)


@register_metric(
    key=MetricKey.DEBT_TO_EQUITY,
    label="Debt-to-Equity",
    description="Total liabilities over total equity.",
    group=MetricGroup.LEVERAGE,
    higher_is_better=False,
)
def debt_to_equity(metrics: BusinessMetrics) -> float:
    """total_liabilities / total_equity"""
    return _balance_ratio(metrics.total_liabilities, metrics.total_equity)


@register_metric(
    key=MetricKey.PENSION_CONTRIBUTION_RATE,
    label="Pension Contribution Rate",
    description="Retirement plan contributions as a share of revenue.",
    group=MetricGroup.RETIREMENT,
)
def pension_contribution_rate(metrics: BusinessMetrics) -> float:
    """pension_contributions / revenue"""
    return _share_of_revenue(metrics.pension_contributions, metrics.revenue)
