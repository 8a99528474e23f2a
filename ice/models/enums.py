from enum import Enum


class RevenueTier(str, Enum):
    TIER_0_250K = "TIER_0_250K"
    TIER_250K_500K = "TIER_250K_500K"
    TIER_500K_1M = "TIER_500K_1M"
    TIER_1M_3M = "TIER_1M_3M"
    TIER_3M_5M = "TIER_3M_5M"
    TIER_5M_10M = "TIER_5M_10M"
    TIER_10M_25M = "TIER_10M_25M"
    TIER_25M_PLUS = "TIER_25M_PLUS"


class HealthTrend(str, Enum):
    IMPROVING = "IMPROVING"
    STABLE = "STABLE"
    DECLINING = "DECLINING"


class MetricKey(str, Enum):
    GROSS_PROFIT_MARGIN = "gross_profit_margin"
    NET_PROFIT_MARGIN = "net_profit_margin"
    COGS_RATIO = "cogs_ratio"
    LABOR_COST_RATIO = "labor_cost_ratio"
    CURRENT_RATIO = "current_ratio"
    DEBT_TO_EQUITY = "debt_to_equity"
    PENSION_CONTRIBUTION_RATE = "pension_contribution_rate"


class MetricGroup(str, Enum):
    PROFITABILITY = "profitability"
    EFFICIENCY = "efficiency"
    LIQUIDITY = "liquidity"
    LEVERAGE = "leverage"
    RETIREMENT = "retirement"


class QuickFixCategory(str, Enum):
    PRICING = "PRICING"
    COST_REDUCTION = "COST_REDUCTION"
    RETIREMENT_PLAN = "RETIREMENT_PLAN"
    TAX_STRATEGY = "TAX_STRATEGY"
    CASH_FLOW = "CASH_FLOW"
    INSURANCE = "INSURANCE"
    OTHER = "OTHER"


class ImplementationTimeframe(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    THIRTY_DAYS = "THIRTY_DAYS"
    NINETY_DAYS = "NINETY_DAYS"
    LONG_TERM = "LONG_TERM"


class Complexity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    SUPABASE = "supabase"
