"""Convert CalibrationResult to and from a JSON-compatible document.

Documents use camelCase keys. Non-finite floats (an infinite current ratio
when there are no current liabilities, for instance) are written as the
strings "Infinity", "-Infinity" and "NaN" so the document stays valid JSON
and reads back to the same value.

Stored documents keep full precision. ``rounded=True`` produces a display
view (scores to one decimal, money to cents, ratios to four places) that is
not meant to be read back.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Union

from ice.engine.errors import InvalidInput
from ice.engine.insights import summarize_quick_fixes
from ice.engine.result import (
    CalibrationResult,
    HealthScore,
    Opportunities,
    PercentileScores,
    QuickFix,
    ScenarioProjection,
    YearProjection,
)
from ice.engine.tiers import tier_label
from ice.models.enums import (
    Complexity,
    HealthTrend,
    ImplementationTimeframe,
    MetricKey,
    QuickFixCategory,
    RevenueTier,
)

_SCORE_DIGITS = 1
_MONEY_DIGITS = 2
_RATIO_DIGITS = 4


def _encode(value: float, digits: Optional[int] = None) -> Union[float, str]:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if digits is not None:
        return round(value, digits)
    return value


def _decode(raw: Union[float, int, str]) -> float:
    # float() understands "Infinity", "-Infinity" and "NaN".
    return float(raw)


def _camel(key: MetricKey) -> str:
    head, *rest = key.value.split("_")
    return head + "".join(part.title() for part in rest)


def _metric_from_camel(name: str) -> MetricKey:
    for key in MetricKey:
        if _camel(key) == name:
            return key
    raise InvalidInput(f"Unknown metric in stored document: {name!r}")


def _projection_to_document(
    projection: ScenarioProjection, rounded: bool
) -> dict[str, Any]:
    money = _MONEY_DIGITS if rounded else None
    return {
        "name": projection.name,
        "baselineRevenue": _encode(projection.baseline_revenue, money),
        "baselineNetIncome": _encode(projection.baseline_net_income, money),
        "years": [
            {
                "year": year.year,
                "revenue": _encode(year.revenue, money),
                "netIncome": _encode(year.net_income, money),
                "realizedOpportunity": _encode(year.realized_opportunity, money),
                "cumulativeNetIncome": _encode(year.cumulative_net_income, money),
            }
            for year in projection.years
        ],
    }


def _projection_from_document(doc: dict[str, Any]) -> ScenarioProjection:
    return ScenarioProjection(
        name=doc["name"],
        baseline_revenue=_decode(doc["baselineRevenue"]),
        baseline_net_income=_decode(doc["baselineNetIncome"]),
        years=tuple(
            YearProjection(
                year=int(year["year"]),
                revenue=_decode(year["revenue"]),
                net_income=_decode(year["netIncome"]),
                realized_opportunity=_decode(year["realizedOpportunity"]),
                cumulative_net_income=_decode(year["cumulativeNetIncome"]),
            )
            for year in doc["years"]
        ),
    )


def _quick_fix_to_document(fix: QuickFix, rounded: bool) -> dict[str, Any]:
    ratio = _RATIO_DIGITS if rounded else None
    return {
        "metric": _camel(fix.metric),
        "category": fix.category.value,
        "action": fix.action,
        "requiredAction": fix.required_action,
        "currentValue": _encode(fix.current_value, ratio),
        "recommendedValue": _encode(fix.recommended_value, ratio),
        "annualImpact": _encode(fix.annual_impact, _MONEY_DIGITS if rounded else None),
        "implementation": fix.implementation.value,
        "complexity": fix.complexity.value,
        "priority": fix.priority,
    }


def _quick_fix_from_document(doc: dict[str, Any]) -> QuickFix:
    return QuickFix(
        metric=_metric_from_camel(doc["metric"]),
        category=QuickFixCategory(doc["category"]),
        action=doc["action"],
        required_action=doc["requiredAction"],
        current_value=_decode(doc["currentValue"]),
        recommended_value=_decode(doc["recommendedValue"]),
        annual_impact=_decode(doc["annualImpact"]),
        implementation=ImplementationTimeframe(doc["implementation"]),
        complexity=Complexity(doc["complexity"]),
        priority=int(doc["priority"]),
    )


def result_to_document(result: CalibrationResult, rounded: bool = False) -> dict[str, Any]:
    """Serialize a result; pass rounded=True for an API display view."""
    score_digits = _SCORE_DIGITS if rounded else None
    money = _MONEY_DIGITS if rounded else None
    ratio = _RATIO_DIGITS if rounded else None
    opportunities = result.opportunities
    summary = summarize_quick_fixes(list(result.quick_fixes))

    return {
        "industryId": result.industry_id,
        "revenueTier": result.revenue_tier.value,
        "revenueTierLabel": tier_label(result.revenue_tier),
        "benchmarkTier": result.benchmark_tier.value,
        "ratios": {_camel(key): _encode(value, ratio) for key, value in result.ratios.items()},
        "percentileScores": {
            _camel(key): _encode(value, score_digits)
            for key, value in result.percentile_scores.as_dict().items()
        },
        "healthScore": {
            "score": _encode(result.health.score, score_digits),
            "trend": result.health.trend.value,
            "label": result.health.label,
            "previousScore": (
                None
                if result.health.previous_score is None
                else _encode(result.health.previous_score, score_digits)
            ),
        },
        "opportunities": {
            **{name: _encode(value, money) for name, value in opportunities.breakdown().items()},
            "total": _encode(opportunities.total, money),
        },
        "projections": {
            "without": _projection_to_document(result.without_scenario, rounded),
            "with": _projection_to_document(result.with_scenario, rounded),
        },
        "quickFixes": [_quick_fix_to_document(fix, rounded) for fix in result.quick_fixes],
        "quickFixSummary": {
            "totalAnnualImpact": _encode(summary.total_annual_impact, money),
            "nearTermActions": summary.near_term_actions,
            "byCategory": {
                category.value: {"count": count, "impact": _encode(impact, money)}
                for category, (count, impact) in summary.by_category.items()
                if count
            },
        },
    }


def result_from_document(doc: dict[str, Any]) -> CalibrationResult:
    """Rebuild a result from a full-precision document.

    Derived entries (tier label, totals, quick-fix summary) are recomputed
    from the result rather than read back.
    """
    try:
        scores = {
            _metric_from_camel(name).value: _decode(value)
            for name, value in doc["percentileScores"].items()
        }
        health = doc["healthScore"]
        previous = health.get("previousScore")
        opportunities = doc["opportunities"]
        return CalibrationResult(
            revenue_tier=RevenueTier(doc["revenueTier"]),
            benchmark_tier=RevenueTier(doc["benchmarkTier"]),
            industry_id=doc["industryId"],
            percentile_scores=PercentileScores(**scores),
            health=HealthScore(
                score=_decode(health["score"]),
                trend=HealthTrend(health["trend"]),
                label=health["label"],
                previous_score=None if previous is None else _decode(previous),
            ),
            opportunities=Opportunities(
                revenue=_decode(opportunities["revenue"]),
                cogs=_decode(opportunities["cogs"]),
                labor=_decode(opportunities["labor"]),
                pension=_decode(opportunities["pension"]),
            ),
            without_scenario=_projection_from_document(doc["projections"]["without"]),
            with_scenario=_projection_from_document(doc["projections"]["with"]),
            quick_fixes=tuple(_quick_fix_from_document(fix) for fix in doc["quickFixes"]),
            ratios={
                _metric_from_camel(name): _decode(value) for name, value in doc["ratios"].items()
            },
        )
    except InvalidInput:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInput(f"Malformed calibration document: {exc}") from exc
