"""Advisory checks run against a snapshot and its computed metrics.

Checks are independent and always evaluated in the same order; that order is
the order recommendations are shown in.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

from diagnostic.engine.derived import round_half_up
from diagnostic.engine.result import CalculatedMetrics, Recommendation
from diagnostic.models.diagnostic_data import DiagnosticData
from diagnostic.models.enums import RecommendationCode, RecommendationType

CURRENCY_SYMBOL = "R$"

# A single client-origin bucket above this share means concentration risk.
CONCENTRATION_THRESHOLD = 70.0

Check = Callable[[DiagnosticData, CalculatedMetrics], Optional[Recommendation]]


def _plain(value: float) -> str:
    """5.0 -> '5', 12.5 -> '12.5'."""
    return str(int(value)) if float(value).is_integer() else str(value)


def _one_decimal(value: float) -> str:
    """12.25 -> '12.3', rounding half up."""
    return f"{round_half_up(value * 10) / 10:.1f}"


def goal_coverage(data: DiagnosticData, viable_sales: int) -> float:
    """Percentage of the revenue gap the budget-funded sales would cover.

    0 when there is no gap to cover.
    """
    financial = data.financial
    gap = financial.monthly_goal_revenue - financial.current_monthly_revenue
    if gap <= 0:
        return 0.0
    coverage = (viable_sales * financial.average_ticket) / gap * 100
    return coverage if math.isfinite(coverage) else 0.0


def check_operational_capacity(
    data: DiagnosticData, metrics: CalculatedMetrics
) -> Optional[Recommendation]:
    capacity = data.financial.clients_per_month
    if capacity > 0 and metrics.required_sales > capacity:
        return Recommendation(
            type=RecommendationType.WARNING,
            title="Limited Operational Capacity",
            description=(
                f"You need {metrics.required_sales} sales/month, but your capacity is "
                f"{_plain(capacity)}. Consider growing the team or adjusting the goal."
            ),
            code=RecommendationCode.CAPACITY,
        )
    return None


def check_budget_feasibility(
    data: DiagnosticData, metrics: CalculatedMetrics
) -> Optional[Recommendation]:
    budget = data.investment.available_budget
    if not (budget > 0 and metrics.required_sales > 0):
        return None

    fundable = metrics.viable_sales or 0
    percentage = goal_coverage(data, fundable)
    if percentage < 100:
        return Recommendation(
            type=RecommendationType.WARNING,
            title="Expectation Adjustment Needed",
            description=(
                f"With {CURRENCY_SYMBOL} {round_half_up(budget)} of budget you can reach "
                f"~{fundable} sales ({round_half_up(percentage)}% of the goal). "
                "Options: increase investment, optimize CAC or adjust the goal."
            ),
            code=RecommendationCode.BUDGET,
        )
    return None


def check_cac_ceiling(
    data: DiagnosticData, metrics: CalculatedMetrics
) -> Optional[Recommendation]:
    history = data.history
    if not (history.has_history and history.average_cac > 0):
        return None
    if history.average_cac > metrics.max_cac:
        current = round_half_up(history.average_cac)
        ceiling = round_half_up(metrics.max_cac)
        return Recommendation(
            type=RecommendationType.WARNING,
            title="CAC Above Limit",
            description=(
                f"Your current CAC ({CURRENCY_SYMBOL} {current}) is above the "
                f"recommended maximum ({CURRENCY_SYMBOL} {ceiling}). "
                "Optimize before scaling."
            ),
            code=RecommendationCode.CAC,
        )
    return None


def check_conversion_benchmark(
    data: DiagnosticData, metrics: CalculatedMetrics
) -> Optional[Recommendation]:
    history = data.history
    if not (history.has_history and history.average_conversion_rate > 0):
        return None
    benchmark_rate = data.benchmark.conversion_rates.lead_to_sale
    if history.average_conversion_rate < benchmark_rate:
        return Recommendation(
            type=RecommendationType.INFO,
            title="Improve Lead Nurturing",
            description=(
                f"Your conversion rate ({_one_decimal(history.average_conversion_rate)}%) "
                f"is below the industry benchmark ({_plain(benchmark_rate)}%). "
                "Focus on lead nurturing and qualification."
            ),
            code=RecommendationCode.CONVERSION,
        )
    return None


def check_source_concentration(
    data: DiagnosticData, metrics: CalculatedMetrics
) -> Optional[Recommendation]:
    shares = data.financial.client_origin.shares()
    if shares and max(shares.values()) > CONCENTRATION_THRESHOLD:
        return Recommendation(
            type=RecommendationType.INFO,
            title="Diversify Sources",
            description=(
                f"More than {_plain(CONCENTRATION_THRESHOLD)}% of clients come from a single "
                "source. Diversifying reduces risk."
            ),
            code=RecommendationCode.CONCENTRATION,
        )
    return None


CHECKS: tuple[Check, ...] = (
    check_operational_capacity,
    check_budget_feasibility,
    check_cac_ceiling,
    check_conversion_benchmark,
    check_source_concentration,
)


def generate_recommendations(
    data: DiagnosticData,
    metrics: CalculatedMetrics,
) -> list[Recommendation]:
    """Run every check in order and collect the ones that fire."""
    recommendations: list[Recommendation] = []
    for check in CHECKS:
        recommendation = check(data, metrics)
        if recommendation is not None:
            recommendations.append(recommendation)
    return recommendations
