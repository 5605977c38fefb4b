"""Core calculation engine.

Takes a diagnostic snapshot -> produces CalculatedMetrics by walking the
funnel backwards from the revenue goal: sales -> leads -> clicks -> reach.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from diagnostic.engine.recommendations import generate_recommendations
from diagnostic.engine.result import CalculatedMetrics
from diagnostic.models.diagnostic_data import (
    ConversionRates,
    DiagnosticData,
    FinancialData,
)

logger = logging.getLogger(__name__)

# Share of per-sale profit that may be spent acquiring the sale.
CAC_PROFIT_SHARE = 0.3


def _finite_or_zero(value: float) -> float:
    """Quotients that overflow to infinity degrade to 0, like a zero rate does."""
    return value if math.isfinite(value) else 0.0


def max_cac(financial: FinancialData) -> float:
    """CAC ceiling = ticket x margin x 30%."""
    return financial.average_ticket * (financial.profit_margin / 100) * CAC_PROFIT_SHARE


def revenue_difference(financial: FinancialData) -> float:
    """Gap between the revenue goal and current revenue (may be <= 0)."""
    return financial.monthly_goal_revenue - financial.current_monthly_revenue


def required_sales(financial: FinancialData) -> int:
    """Sales needed to close the revenue gap, rounded up; 0 when no gap."""
    gap = revenue_difference(financial)
    if financial.average_ticket > 0 and gap > 0:
        return math.ceil(_finite_or_zero(gap / financial.average_ticket))
    return 0


def effective_conversion_rates(data: DiagnosticData) -> ConversionRates:
    """Benchmark rates, with lead->sale replaced by the observed rate if known.

    Only the bottom of the funnel is overridden; reach->click and
    click->lead always come from the benchmark.
    """
    benchmark = data.benchmark.conversion_rates
    history = data.history
    if history.has_history and history.average_conversion_rate > 0:
        return ConversionRates(
            reach_to_click=benchmark.reach_to_click,
            click_to_lead=benchmark.click_to_lead,
            lead_to_sale=history.average_conversion_rate,
        )
    return benchmark


def reverse_stage(downstream: int, rate_percentage: float) -> int:
    """Volume needed upstream of a stage converting at ``rate_percentage``."""
    if downstream > 0 and rate_percentage > 0:
        return math.ceil(_finite_or_zero(downstream / (rate_percentage / 100)))
    return 0


def viable_sales(available_budget: float, cac_ceiling: float) -> int:
    """Acquisitions the budget can fund at the CAC ceiling, rounded down."""
    if available_budget > 0 and cac_ceiling > 0:
        return math.floor(_finite_or_zero(available_budget / cac_ceiling))
    return 0


class MetricsCalculator:
    """Stateless engine that runs the reverse-funnel calculation."""

    def calculate(self, data: DiagnosticData) -> CalculatedMetrics:
        """Derive CAC ceiling, funnel targets and recommendations for a snapshot."""
        financial = data.financial

        cac_ceiling = max_cac(financial)
        sales = required_sales(financial)

        rates = effective_conversion_rates(data)
        leads = reverse_stage(sales, rates.lead_to_sale)
        clicks = reverse_stage(leads, rates.click_to_lead)
        reach = reverse_stage(clicks, rates.reach_to_click)

        metrics = CalculatedMetrics(
            max_cac=cac_ceiling,
            required_sales=sales,
            required_leads=leads,
            required_clicks=clicks,
            required_reach=reach,
            viable_investment=_finite_or_zero(sales * cac_ceiling),
            viable_sales=viable_sales(data.investment.available_budget, cac_ceiling),
        )
        recommendations = generate_recommendations(data, metrics)

        logger.debug(
            "Funnel: sales=%d leads=%d clicks=%d reach=%d maxCAC=%.2f (%d recommendations)",
            sales,
            leads,
            clicks,
            reach,
            cac_ceiling,
            len(recommendations),
        )
        return replace(metrics, recommendations=recommendations)


_default_calculator = MetricsCalculator()


def calculate_metrics(data: DiagnosticData) -> CalculatedMetrics:
    """Pure entry point: snapshot in, metrics out. Never raises for valid snapshots."""
    return _default_calculator.calculate(data)
