"""Derived financial fields resolved before a snapshot is calculated.

The wizard lets users type either side of several related fields (revenue and
sales give the ticket; margin and profit give each other; the revenue goal
gives the sales-count goal). These functions resolve them from the inputs in
one pass so the result does not depend on the order the fields were edited.
"""

from __future__ import annotations

import math

from diagnostic.models.diagnostic_data import DiagnosticData, FinancialData
from diagnostic.models.enums import ProfitAnchor


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up. Non-finite values give 0."""
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def effective_current_revenue(financial: FinancialData) -> float:
    """Current revenue as entered, or sales x ticket when it was left blank."""
    if financial.current_monthly_revenue > 0:
        return financial.current_monthly_revenue
    revenue = financial.current_monthly_sales * financial.average_ticket
    return revenue if math.isfinite(revenue) else 0.0


def derive_average_ticket(financial: FinancialData) -> float:
    """Ticket = revenue / sales. Keeps the stored ticket when sales are unknown."""
    revenue = effective_current_revenue(financial)
    if financial.current_monthly_sales > 0 and revenue > 0:
        ticket = revenue / financial.current_monthly_sales
        return ticket if math.isfinite(ticket) else 0.0
    if financial.current_monthly_sales > 0:
        return 0.0
    return financial.average_ticket


def derive_profit(financial: FinancialData) -> float:
    """Profit = revenue x margin."""
    revenue = effective_current_revenue(financial)
    if revenue > 0 and financial.profit_margin > 0:
        return revenue * (financial.profit_margin / 100)
    return 0.0


def derive_profit_margin(financial: FinancialData) -> float:
    """Margin = profit / revenue, capped at 100%."""
    revenue = effective_current_revenue(financial)
    if revenue > 0 and financial.profit > 0:
        return min((financial.profit / revenue) * 100, 100.0)
    if financial.profit == 0:
        return 0.0
    # Profit entered but no revenue yet: nothing to derive from.
    return financial.profit_margin


def derive_goal_revenue(financial: FinancialData) -> float:
    """Revenue goal, filled from a legacy sales-count goal when missing."""
    if financial.monthly_goal_revenue > 0:
        return financial.monthly_goal_revenue
    if financial.monthly_goal > 0 and financial.average_ticket > 0:
        goal_revenue = financial.monthly_goal * financial.average_ticket
        if math.isfinite(goal_revenue):
            return goal_revenue
    return financial.monthly_goal_revenue


def derive_goal_sales(financial: FinancialData) -> int:
    """Sales-count goal = revenue goal / ticket, rounded half up."""
    if financial.average_ticket <= 0:
        return financial.monthly_goal
    if financial.monthly_goal_revenue > 0:
        return round_half_up(financial.monthly_goal_revenue / financial.average_ticket)
    return 0


def recompute_derived_fields(
    data: DiagnosticData,
    anchor: ProfitAnchor = ProfitAnchor.MARGIN,
) -> DiagnosticData:
    """Return a new snapshot with every derived financial field resolved.

    ``anchor`` names the field of the margin/profit pair the user entered;
    the other one is recomputed from it. Applying the function twice gives
    the same snapshot as applying it once.
    """
    financial = data.financial

    ticket = derive_average_ticket(financial)
    revenue = effective_current_revenue(financial)
    financial = financial.with_changes(
        average_ticket=ticket,
        current_monthly_revenue=revenue,
    )

    if anchor == ProfitAnchor.PROFIT:
        financial = financial.with_changes(profit_margin=derive_profit_margin(financial))
    else:
        financial = financial.with_changes(profit=derive_profit(financial))

    financial = financial.with_changes(monthly_goal_revenue=derive_goal_revenue(financial))
    financial = financial.with_changes(monthly_goal=derive_goal_sales(financial))

    return data.model_copy(update={"financial": financial})
