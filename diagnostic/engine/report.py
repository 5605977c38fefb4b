"""Assemble the summary shown after the wizard's last step."""

from __future__ import annotations

import logging

from diagnostic.engine.calculator import (
    calculate_metrics,
    effective_conversion_rates,
    revenue_difference,
)
from diagnostic.engine.derived import round_half_up
from diagnostic.engine.recommendations import goal_coverage
from diagnostic.engine.result import DiagnosticReport
from diagnostic.engine.rollout import plan_rollout
from diagnostic.models.diagnostic_data import DiagnosticData

logger = logging.getLogger(__name__)

# Client-origin totals within this many points of 100 are not flagged.
ORIGIN_TOTAL_TOLERANCE = 0.5


def input_warnings(data: DiagnosticData) -> list[str]:
    """Non-blocking flags about the entered data."""
    warnings: list[str] = []

    origin = data.financial.client_origin
    total = origin.total()
    if total > 0 and abs(origin.deviation_from_full()) > ORIGIN_TOTAL_TOLERANCE:
        warnings.append(
            f"Client origin percentages add up to {round_half_up(total)}%, not 100%. "
            "Shares are normalized against the entered total."
        )

    validation = data.validation
    if validation.month2_percentage < validation.month1_percentage:
        warnings.append(
            f"Month 2 budget ({round_half_up(validation.month2_percentage)}%) is below "
            f"month 1 ({round_half_up(validation.month1_percentage)}%)."
        )

    return warnings


def build_report(data: DiagnosticData) -> DiagnosticReport:
    """Calculate metrics and everything the result views derive from them."""
    metrics = calculate_metrics(data)
    warnings = input_warnings(data)
    for warning in warnings:
        logger.warning("Diagnostic input flagged: %s", warning)

    return DiagnosticReport(
        metrics=metrics,
        conversion_rates=effective_conversion_rates(data),
        revenue_difference=revenue_difference(data.financial),
        goal_coverage=goal_coverage(data, metrics.viable_sales or 0),
        rollout=plan_rollout(data),
        warnings=warnings,
    )
