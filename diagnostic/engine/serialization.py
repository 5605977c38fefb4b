"""Convert engine results to the JSON shapes the dashboard views consume."""

from __future__ import annotations

from typing import Any

from diagnostic.engine.result import (
    CalculatedMetrics,
    DiagnosticReport,
    Recommendation,
    RolloutPhase,
)


def recommendation_to_dict(recommendation: Recommendation) -> dict[str, Any]:
    return {
        "type": recommendation.type.value,
        "title": recommendation.title,
        "description": recommendation.description,
        "code": recommendation.code.value if recommendation.code else None,
    }


def metrics_to_dict(metrics: CalculatedMetrics) -> dict[str, Any]:
    """Serialize metrics with the dashboard's field names (maxCAC, requiredSales, ...)."""
    return {
        "maxCAC": metrics.max_cac,
        "requiredSales": metrics.required_sales,
        "requiredLeads": metrics.required_leads,
        "requiredClicks": metrics.required_clicks,
        "requiredReach": metrics.required_reach,
        "viableInvestment": metrics.viable_investment,
        "viableSales": metrics.viable_sales,
        "recommendations": [recommendation_to_dict(r) for r in metrics.recommendations],
    }


def rollout_phase_to_dict(phase: RolloutPhase) -> dict[str, Any]:
    return {
        "month": phase.month,
        "name": phase.name.value,
        "label": phase.label,
        "budgetPercentage": phase.budget_percentage,
        "budget": phase.budget,
        "objectives": list(phase.objectives),
        "hypotheses": list(phase.hypotheses),
    }


def report_to_dict(report: DiagnosticReport) -> dict[str, Any]:
    return {
        "metrics": metrics_to_dict(report.metrics),
        "conversionRates": report.conversion_rates.model_dump(mode="json", by_alias=True),
        "revenueDifference": report.revenue_difference,
        "goalCoverage": report.goal_coverage,
        "rollout": [rollout_phase_to_dict(p) for p in report.rollout],
        "warnings": report.warnings,
    }
