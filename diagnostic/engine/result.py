"""Immutable result structures produced by the diagnostic engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from diagnostic.models.diagnostic_data import ConversionRates
from diagnostic.models.enums import (
    RecommendationCode,
    RecommendationType,
    RolloutPhaseName,
)


@dataclass(frozen=True)
class Recommendation:
    """A single advisory entry shown next to the results."""

    type: RecommendationType
    title: str
    description: str
    code: Optional[RecommendationCode] = None


@dataclass(frozen=True)
class CalculatedMetrics:
    """Targets derived from one diagnostic snapshot. Recomputed on demand."""

    max_cac: float
    required_sales: int
    required_leads: int
    required_clicks: int
    required_reach: int
    viable_investment: float
    viable_sales: Optional[int] = None
    recommendations: list[Recommendation] = field(default_factory=list)


@dataclass(frozen=True)
class RolloutPhase:
    """One month of the three-month validation rollout."""

    month: int
    name: RolloutPhaseName
    label: str
    budget_percentage: float
    budget: float
    objectives: tuple[str, ...] = ()
    hypotheses: tuple[str, ...] = ()


@dataclass(frozen=True)
class DiagnosticReport:
    """Everything the summary and funnel views render for a snapshot."""

    metrics: CalculatedMetrics
    conversion_rates: ConversionRates
    revenue_difference: float
    goal_coverage: float
    rollout: list[RolloutPhase]
    warnings: list[str] = field(default_factory=list)
