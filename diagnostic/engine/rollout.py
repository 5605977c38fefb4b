"""Three-month validation rollout: Discovery, Optimization, Scale."""

from __future__ import annotations

from diagnostic.engine.derived import round_half_up
from diagnostic.engine.result import RolloutPhase
from diagnostic.models.diagnostic_data import DiagnosticData
from diagnostic.models.enums import RolloutPhaseName

PHASE_OBJECTIVES: dict[RolloutPhaseName, tuple[str, ...]] = {
    RolloutPhaseName.DISCOVERY: (
        "Collect real customer data",
        "Test content formats",
        "Find the best times and days",
        "Discover the real CAC",
    ),
    RolloutPhaseName.OPTIMIZATION: (
        "Double the budget on what converted",
        "Cut what does not work",
        "Test winning variations",
        "Refine targeting",
    ),
    RolloutPhaseName.SCALE: (
        "Hit the established goal",
        "Keep consistency",
        "Seek predictability",
        "Scale what works",
    ),
}

PHASE_HYPOTHESES: dict[RolloutPhaseName, tuple[str, ...]] = {
    RolloutPhaseName.DISCOVERY: (
        "Which format generates the most leads?",
        "Which CTA converts best?",
        "Which audience responds best?",
    ),
    RolloutPhaseName.OPTIMIZATION: (
        "Does variation A or B perform better?",
        "Does an expanded audience keep the CAC?",
        "Does nurturing content improve conversion?",
    ),
    RolloutPhaseName.SCALE: (
        "Is the goal sustainable?",
        "Does the CAC hold at scale?",
        "Can operations keep up?",
    ),
}

_PHASE_LABELS = {
    RolloutPhaseName.DISCOVERY: "Discovery",
    RolloutPhaseName.OPTIMIZATION: "Optimization",
    RolloutPhaseName.SCALE: "Scale",
}


def _phase(month: int, name: RolloutPhaseName, percentage: float, budget: float) -> RolloutPhase:
    return RolloutPhase(
        month=month,
        name=name,
        label=_PHASE_LABELS[name],
        budget_percentage=percentage,
        budget=budget,
        objectives=PHASE_OBJECTIVES[name],
        hypotheses=PHASE_HYPOTHESES[name],
    )


def plan_rollout(data: DiagnosticData) -> list[RolloutPhase]:
    """Split the available budget across the three validation months.

    Months 1 and 2 get their configured share (rounded to whole currency
    units); month 3 always gets the full budget.
    """
    total_budget = data.investment.available_budget
    validation = data.validation

    return [
        _phase(
            1,
            RolloutPhaseName.DISCOVERY,
            validation.month1_percentage,
            round_half_up(total_budget * validation.month1_percentage / 100),
        ),
        _phase(
            2,
            RolloutPhaseName.OPTIMIZATION,
            validation.month2_percentage,
            round_half_up(total_budget * validation.month2_percentage / 100),
        ),
        _phase(3, RolloutPhaseName.SCALE, 100.0, total_budget),
    ]


def total_rollout_budget(phases: list[RolloutPhase]) -> float:
    """Total spend across the rollout."""
    return sum(p.budget for p in phases)
