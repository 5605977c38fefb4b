"""Shared test fixtures for the diagnostic test suite."""

import pytest

from diagnostic.models.diagnostic_data import DiagnosticData


def make_diagnostic(
    financial=None,
    benchmark=None,
    history=None,
    investment=None,
    validation=None,
) -> DiagnosticData:
    """Helper to build a snapshot from partial section dicts; the rest stays default."""
    raw = {}
    for name, section in (
        ("financial", financial),
        ("benchmark", benchmark),
        ("history", history),
        ("investment", investment),
        ("validation", validation),
    ):
        if section is not None:
            raw[name] = section
    return DiagnosticData.model_validate(raw)


SCENARIO_A_FINANCIAL = {
    "average_ticket": 1000,
    "profit_margin": 30,
    "current_monthly_revenue": 30000,
    "monthly_goal_revenue": 50000,
}


@pytest.fixture
def scenario_a() -> DiagnosticData:
    """Ticket 1000, margin 30%, R$ 30k -> R$ 50k goal, B2C benchmark.

    Needs 20 sales at a CAC ceiling of 90.
    """
    return make_diagnostic(financial=dict(SCENARIO_A_FINANCIAL))


@pytest.fixture
def scenario_with_history() -> DiagnosticData:
    """Scenario A with observed lead->sale of 10%, below the B2C 20% benchmark."""
    return make_diagnostic(
        financial=dict(SCENARIO_A_FINANCIAL),
        history={"has_history": True, "average_conversion_rate": 10},
    )


@pytest.fixture
def capacity_limited() -> DiagnosticData:
    """Scenario A with capacity for only 5 new clients a month."""
    return make_diagnostic(
        financial={**SCENARIO_A_FINANCIAL, "clients_per_month": 5},
    )


@pytest.fixture
def every_check_fires() -> DiagnosticData:
    """Inputs that trip all five recommendation checks."""
    return make_diagnostic(
        financial={
            **SCENARIO_A_FINANCIAL,
            "clients_per_month": 5,
            "client_origin": {"referral": 100},
        },
        history={
            "has_history": True,
            "average_conversion_rate": 10,
            "average_cac": 120,
        },
        investment={"available_budget": 900},
    )
