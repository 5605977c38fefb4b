"""Tests for derived-field recompute (ticket, profit/margin, sales goal)."""

import pytest

from conftest import make_diagnostic
from diagnostic.engine.derived import (
    derive_goal_sales,
    effective_current_revenue,
    recompute_derived_fields,
    round_half_up,
)
from diagnostic.models.enums import ProfitAnchor


class TestTicket:
    def test_ticket_from_revenue_and_sales(self):
        data = make_diagnostic(
            financial={"current_monthly_revenue": 30000, "current_monthly_sales": 30}
        )
        result = recompute_derived_fields(data)
        assert result.financial.average_ticket == pytest.approx(1000)

    def test_blank_revenue_uses_sales_times_ticket(self):
        data = make_diagnostic(
            financial={"current_monthly_sales": 10, "average_ticket": 500}
        )
        assert effective_current_revenue(data.financial) == 5000
        result = recompute_derived_fields(data)
        assert result.financial.current_monthly_revenue == 5000
        assert result.financial.average_ticket == 500

    def test_unknown_sales_keeps_stored_ticket(self):
        data = make_diagnostic(
            financial={"current_monthly_revenue": 30000, "average_ticket": 800}
        )
        assert recompute_derived_fields(data).financial.average_ticket == 800

    def test_sales_without_revenue_or_ticket(self):
        data = make_diagnostic(financial={"current_monthly_sales": 10})
        assert recompute_derived_fields(data).financial.average_ticket == 0

    def test_ticket_overflowing_to_infinity_is_zero(self):
        data = make_diagnostic(
            financial={"current_monthly_revenue": 1e10, "current_monthly_sales": 1e-300}
        )
        result = recompute_derived_fields(data)
        assert result.financial.average_ticket == 0
        assert result.financial.current_monthly_revenue == 1e10


class TestProfitAndMargin:
    def test_margin_anchor_derives_profit(self):
        data = make_diagnostic(
            financial={
                "current_monthly_revenue": 30000,
                "current_monthly_sales": 30,
                "profit_margin": 30,
                "profit": 1,
            }
        )
        result = recompute_derived_fields(data, ProfitAnchor.MARGIN)
        assert result.financial.profit == pytest.approx(9000)
        assert result.financial.profit_margin == 30

    def test_profit_anchor_derives_margin(self):
        data = make_diagnostic(
            financial={
                "current_monthly_revenue": 30000,
                "current_monthly_sales": 30,
                "profit": 6000,
            }
        )
        result = recompute_derived_fields(data, ProfitAnchor.PROFIT)
        assert result.financial.profit_margin == pytest.approx(20)
        assert result.financial.profit == 6000

    def test_profit_above_revenue_caps_margin(self):
        data = make_diagnostic(
            financial={"current_monthly_revenue": 1000, "profit": 5000}
        )
        result = recompute_derived_fields(data, ProfitAnchor.PROFIT)
        assert result.financial.profit_margin == 100

    def test_zero_profit_zeroes_margin(self):
        data = make_diagnostic(financial={"current_monthly_revenue": 1000, "profit": 0})
        result = recompute_derived_fields(data, ProfitAnchor.PROFIT)
        assert result.financial.profit_margin == 0

    def test_no_revenue_zeroes_profit(self):
        data = make_diagnostic(financial={"profit_margin": 40, "profit": 500})
        assert recompute_derived_fields(data).financial.profit == 0


class TestGoal:
    def test_goal_sales_from_goal_revenue(self):
        data = make_diagnostic(
            financial={
                "current_monthly_revenue": 30000,
                "current_monthly_sales": 30,
                "monthly_goal_revenue": 50000,
            }
        )
        assert recompute_derived_fields(data).financial.monthly_goal == 50

    def test_goal_sales_round_half_up(self):
        data = make_diagnostic(
            financial={"average_ticket": 1000, "monthly_goal_revenue": 2500}
        )
        assert derive_goal_sales(data.financial) == 3

    def test_legacy_sales_goal_fills_revenue_goal(self):
        data = make_diagnostic(
            financial={
                "current_monthly_revenue": 30000,
                "current_monthly_sales": 30,
                "monthly_goal": 40,
            }
        )
        result = recompute_derived_fields(data)
        assert result.financial.monthly_goal_revenue == pytest.approx(40000)
        assert result.financial.monthly_goal == 40

    def test_revenue_goal_wins_over_stale_sales_goal(self):
        data = make_diagnostic(
            financial={
                "average_ticket": 1000,
                "monthly_goal_revenue": 10000,
                "monthly_goal": 99,
            }
        )
        assert recompute_derived_fields(data).financial.monthly_goal == 10


class TestRecompute:
    @pytest.mark.parametrize("anchor", list(ProfitAnchor))
    def test_idempotent(self, anchor):
        data = make_diagnostic(
            financial={
                "current_monthly_revenue": 10000,
                "current_monthly_sales": 3,
                "profit_margin": 35,
                "profit": 2000,
                "monthly_goal_revenue": 25000,
            }
        )
        once = recompute_derived_fields(data, anchor)
        twice = recompute_derived_fields(once, anchor)
        assert twice == once

    def test_input_snapshot_unchanged(self):
        data = make_diagnostic(
            financial={"current_monthly_revenue": 30000, "current_monthly_sales": 30}
        )
        recompute_derived_fields(data)
        assert data.financial.average_ticket == 0

    def test_only_financial_section_replaced(self):
        data = make_diagnostic(financial={"current_monthly_revenue": 100})
        result = recompute_derived_fields(data)
        assert result.benchmark is data.benchmark
        assert result.history is data.history

    @pytest.mark.parametrize(
        "value, expected", [(2.5, 3), (2.4999, 2), (0.5, 1), (3.5, 4), (4.5, 5)]
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_round_half_up_non_finite(self, value):
        assert round_half_up(value) == 0
