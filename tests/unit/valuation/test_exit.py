# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for direct-cap exit analysis and investor returns."""

import logging

import pytest
import pyxirr

from proforma.analysis import ProjectionEngine
from proforma.debt import loan_balance
from proforma.valuation import ExitAnalyzer, build_irr_cash_flows, direct_cap_value


class TestDirectCap:
    def test_exit_value(self):
        assert direct_cap_value(500_000, 0.06) == pytest.approx(8_333_333.33, abs=0.01)

    @pytest.mark.parametrize("cap_rate", [0.0, -0.01])
    def test_non_positive_cap_rate(self, cap_rate):
        assert direct_cap_value(500_000, cap_rate) == 0.0


class TestIRRCashFlows:
    def test_stream_shape(self):
        flows = build_irr_cash_flows(1_000.0, [100.0, -50.0, 200.0], 500.0)
        assert flows == [-1_000.0, 100.0, 0.0, 700.0]

    def test_without_annual_flows(self):
        assert build_irr_cash_flows(1_000.0, [], 1_100.0) == [-1_000.0, 1_100.0]


class TestExitAnalyzer:
    def test_all_cash_one_year_hold(self, all_cash_deal):
        deal = all_cash_deal()
        result = ExitAnalyzer().analyze(deal, ProjectionEngine().project(deal))

        assert result.exit_year == 1
        assert result.exit_noi == pytest.approx(600_000.0)
        assert result.exit_value == pytest.approx(10_000_000.0)
        assert result.loan_payoff == 0.0
        assert result.net_proceeds == pytest.approx(10_000_000.0)
        assert result.total_cash_flow == pytest.approx(600_000.0)
        assert result.total_distributions == pytest.approx(10_600_000.0)
        assert result.equity_multiple == pytest.approx(1.06)
        assert result.irr == pytest.approx(0.06, abs=1e-6)
        assert result.profit == pytest.approx(600_000.0)

    def test_disposition_fee(self, all_cash_deal):
        deal = all_cash_deal(disposition_fee_rate=0.02)
        result = ExitAnalyzer().analyze(deal, ProjectionEngine().project(deal))

        assert result.disposition_fee == pytest.approx(200_000.0)
        assert result.net_proceeds == pytest.approx(9_800_000.0)

    def test_exit_on_final_year_noi(self, value_add_assumptions):
        projections = ProjectionEngine().project(value_add_assumptions)
        result = ExitAnalyzer().analyze(value_add_assumptions, projections)

        assert result.exit_noi == pytest.approx(projections[-1].noi)
        assert result.exit_value == pytest.approx(projections[-1].noi / 0.06)

    def test_loan_payoff_is_balance_at_exit(self, value_add_assumptions):
        a = value_add_assumptions
        result = ExitAnalyzer().analyze(a, ProjectionEngine().project(a))

        expected = loan_balance(a.loan_amount, a.interest_rate, 30, True, 24, 5)
        assert result.loan_payoff == pytest.approx(expected)
        assert 0 < result.loan_payoff < a.loan_amount
        assert result.net_proceeds == pytest.approx(
            result.exit_value - result.loan_payoff - result.disposition_fee
        )

    def test_irr_matches_oracle(self, value_add_assumptions):
        a = value_add_assumptions
        projections = ProjectionEngine().project(a)
        result = ExitAnalyzer().analyze(a, projections)

        flows = build_irr_cash_flows(
            a.total_equity_raise,
            [p.cash_flow_after_debt for p in projections],
            result.net_proceeds,
        )
        assert result.irr == pytest.approx(pyxirr.irr(flows), abs=1e-6)
        assert result.irr_npv_residual == pytest.approx(0.0, abs=1e-4)

    def test_zero_cap_rate_values_exit_at_zero(self, all_cash_deal, caplog):
        deal = all_cash_deal(exit_cap_rate=0.0)
        with caplog.at_level(logging.WARNING, logger="proforma.valuation.exit"):
            result = ExitAnalyzer().analyze(deal, ProjectionEngine().project(deal))

        assert result.exit_value == 0.0
        assert "not positive" in caplog.text

    def test_without_projections_uses_pro_forma_noi(self, all_cash_deal):
        result = ExitAnalyzer().analyze(all_cash_deal(noi=450_000.0), [])

        assert result.exit_noi == pytest.approx(450_000.0)
        assert result.total_cash_flow == 0.0

    def test_zero_equity_multiple(self, all_cash_deal):
        deal = all_cash_deal(total_equity_raise=0.0)
        result = ExitAnalyzer().analyze(deal, ProjectionEngine().project(deal))

        assert result.equity_multiple == 0.0
