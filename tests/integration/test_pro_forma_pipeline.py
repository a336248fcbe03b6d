# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end tests for `proforma.analysis.run`.

Checks that the components agree with each other across a full run:
cash conservation through the waterfall, the IRR stream against an
independent oracle and the summary metrics against the component outputs.
"""

import pytest
import pyxirr

from proforma.analysis import ProFormaResults, run
from proforma.core.primitives import EngineSettings, WaterfallSettings
from proforma.deal import DealAssumptions
from proforma.valuation import build_irr_cash_flows


@pytest.fixture
def results(value_add_assumptions) -> ProFormaResults:
    return run(value_add_assumptions)


class TestValueAddDeal:
    def test_components_present(self, results):
        assert len(results.projections) == 5
        assert len(results.annual_distributions) == 5
        assert len(results.sensitivity) == 7
        assert len(results.compliance_checks) == 9
        assert results.exit_result.exit_year == 5

    def test_noi_path(self, results):
        nois = [p.noi for p in results.projections]

        assert nois[0] == pytest.approx(625_000.0)
        assert nois[1] == pytest.approx(700_000.0)
        assert nois[2] == pytest.approx(700_000.0 * 1.022)

    def test_interest_only_then_amortizing(self, results):
        ds = [p.debt_service for p in results.projections]

        assert ds[0] == pytest.approx(420_000.0)
        assert ds[1] == pytest.approx(420_000.0)
        assert ds[2] > ds[1]
        assert ds[2] == pytest.approx(ds[4])

    def test_irr_against_oracle(self, results, value_add_assumptions):
        flows = build_irr_cash_flows(
            value_add_assumptions.total_equity_raise,
            [p.cash_flow_after_debt for p in results.projections],
            results.net_proceeds,
        )

        assert results.irr == pytest.approx(pyxirr.irr(flows), abs=1e-6)
        assert 0.05 < results.irr < 0.40

    def test_waterfall_conserves_cash(self, results):
        distributable = sum(p.distributable_cash for p in results.projections)
        distributed = results.waterfall_state.total

        assert distributed == pytest.approx(distributable + max(0.0, results.net_proceeds))

    def test_lp_gp_totals_reconcile(self, results):
        annual_lp, annual_gp = results.annual_lp_gp_totals
        exit_lp, exit_gp = results.exit_lp_gp_totals

        assert results.total_lp_distributions == pytest.approx(annual_lp + exit_lp)
        assert results.total_gp_distributions == pytest.approx(annual_gp + exit_gp)

    def test_preferred_return_paid_before_promote(self, results):
        pref_target = 4_200_000.0 * 0.08
        first_year = results.annual_distributions[0]

        # Year 1 cash (205,000) is below the 336,000 hurdle.
        assert [d.tier_name for d in first_year] == ["Preferred Return"]
        assert results.total_lp_distributions > pref_target

    def test_summary_metrics(self, results):
        assert results.total_return == pytest.approx(results.total_cash_flow + results.net_proceeds)
        assert results.average_dscr == pytest.approx(
            sum(p.dscr for p in results.projections) / 5
        )
        assert results.going_in_cap_rate == pytest.approx(0.055)
        assert results.ltv == pytest.approx(0.70)

    def test_all_checks_pass(self, results):
        assert results.failed_checks == []
        assert results.all_checks_passed

    def test_tables(self, results):
        assert list(results.projection_df.index) == [1, 2, 3, 4, 5]
        assert results.waterfall_df["Period"].iloc[-1] == "Exit"


class TestStabilizedDeal:
    def test_default_split_without_tiers(self, stabilized_assumptions):
        results = run(stabilized_assumptions)

        for distributions in results.annual_distributions:
            assert [d.tier_name for d in distributions] == ["Default Split"]
        lp, gp = results.annual_lp_gp_totals
        assert lp == pytest.approx(results.total_cash_flow * 0.70)
        assert gp == pytest.approx(results.total_cash_flow * 0.30)

    def test_settings_flow_through(self, stabilized_assumptions):
        settings = EngineSettings(
            waterfall=WaterfallSettings(default_lp_split=0.8, default_gp_split=0.2)
        )
        results = run(stabilized_assumptions, settings)

        lp, _ = results.annual_lp_gp_totals
        assert lp == pytest.approx(results.total_cash_flow * 0.80)
        assert results.settings is settings


class TestDegenerateDeal:
    def test_empty_deal_runs(self):
        results = run(DealAssumptions())

        assert len(results.projections) == 5
        assert results.exit_result.exit_value == 0.0
        assert results.equity_multiple == 0.0
        assert not results.all_checks_passed

    def test_negative_cash_flow_years_distribute_nothing(self):
        deal = DealAssumptions(
            purchase_price=5_000_000.0,
            total_equity_raise=1_000_000.0,
            loan_amount=4_000_000.0,
            interest_rate=0.07,
            current_noi=200_000.0,
            pro_forma_noi=200_000.0,
            hold_years=3,
        )
        results = run(deal)

        assert all(p.cash_flow_after_debt < 0 for p in results.projections)
        assert results.total_cash_flow == 0.0
        assert all(
            sum(d.total for d in year) == 0.0 for year in results.annual_distributions
        )

    def test_one_year_hold_runs(self, all_cash_deal):
        results = run(all_cash_deal())

        assert len(results.projections) == 1
        assert results.breakeven.year == 1
        assert results.irr == pytest.approx(0.06, abs=1e-6)
