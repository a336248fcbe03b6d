# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the pro forma presentation tables."""

import pytest

from proforma.analysis import run
from proforma.reporting import ProFormaReport


@pytest.fixture
def report(value_add_assumptions) -> ProFormaReport:
    return ProFormaReport(run(value_add_assumptions))


class TestProFormaReport:
    def test_requires_results(self):
        with pytest.raises(TypeError):
            ProFormaReport({"irr": 0.15})

    def test_sections(self, report):
        tables = report.generate()

        assert list(tables) == [
            "Key Assumptions",
            "Returns Summary",
            "Annual Cash Flow",
            "Distribution Waterfall",
            "Exit Analysis",
            "Sensitivity Analysis",
            "Breakeven Analysis",
            "Depreciation",
            "Compliance Checks",
        ]

    def test_annual_cash_flow_has_years_as_columns(self, report):
        df = report.annual_cash_flow()

        assert list(df.columns) == [1, 2, 3, 4, 5]
        assert "Net Operating Income" in df.index
        assert df.loc["Net Operating Income", 2] == pytest.approx(700_000.0)

    def test_returns_summary_presents_results(self, report):
        df = report.returns_summary()
        results = report._results

        assert df.loc["IRR", "Value"] == pytest.approx(results.irr)
        assert df.loc["Equity Multiple", "Value"] == pytest.approx(results.equity_multiple)
        assert df.loc["Total Project Cost", "Value"] == pytest.approx(11_200_000.0)

    def test_key_assumptions(self, report):
        df = report.key_assumptions()

        assert df.loc["Property Type", "Value"] == "MULTIFAMILY"
        assert df.loc["Interest-Only Months", "Value"] == 24

    def test_exit_and_breakeven(self, report):
        assert report.exit_analysis().loc["Exit Year", "Value"] == 5
        assert report.breakeven().loc["Assessment", "Value"] == "Favorable"

    def test_waterfall_includes_exit_rows(self, report):
        df = report.distribution_waterfall()
        assert "Exit" in df["Period"].to_list()

    def test_compliance_table(self, report):
        df = report.compliance()

        assert list(df.columns) == ["Check", "Regulation", "Category", "Passed", "Note"]
        assert len(df) == 9

    def test_depreciation_covers_hold(self, report):
        assert len(report.depreciation()) == 5
