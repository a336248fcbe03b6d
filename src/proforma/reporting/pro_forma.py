# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Pro Forma Report

Presentation tables for the investor-facing pro forma: key assumptions,
returns summary, annual cash flow, distributions, exit analysis, sensitivity
and breakeven. Values stay numeric; currency and percentage formatting is
left to the document layer.
"""

from __future__ import annotations

from typing import Dict

import pandas as pd

from ..deal.depreciation import depreciation_to_frame
from ..valuation.sensitivity import sensitivity_to_frame
from .base import BaseReport


def _line_items(items: Dict[str, object], column: str = "Value") -> pd.DataFrame:
    df = pd.DataFrame({column: pd.Series(items, dtype=object)})
    df.index.name = "Line Item"
    return df


class ProFormaReport(BaseReport):
    """
    Investor pro forma tables built from a completed run.

    Example:
        ```python
        results = run(assumptions)
        report = ProFormaReport(results)
        tables = report.generate()
        tables["Annual Cash Flow"]
        ```
    """

    def generate(self, **kwargs) -> Dict[str, pd.DataFrame]:
        """
        Build every section of the report.

        Returns:
            Ordered mapping of section title to DataFrame
        """
        return {
            "Key Assumptions": self.key_assumptions(),
            "Returns Summary": self.returns_summary(),
            "Annual Cash Flow": self.annual_cash_flow(),
            "Distribution Waterfall": self.distribution_waterfall(),
            "Exit Analysis": self.exit_analysis(),
            "Sensitivity Analysis": self.sensitivity(),
            "Breakeven Analysis": self.breakeven(),
            "Depreciation": self.depreciation(),
            "Compliance Checks": self.compliance(),
        }

    def key_assumptions(self) -> pd.DataFrame:
        a = self._results.assumptions
        return _line_items(
            {
                "Property Type": a.property_type.value,
                "Purchase Price": a.purchase_price,
                "Renovation Budget": a.renovation_budget,
                "Closing Costs": a.closing_costs,
                "Total Project Cost": a.total_project_cost,
                "Total Equity Raise": a.total_equity_raise,
                "Loan Amount": a.loan_amount,
                "Interest Rate": a.interest_rate,
                "Loan Term (Years)": a.loan_term_years,
                "Interest-Only Months": a.io_term_months if a.interest_only else 0,
                "Hold Period (Years)": a.hold_years,
                "Current NOI": a.current_noi,
                "Pro Forma NOI": a.pro_forma_noi,
                "Vacancy Rate": a.vacancy_rate,
                "Rent Growth": a.rent_growth_rate,
                "Expense Growth": a.expense_growth_rate,
                "Exit Cap Rate": a.exit_cap_rate,
                "Preferred Return": a.preferred_return,
                "Disposition Fee": a.disposition_fee_rate,
            }
        )

    def returns_summary(self) -> pd.DataFrame:
        r = self._results
        return _line_items(
            {
                "Total Cash Flow": r.total_cash_flow,
                "Net Sale Proceeds": r.net_proceeds,
                "Total Return": r.total_return,
                "Equity Multiple": r.equity_multiple,
                "IRR": r.irr,
                "Average Cash-on-Cash": r.average_cash_on_cash,
                "Average DSCR": r.average_dscr,
                "Going-In Cap Rate": r.going_in_cap_rate,
                "LTV": r.ltv,
                "Total Project Cost": r.total_project_cost,
                "Preferred Return": r.preferred_return,
                "LP Distributions": r.total_lp_distributions,
                "GP Distributions": r.total_gp_distributions,
            }
        )

    def annual_cash_flow(self) -> pd.DataFrame:
        """Rows are line items, columns are hold years."""
        df = self._results.projection_df
        if df.empty:
            return df
        labels = {
            "gross_revenue": "Gross Revenue",
            "vacancy_loss": "Vacancy Loss",
            "effective_gross_income": "Effective Gross Income",
            "operating_expenses": "Operating Expenses",
            "noi": "Net Operating Income",
            "debt_service": "Debt Service",
            "cash_flow_after_debt": "Cash Flow After Debt Service",
            "cash_on_cash": "Cash-on-Cash Return",
            "dscr": "DSCR",
        }
        return df[list(labels)].rename(columns=labels).T

    def distribution_waterfall(self) -> pd.DataFrame:
        return self._results.waterfall_df

    def exit_analysis(self) -> pd.DataFrame:
        e = self._results.exit_result
        return _line_items(
            {
                "Exit Year": e.exit_year,
                "Exit NOI": e.exit_noi,
                "Exit Cap Rate": e.exit_cap_rate,
                "Exit Value": e.exit_value,
                "Loan Payoff": e.loan_payoff,
                "Disposition Fee": e.disposition_fee,
                "Net Sale Proceeds": e.net_proceeds,
                "Total Distributions": e.total_distributions,
                "Equity Invested": e.total_equity_invested,
                "Equity Multiple": e.equity_multiple,
                "IRR": e.irr,
            }
        )

    def sensitivity(self) -> pd.DataFrame:
        return sensitivity_to_frame(self._results.sensitivity)

    def breakeven(self) -> pd.DataFrame:
        b = self._results.breakeven
        return _line_items(
            {
                "Gross Revenue": b.gross_revenue,
                "Operating Expenses": b.operating_expenses,
                "Debt Service": b.debt_service,
                "Breakeven Occupancy": b.breakeven_occupancy,
                "Assessment": b.assessment.value,
            }
        )

    def depreciation(self) -> pd.DataFrame:
        return depreciation_to_frame(
            self._results.depreciation, self._results.assumptions.hold_years
        )

    def compliance(self) -> pd.DataFrame:
        rows = [
            {
                "Check": c.name,
                "Regulation": c.regulation,
                "Category": c.category.value,
                "Passed": c.passed,
                "Note": c.note,
            }
            for c in self._results.compliance_checks
        ]
        return pd.DataFrame(
            rows, columns=["Check", "Regulation", "Category", "Passed", "Note"]
        )
