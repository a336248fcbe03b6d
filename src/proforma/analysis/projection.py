# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Year-by-year operating projections.

NOI moves from in-place to pro forma over the stabilization period, then
compounds at rent growth net of expense growth weighted by the property
type's expense ratio benchmark. Each year is then levered with the loan's
debt service to produce cash flow after debt, cash-on-cash and DSCR.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Union

import pandas as pd

from ..core.calculations import FinancialCalculations
from ..core.primitives import EngineSettings, Model, PositiveInt, PropertyTypeEnum
from ..debt.amortization import annual_debt_service

if TYPE_CHECKING:
    from ..deal.assumptions import DealAssumptions

logger = logging.getLogger(__name__)

# Operating expenses as a share of gross revenue, by property type.
EXPENSE_RATIOS: Dict[PropertyTypeEnum, float] = {
    PropertyTypeEnum.MULTIFAMILY: 0.40,
    PropertyTypeEnum.OFFICE: 0.45,
    PropertyTypeEnum.RETAIL: 0.35,
    PropertyTypeEnum.INDUSTRIAL: 0.30,
    PropertyTypeEnum.MIXED_USE: 0.42,
    PropertyTypeEnum.SELF_STORAGE: 0.35,
    PropertyTypeEnum.MOBILE_HOME_PARK: 0.30,
    PropertyTypeEnum.HOTEL: 0.65,
    PropertyTypeEnum.NNN_RETAIL: 0.15,
    PropertyTypeEnum.SENIOR_HOUSING: 0.55,
    PropertyTypeEnum.STUDENT_HOUSING: 0.42,
    PropertyTypeEnum.BUILD_TO_RENT: 0.38,
    PropertyTypeEnum.OTHER: 0.40,
}
DEFAULT_EXPENSE_RATIO = 0.40


def expense_ratio(
    property_type: Union[PropertyTypeEnum, str, None],
    settings: Optional[EngineSettings] = None,
) -> float:
    """
    Expense ratio benchmark for a property type.

    Caller-supplied overrides in `settings.expense_ratio_overrides` win over
    the table; unknown types fall back to the multifamily benchmark (0.40).

    Example:
        ```python
        expense_ratio("HOTEL")       # 0.65
        expense_ratio("CAR_WASH")    # 0.40
        ```
    """
    resolved = PropertyTypeEnum.coerce(property_type)
    if settings is not None and resolved in settings.expense_ratio_overrides:
        return settings.expense_ratio_overrides[resolved]
    return EXPENSE_RATIOS.get(resolved, DEFAULT_EXPENSE_RATIO)


def stabilization_year(assumptions: "DealAssumptions") -> int:
    """Year NOI reaches pro forma: 2 for value-add (renovation budget), else 1."""
    return 2 if assumptions.renovation_budget > 0 else 1


class YearProjection(Model):
    """Projected operations and leverage for one hold year."""

    year: PositiveInt
    gross_revenue: float
    vacancy_loss: float
    effective_gross_income: float
    operating_expenses: float
    noi: float
    debt_service: float
    cash_flow_after_debt: float
    cash_on_cash: float
    dscr: float

    @property
    def distributable_cash(self) -> float:
        """Cash available for distribution (negative cash flow distributes nothing)."""
        return max(0.0, self.cash_flow_after_debt)


class ProjectionEngine:
    """
    Builds the ordered `YearProjection` sequence for a deal.

    Stateless apart from the caller-owned settings; one instance can project
    any number of deals.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()

    def noi_for_year(self, assumptions: "DealAssumptions", year: int) -> float:
        """
        NOI for hold year `year`.

        - Before stabilization: linear from current to pro forma NOI
          (progress = year / stabilization_year).
        - At stabilization: pro forma NOI.
        - After: pro forma NOI compounded at
          rent_growth - expense_growth * expense_ratio.
        """
        stab_year = stabilization_year(assumptions)
        current = assumptions.current_noi
        pro_forma = assumptions.pro_forma_noi

        if year < stab_year:
            progress = year / stab_year
            return current + (pro_forma - current) * progress
        if year == stab_year:
            return pro_forma

        ratio = expense_ratio(assumptions.property_type, self.settings)
        net_growth = (
            assumptions.rent_growth_rate - assumptions.expense_growth_rate * ratio
        )
        return pro_forma * (1 + net_growth) ** (year - stab_year)

    def project_year(self, assumptions: "DealAssumptions", year: int) -> YearProjection:
        """Project a single hold year."""
        noi = self.noi_for_year(assumptions, year)
        ratio = expense_ratio(assumptions.property_type, self.settings)
        vacancy = assumptions.vacancy_rate

        # Display decomposition only; the NOI above is what flows downstream.
        denominator = 1 - vacancy - ratio
        if denominator > 0:
            gross_revenue = noi / denominator
        else:
            logger.warning(
                f"Vacancy ({vacancy:.1%}) plus expense ratio ({ratio:.1%}) leave no "
                f"income margin; gross revenue decomposition set to 0"
            )
            gross_revenue = 0.0
        vacancy_loss = gross_revenue * vacancy
        operating_expenses = gross_revenue * ratio

        debt_service = annual_debt_service(
            assumptions.loan_amount,
            assumptions.interest_rate,
            assumptions.loan_term_years,
            assumptions.interest_only,
            assumptions.io_term_months,
            year,
        )
        cash_flow = noi - debt_service

        return YearProjection(
            year=year,
            gross_revenue=gross_revenue,
            vacancy_loss=vacancy_loss,
            effective_gross_income=gross_revenue - vacancy_loss,
            operating_expenses=operating_expenses,
            noi=noi,
            debt_service=debt_service,
            cash_flow_after_debt=cash_flow,
            cash_on_cash=FinancialCalculations.calculate_cash_on_cash(
                cash_flow, assumptions.total_equity_raise
            ),
            dscr=FinancialCalculations.calculate_dscr(noi, debt_service),
        )

    def project(self, assumptions: "DealAssumptions") -> List[YearProjection]:
        """
        Project every year of the hold period, in ascending order.

        Args:
            assumptions: Deal assumptions

        Returns:
            List of YearProjection, one per hold year (length = hold_years)
        """
        if assumptions.total_equity_raise <= 0:
            logger.warning("No equity raise; cash-on-cash returns reported as 0")

        projections = [
            self.project_year(assumptions, year)
            for year in range(1, assumptions.hold_years + 1)
        ]
        for p in projections:
            logger.debug(
                f"Year {p.year}: NOI ${p.noi:,.0f}, debt service ${p.debt_service:,.0f}, "
                f"cash flow ${p.cash_flow_after_debt:,.0f}, DSCR {p.dscr:.2f}x"
            )
        return projections


def projections_to_frame(projections: Sequence[YearProjection]) -> pd.DataFrame:
    """One row per hold year, indexed by Year."""
    df = pd.DataFrame([p.model_dump() for p in projections])
    if df.empty:
        return df
    df.set_index("year", inplace=True)
    df.index.name = "Year"
    return df
