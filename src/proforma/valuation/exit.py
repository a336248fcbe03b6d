# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Exit Analysis - Direct Capitalization Reversion

Values the property at the end of the hold on the final year's NOI:
Exit Value = NOI / Exit Cap Rate

Net proceeds repay the outstanding loan balance and the disposition fee.
The investor IRR is solved over the equity outlay, the positive annual cash
flows and the net proceeds added to the final year.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import EngineSettings, Model, PositiveInt
from ..debt.amortization import loan_balance

if TYPE_CHECKING:
    from ..analysis.projection import YearProjection
    from ..deal.assumptions import DealAssumptions

logger = logging.getLogger(__name__)


def direct_cap_value(noi: float, cap_rate: float) -> float:
    """
    Property value by direct capitalization.

    Returns:
        NOI / cap_rate; 0.0 when the cap rate is not positive

    Example:
        ```python
        direct_cap_value(500_000, 0.06)  # 8,333,333.33
        ```
    """
    if cap_rate <= 0:
        return 0.0
    return noi / cap_rate


def build_irr_cash_flows(
    total_equity: float,
    annual_cash_flows: Sequence[float],
    net_proceeds: float,
) -> List[float]:
    """
    Investor cash flow stream for the IRR.

    [-equity, max(0, cf_1), ..., max(0, cf_n) + net_proceeds]. Negative
    years distribute nothing (no capital calls are modeled). With no annual
    flows the stream is [-equity, net_proceeds].
    """
    flows = [-total_equity] + [max(0.0, cf) for cf in annual_cash_flows]
    if len(flows) == 1:
        flows.append(net_proceeds)
    else:
        flows[-1] += net_proceeds
    return flows


class ExitResult(Model):
    """
    Reversion and whole-hold investor returns.

    Attributes:
        exit_year: Final hold year
        exit_noi: NOI capitalized at exit (final projected year)
        exit_cap_rate: Cap rate applied
        exit_value: Gross sale price
        loan_payoff: Outstanding loan balance repaid at sale
        disposition_fee: Sale fee (exit value * disposition fee rate)
        net_proceeds: Exit value less payoff and fee
        total_cash_flow: Sum of positive annual cash flow after debt
        total_distributions: total_cash_flow + net_proceeds
        total_equity_invested: Equity outlay at acquisition
        equity_multiple: total_distributions / equity (0 without equity)
        irr: Investor IRR
        irr_npv_residual: NPV of the IRR stream at `irr` (near 0 when converged)
    """

    exit_year: PositiveInt
    exit_noi: float
    exit_cap_rate: float
    exit_value: float
    loan_payoff: float
    disposition_fee: float
    net_proceeds: float
    total_cash_flow: float
    total_distributions: float
    total_equity_invested: float
    equity_multiple: float
    irr: float
    irr_npv_residual: float = Field(
        default=0.0, description="Convergence quality of the IRR solve"
    )

    @property
    def profit(self) -> float:
        """Total distributions less equity invested."""
        return self.total_distributions - self.total_equity_invested


class ExitAnalyzer:
    """
    Direct-cap exit valuation and investor return calculation.

    Example:
        ```python
        projections = ProjectionEngine().project(assumptions)
        exit_result = ExitAnalyzer().analyze(assumptions, projections)
        print(f"IRR: {exit_result.irr:.2%}, EM: {exit_result.equity_multiple:.2f}x")
        ```
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()

    def evaluate(
        self,
        assumptions: "DealAssumptions",
        projections: Sequence["YearProjection"],
        exit_noi: float,
        exit_cap_rate: float,
    ) -> ExitResult:
        """
        Value the exit at a given NOI and cap rate.

        Loan payoff and the annual cash flows come from the assumptions and
        projections unchanged, so callers can re-price the exit alone.
        """
        hold_years = assumptions.hold_years
        exit_value = direct_cap_value(exit_noi, exit_cap_rate)
        loan_payoff = loan_balance(
            assumptions.loan_amount,
            assumptions.interest_rate,
            assumptions.loan_term_years,
            assumptions.interest_only,
            assumptions.io_term_months,
            hold_years,
        )
        disposition_fee = exit_value * assumptions.disposition_fee_rate
        net_proceeds = exit_value - loan_payoff - disposition_fee

        annual_cash_flows = [p.cash_flow_after_debt for p in projections]
        total_cash_flow = sum(max(0.0, cf) for cf in annual_cash_flows)
        total_distributions = total_cash_flow + net_proceeds
        equity = assumptions.total_equity_raise

        irr_result = FinancialCalculations.solve_irr(
            build_irr_cash_flows(equity, annual_cash_flows, net_proceeds),
            self.settings.irr,
        )

        return ExitResult(
            exit_year=hold_years,
            exit_noi=exit_noi,
            exit_cap_rate=exit_cap_rate,
            exit_value=exit_value,
            loan_payoff=loan_payoff,
            disposition_fee=disposition_fee,
            net_proceeds=net_proceeds,
            total_cash_flow=total_cash_flow,
            total_distributions=total_distributions,
            total_equity_invested=equity,
            equity_multiple=FinancialCalculations.calculate_equity_multiple(
                total_distributions, equity
            ),
            irr=irr_result.rate,
            irr_npv_residual=irr_result.npv,
        )

    def analyze(
        self,
        assumptions: "DealAssumptions",
        projections: Sequence["YearProjection"],
    ) -> ExitResult:
        """
        Exit at the deal's exit cap rate on the final projected NOI.

        Args:
            assumptions: Deal assumptions
            projections: Ordered year projections for the hold

        Returns:
            ExitResult
        """
        exit_noi = projections[-1].noi if projections else assumptions.pro_forma_noi
        if assumptions.exit_cap_rate <= 0:
            logger.warning(
                f"Exit cap rate {assumptions.exit_cap_rate:.2%} is not positive; "
                f"exit value set to 0"
            )

        result = self.evaluate(
            assumptions, projections, exit_noi, assumptions.exit_cap_rate
        )
        logger.debug(
            f"Exit year {result.exit_year}: value ${result.exit_value:,.0f}, "
            f"payoff ${result.loan_payoff:,.0f}, net ${result.net_proceeds:,.0f}, "
            f"IRR {result.irr:.2%}, EM {result.equity_multiple:.2f}x"
        )
        return result
