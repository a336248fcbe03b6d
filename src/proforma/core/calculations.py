# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial calculation functions.

Contains the Newton-Raphson IRR solver and static methods for core financial
metrics. These functions are pure (math-only); other modules delegate to them
to keep a single source of truth for financial calculations.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Union

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from .primitives import IRRSettings

logger = logging.getLogger(__name__)

CashFlows = Union[Sequence[float], np.ndarray, pd.Series]

# Iterates outside (IRR_LOWER_BOUND, IRR_UPPER_BOUND) are pulled back to the
# matching reset value.
IRR_LOWER_BOUND = -0.99
IRR_UPPER_BOUND = 10.0
IRR_LOWER_RESET = -0.5
IRR_UPPER_RESET = 5.0
DERIVATIVE_FLOOR = 1e-10


@dataclass(frozen=True)
class IRRResult:
    """
    Outcome of an IRR solve.

    Attributes:
        rate: Best rate reached (always inside [-0.99, 10])
        npv: NPV of the stream at `rate`; the convergence-quality signal
        iterations: Newton steps taken
        converged: True when |npv| fell below the tolerance
    """

    rate: float
    npv: float
    iterations: int
    converged: bool


def _as_array(cash_flows: CashFlows) -> np.ndarray:
    if isinstance(cash_flows, pd.Series):
        return cash_flows.to_numpy(dtype=float)
    return np.asarray(list(cash_flows), dtype=float)


def _npv_and_derivative(rate: float, flows: np.ndarray) -> tuple[float, float]:
    periods = np.arange(len(flows), dtype=float)
    npv = float(np.sum(flows / np.power(1.0 + rate, periods)))
    derivative = float(
        -np.sum(periods[1:] * flows[1:] / np.power(1.0 + rate, periods[1:] + 1.0))
    )
    return npv, derivative


def solve_irr(
    cash_flows: CashFlows,
    max_iterations: int = 100,
    tolerance: float = 0.0001,
    guess: float = 0.10,
) -> IRRResult:
    """
    Solve for the internal rate of return of an annual cash flow stream.

    Newton-Raphson on NPV(r) = Σ CF_t / (1+r)^t with the analytic derivative
    dNPV/dr = -Σ t·CF_t / (1+r)^(t+1). Index 0 is the initial outlay.

    The solver is best effort: it never raises for non-convergence. When the
    derivative vanishes (|d| < 1e-10) iteration stops and the current rate is
    returned. Iterates below -0.99 reset to -0.5 and iterates above 10 reset
    to 5, so the returned rate is always inside [-0.99, 10].

    Args:
        cash_flows: Ordered annual cash flows (at least two)
        max_iterations: Iteration budget
        tolerance: Convergence tolerance on |NPV|
        guess: Starting rate

    Returns:
        IRRResult; rate 0.0 when fewer than two flows are supplied

    Example:
        ```python
        result = solve_irr([-100, 110])
        print(f"IRR: {result.rate:.2%}")  # IRR: 10.00%
        ```
    """
    flows = _as_array(cash_flows)
    if len(flows) < 2:
        return IRRResult(rate=0.0, npv=0.0, iterations=0, converged=False)

    rate = float(guess)
    npv = 0.0
    iterations = 0

    for iterations in range(1, max_iterations + 1):
        npv, derivative = _npv_and_derivative(rate, flows)

        if abs(npv) < tolerance:
            return IRRResult(rate=rate, npv=npv, iterations=iterations, converged=True)
        if abs(derivative) < DERIVATIVE_FLOOR:
            logger.debug(f"IRR derivative vanished at rate {rate:.6f}; stopping")
            break

        next_rate = rate - npv / derivative
        if not math.isfinite(next_rate):
            logger.debug(f"IRR step produced {next_rate}; keeping rate {rate:.6f}")
            break
        rate = next_rate

        if rate < IRR_LOWER_BOUND:
            rate = IRR_LOWER_RESET
        if rate > IRR_UPPER_BOUND:
            rate = IRR_UPPER_RESET

    npv, _ = _npv_and_derivative(rate, flows)
    converged = abs(npv) < tolerance
    if not converged:
        logger.debug(
            f"IRR did not converge after {iterations} iterations "
            f"(rate={rate:.6f}, |npv|={abs(npv):.4f})"
        )
    return IRRResult(rate=rate, npv=npv, iterations=iterations, converged=converged)


class FinancialCalculations:
    """
    Pure mathematical functions for financial calculations.

    Static methods for core financial metrics, independent of deal structure
    or business logic.
    """

    @staticmethod
    def calculate_irr(
        cash_flows: CashFlows, settings: Optional["IRRSettings"] = None
    ) -> float:
        """
        Calculate Internal Rate of Return with the Newton-Raphson solver.

        Args:
            cash_flows: Ordered annual cash flows; index 0 = initial outlay
                       (negative), later values = returns
            settings: Optional solver parameters

        Returns:
            IRR as decimal (e.g., 0.15 for 15%); a best-effort estimate,
            0.0 for fewer than two flows

        Example:
            ```python
            irr = FinancialCalculations.calculate_irr([-1000, 100, 100, 1200])
            print(f"IRR: {irr:.2%}")  # IRR: 12.94%
            ```
        """
        return FinancialCalculations.solve_irr(cash_flows, settings).rate

    @staticmethod
    def solve_irr(
        cash_flows: CashFlows, settings: Optional["IRRSettings"] = None
    ) -> IRRResult:
        """Solve IRR and return the rate with its convergence quality."""
        if settings is None:
            return solve_irr(cash_flows)
        return solve_irr(
            cash_flows,
            max_iterations=settings.max_iterations,
            tolerance=settings.tolerance,
            guess=settings.initial_guess,
        )

    @staticmethod
    def calculate_npv(cash_flows: CashFlows, discount_rate: float) -> Optional[float]:
        """
        Calculate Net Present Value of an annual cash flow stream.

        Args:
            cash_flows: Ordered annual cash flows; index 0 is undiscounted
            discount_rate: Annual discount rate as decimal (e.g., 0.10 for 10%)

        Returns:
            NPV as float or None for an empty stream or a rate <= -1

        Example:
            ```python
            npv = FinancialCalculations.calculate_npv([-1000, 300, 400, 500], 0.10)
            print(f"NPV: ${npv:,.0f}")  # NPV: $-21
            ```
        """
        flows = _as_array(cash_flows)
        if len(flows) == 0 or discount_rate <= -1:
            return None
        npv, _ = _npv_and_derivative(discount_rate, flows)
        return npv

    @staticmethod
    def calculate_equity_multiple(
        total_distributions: float, total_equity: float
    ) -> float:
        """
        Calculate equity multiple (total returned / equity invested).

        Returns:
            Multiple as float (e.g., 2.5 for 2.5x); 0.0 when no equity invested
        """
        if total_equity <= 0:
            return 0.0
        return total_distributions / total_equity

    @staticmethod
    def calculate_dscr(noi: float, debt_service: float) -> float:
        """
        Calculate single-period Debt Service Coverage Ratio.

        DSCR = NOI / Debt Service, with debt service expressed as a positive
        annual amount.

        Returns:
            DSCR ratio; 0.0 when there is no debt service

        Example:
            ```python
            dscr = FinancialCalculations.calculate_dscr(125_000, 100_000)
            print(f"DSCR: {dscr:.2f}x")  # DSCR: 1.25x
            ```
        """
        if debt_service <= 0:
            return 0.0
        return noi / debt_service

    @staticmethod
    def calculate_cash_on_cash(cash_flow: float, equity: float) -> float:
        """Cash flow after debt service divided by equity; 0.0 without equity."""
        if equity <= 0:
            return 0.0
        return cash_flow / equity
