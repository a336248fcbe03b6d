# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Loan amortization calculations"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pandas as pd
from pydantic import Field
from pyxirr import pmt

from ..core.primitives import Model, PositiveFloat, PositiveInt

logger = logging.getLogger(__name__)


def _io_months(interest_only: bool, io_term_months: Optional[int]) -> int:
    if not interest_only or not io_term_months:
        return 0
    return io_term_months


def monthly_payment(loan_amount: float, annual_rate: float, term_years: int) -> float:
    """
    Level monthly payment that fully amortizes `loan_amount` over the full term.

    M = P * r(1+r)^n / ((1+r)^n - 1), with r = annual_rate / 12 and
    n = term_years * 12. A zero rate spreads principal evenly.
    """
    total_months = term_years * 12
    if loan_amount <= 0 or total_months <= 0:
        return 0.0
    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return loan_amount / total_months
    return -pmt(monthly_rate, total_months, loan_amount)


def annual_debt_service(
    loan_amount: float,
    annual_rate: float,
    term_years: int,
    interest_only: bool,
    io_term_months: Optional[int],
    year: int,
) -> float:
    """
    Annual debt service for a fixed-rate loan in a given hold year (1-based).

    - No loan or a non-positive rate: 0.
    - Years fully inside the interest-only window (year <= io_months / 12):
      interest only, loan_amount * annual_rate.
    - Otherwise the level payment over the full original term, times 12.
    - Once the years already paid cover the whole term: 0.

    Args:
        loan_amount: Original principal
        annual_rate: Annual interest rate as decimal
        term_years: Original loan term in years
        interest_only: Whether the loan has an interest-only period
        io_term_months: Length of the interest-only period in months
        year: Hold year (1-based)

    Returns:
        Annual debt service amount (positive)
    """
    if loan_amount <= 0 or annual_rate <= 0:
        return 0.0

    io_years = _io_months(interest_only, io_term_months) / 12
    if interest_only and year <= io_years:
        return loan_amount * annual_rate

    elapsed_months = (year - 1) * 12
    if elapsed_months >= term_years * 12:
        return 0.0

    return monthly_payment(loan_amount, annual_rate, term_years) * 12


def loan_balance(
    loan_amount: float,
    annual_rate: float,
    term_years: int,
    interest_only: bool,
    io_term_months: Optional[int],
    at_year: int,
) -> float:
    """
    Remaining principal at the end of hold year `at_year`.

    While the interest-only window still covers `at_year` the original
    balance is returned unchanged. Afterwards the closed-form balance after
    m amortizing payments is used:

        B = P(1+r)^m - M((1+r)^m - 1) / r

    floored at 0, where M is the full-term level payment. With a zero rate
    the balance declines linearly, P - (P/n) * m.
    """
    if loan_amount <= 0:
        return 0.0

    io_months = _io_months(interest_only, io_term_months)
    total_months = at_year * 12

    if interest_only and total_months <= io_months:
        return loan_amount

    amortizing_months = max(0, total_months - io_months) if interest_only else total_months
    if amortizing_months <= 0:
        return loan_amount

    n = term_years * 12
    if n <= 0:
        return 0.0

    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return max(0.0, loan_amount - (loan_amount / n) * amortizing_months)

    payment = monthly_payment(loan_amount, annual_rate, term_years)
    growth = (1 + monthly_rate) ** amortizing_months
    balance = loan_amount * growth - payment * ((growth - 1) / monthly_rate)
    return max(0.0, balance)


class LoanAmortization(Model):
    """
    Fixed-rate loan with an optional interest-only period.

    Wraps `annual_debt_service` and `loan_balance` for one set of loan terms
    and builds annual schedules for reporting.

    Attributes:
        loan_amount (PositiveFloat): Original principal
        annual_rate (float): Annual interest rate, strictly positive
        term_years (PositiveInt): Loan term in years
        interest_only (bool): Whether the loan starts with an interest-only period
        io_term_months (Optional[PositiveInt]): Interest-only period in months

    Examples:
        >>> # Standard fully amortizing loan
        >>> loan = LoanAmortization(loan_amount=1_000_000.0, annual_rate=0.06, term_years=30)
        >>> round(loan.annual_debt_service(1), 2)
        71946.06

        >>> # 3-year interest-only period
        >>> io_loan = LoanAmortization(
        ...     loan_amount=1_000_000.0,
        ...     annual_rate=0.06,
        ...     term_years=10,
        ...     interest_only=True,
        ...     io_term_months=36,
        ... )
        >>> io_loan.balance_at(3)
        1000000.0
    """

    loan_amount: PositiveFloat
    annual_rate: float = Field(gt=0)
    term_years: PositiveInt = 30
    interest_only: bool = False
    io_term_months: Optional[PositiveInt] = Field(
        default=None,
        description="Number of initial months with interest-only payments",
    )

    @property
    def io_months(self) -> int:
        """Effective interest-only months (0 when not interest-only)."""
        return _io_months(self.interest_only, self.io_term_months)

    @property
    def monthly_payment(self) -> float:
        """Level amortizing payment over the full original term."""
        return monthly_payment(self.loan_amount, self.annual_rate, self.term_years)

    def annual_debt_service(self, year: int) -> float:
        """Debt service paid in hold year `year` (1-based)."""
        return annual_debt_service(
            self.loan_amount,
            self.annual_rate,
            self.term_years,
            self.interest_only,
            self.io_term_months,
            year,
        )

    def balance_at(self, year: int) -> float:
        """Remaining principal at the end of hold year `year`."""
        return loan_balance(
            self.loan_amount,
            self.annual_rate,
            self.term_years,
            self.interest_only,
            self.io_term_months,
            year,
        )

    def annual_schedule(self, years: Optional[int] = None) -> pd.DataFrame:
        """
        Build a year-by-year debt schedule.

        Principal is the change in balance over the year and interest is
        the remainder of debt service.

        Args:
            years: Number of years to schedule (defaults to the loan term)

        Returns:
            DataFrame indexed by Year with columns:
                - Begin Balance
                - Debt Service
                - Interest
                - Principal
                - End Balance
        """
        years = self.term_years if years is None else years
        year_index = np.arange(1, years + 1)

        begin = np.array([self.balance_at(y - 1) for y in year_index], dtype=float)
        end = np.array([self.balance_at(y) for y in year_index], dtype=float)
        debt_service = np.array(
            [self.annual_debt_service(y) for y in year_index], dtype=float
        )
        principal = begin - end

        df = pd.DataFrame(
            {
                "Year": year_index,
                "Begin Balance": begin,
                "Debt Service": debt_service,
                "Interest": debt_service - principal,
                "Principal": principal,
                "End Balance": end,
            }
        )
        df.set_index("Year", inplace=True)
        logger.debug(
            f"Built {years}-year schedule for ${self.loan_amount:,.0f} loan "
            f"at {self.annual_rate:.3%} (IO months: {self.io_months})"
        )
        return df
