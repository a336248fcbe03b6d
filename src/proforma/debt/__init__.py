# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .amortization import (
    LoanAmortization,
    annual_debt_service,
    loan_balance,
    monthly_payment,
)

__all__ = [
    "LoanAmortization",
    # Payment calculations
    "annual_debt_service",
    "loan_balance",
    "monthly_payment",
]
