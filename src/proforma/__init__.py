# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma - Syndication Pro Forma Engine

Deterministic year-by-year projections for real estate syndication deals:
NOI, debt amortization with interest-only periods, a cumulative-hurdle LP/GP
distribution waterfall, IRR, direct-cap exit analysis, exit cap sensitivity,
breakeven occupancy and advisory underwriting checks.

Key Entry Points:
- proforma.analysis.run() - Complete pro forma with strongly-typed results
- proforma.deal.* - Deal assumptions and the distribution waterfall
- proforma.debt.* - Loan amortization
- proforma.valuation.* - Exit valuation and sensitivity
- proforma.compliance.* - Underwriting checks
- proforma.reporting.* - Presentation tables

Example Usage:
    ```python
    from proforma.analysis import run
    from proforma.deal import DealAssumptions, WaterfallTier

    assumptions = DealAssumptions(
        purchase_price=10_000_000.0,
        total_equity_raise=3_500_000.0,
        loan_amount=7_000_000.0,
        interest_rate=0.06,
        current_noi=600_000.0,
        pro_forma_noi=650_000.0,
        hold_years=5,
    )
    results = run(assumptions)
    print(f"IRR: {results.irr:.2%}")
    ```
"""

import importlib
import logging

# Libraries leave handler configuration to the application.
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "analysis",
    "compliance",
    "core",
    "deal",
    "debt",
    "reporting",
    "valuation",
]


_LAZY_MODULES = {
    "analysis": "proforma.analysis",
    "compliance": "proforma.compliance",
    "core": "proforma.core",
    "deal": "proforma.deal",
    "debt": "proforma.debt",
    "reporting": "proforma.reporting",
    "valuation": "proforma.valuation",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'proforma' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
