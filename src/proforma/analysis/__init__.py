# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma Analysis Engine

Year-by-year projections, breakeven analysis and the `run` entry point that
orchestrates a complete pro forma.
"""

from .api import run
from .breakeven import (
    BreakevenAnalysis,
    assess_breakeven,
    breakeven_occupancy,
)
from .projection import (
    EXPENSE_RATIOS,
    ProjectionEngine,
    YearProjection,
    expense_ratio,
    projections_to_frame,
    stabilization_year,
)
from .results import ProFormaResults

__all__ = [
    # Main API function
    "run",
    # Results
    "ProFormaResults",
    # Projections
    "EXPENSE_RATIOS",
    "ProjectionEngine",
    "YearProjection",
    "expense_ratio",
    "projections_to_frame",
    "stabilization_year",
    # Breakeven
    "BreakevenAnalysis",
    "assess_breakeven",
    "breakeven_occupancy",
]
