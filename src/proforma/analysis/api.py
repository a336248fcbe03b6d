# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Pro Forma Analysis API

Public entry point running the full engine for one deal and returning a
`ProFormaResults` container.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..core.primitives import EngineSettings
from ..deal.depreciation import DepreciationEstimate
from ..deal.waterfall import apply_waterfall, run_annual_waterfall
from ..valuation.exit import ExitAnalyzer
from ..valuation.sensitivity import SensitivityAnalyzer
from .breakeven import BreakevenAnalysis
from .projection import ProjectionEngine
from .results import ProFormaResults

if TYPE_CHECKING:
    from ..deal.assumptions import DealAssumptions

logger = logging.getLogger(__name__)


def run(
    assumptions: "DealAssumptions",
    settings: Optional[EngineSettings] = None,
) -> ProFormaResults:
    """
    Run the pro forma for one deal.

    Workflow:
      1) Project NOI, debt service and cash flow for each hold year
      2) Value the exit and solve the investor IRR
      3) Distribute each year's positive cash flow through the waterfall,
         threading one cumulative state through the years
      4) Distribute the exit net proceeds, continuing the same state
      5) Sweep the exit cap rate sensitivity table
      6) Measure year-1 breakeven occupancy
      7) Evaluate the advisory compliance checks
      8) Estimate depreciation

    Args:
        assumptions: Deal assumptions.
        settings: Engine settings; defaults reproduce the standard benchmarks.

    Returns:
        ProFormaResults with every component output and the summary metrics.

    Example:
        ```python
        results = run(assumptions)
        print(f"IRR: {results.irr:.2%}, EM: {results.equity_multiple:.2f}x")
        ```
    """
    from ..compliance.rules import ComplianceRuleEngine  # noqa: PLC0415

    settings = settings or EngineSettings()

    # Step 1: Year-by-year projections
    projections = ProjectionEngine(settings).project(assumptions)

    # Step 2: Exit valuation and IRR
    exit_result = ExitAnalyzer(settings).analyze(assumptions, projections)

    # Step 3: Annual distributions (negative years distribute nothing)
    tiers = assumptions.sorted_tiers
    annual_distributions, state = run_annual_waterfall(
        [p.distributable_cash for p in projections],
        tiers,
        assumptions.preferred_return,
        assumptions.total_equity_raise,
        settings=settings.waterfall,
    )

    # Step 4: Exit distribution continues the cumulative hurdle tracking
    exit_distributions = apply_waterfall(
        max(0.0, exit_result.net_proceeds),
        tiers,
        assumptions.preferred_return,
        assumptions.total_equity_raise,
        cumulative_state=state,
        settings=settings.waterfall,
    )

    # Step 5-8: Sensitivity, breakeven, compliance, depreciation
    sensitivity = SensitivityAnalyzer(settings).analyze(
        assumptions, projections, exit_result
    )
    breakeven = BreakevenAnalysis.from_projection(projections[0], settings.compliance)
    compliance_checks = ComplianceRuleEngine(settings).evaluate(
        assumptions, projections, exit_result
    )
    depreciation = DepreciationEstimate.from_assumptions(
        assumptions, settings.depreciation
    )

    logger.info(
        f"Pro forma complete: {assumptions.hold_years}-year hold, "
        f"IRR {exit_result.irr:.2%}, EM {exit_result.equity_multiple:.2f}x, "
        f"{sum(c.passed for c in compliance_checks)}/{len(compliance_checks)} checks passed"
    )

    return ProFormaResults(
        assumptions=assumptions,
        settings=settings,
        projections=projections,
        exit_result=exit_result,
        annual_distributions=annual_distributions,
        exit_distributions=exit_distributions,
        waterfall_state=state,
        sensitivity=sensitivity,
        breakeven=breakeven,
        compliance_checks=compliance_checks,
        depreciation=depreciation,
    )
