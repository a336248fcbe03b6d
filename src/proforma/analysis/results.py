# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Pro forma result container.

Holds every component output of one run and derives the summary return
metrics on demand from those outputs, so no figure is stored twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, List

import numpy as np
import pandas as pd

from ..deal.waterfall import distributions_to_frame, summarize_distributions
from .projection import projections_to_frame

if TYPE_CHECKING:
    from ..compliance.rules import ComplianceCheckResult
    from ..core.primitives import EngineSettings
    from ..deal.assumptions import DealAssumptions
    from ..deal.depreciation import DepreciationEstimate
    from ..deal.waterfall import WaterfallCumulativeState, WaterfallDistribution
    from ..valuation.exit import ExitResult
    from ..valuation.sensitivity import SensitivityScenario
    from .breakeven import BreakevenAnalysis
    from .projection import YearProjection


@dataclass
class ProFormaResults:
    """
    Results from one pro forma run.

    Attributes:
        assumptions: Deal assumptions analyzed
        settings: Engine settings used
        projections: Ordered year projections
        exit_result: Exit valuation and investor returns
        annual_distributions: Waterfall tiers per hold year
        exit_distributions: Waterfall tiers for the exit net proceeds
        waterfall_state: Cumulative LP/GP totals after the exit distribution
        sensitivity: Exit cap rate sensitivity rows
        breakeven: Year-1 breakeven occupancy
        compliance_checks: Advisory checks, in rule order
        depreciation: Estimated cost recovery
    """

    assumptions: "DealAssumptions"
    settings: "EngineSettings"
    projections: List["YearProjection"]
    exit_result: "ExitResult"
    annual_distributions: List[List["WaterfallDistribution"]]
    exit_distributions: List["WaterfallDistribution"]
    waterfall_state: "WaterfallCumulativeState"
    sensitivity: List["SensitivityScenario"]
    breakeven: "BreakevenAnalysis"
    compliance_checks: List["ComplianceCheckResult"]
    depreciation: "DepreciationEstimate"

    # === Return summary ===

    @property
    def irr(self) -> float:
        return self.exit_result.irr

    @property
    def equity_multiple(self) -> float:
        return self.exit_result.equity_multiple

    @property
    def total_cash_flow(self) -> float:
        """Sum of positive annual cash flow after debt service."""
        return self.exit_result.total_cash_flow

    @property
    def net_proceeds(self) -> float:
        return self.exit_result.net_proceeds

    @property
    def total_return(self) -> float:
        """Annual distributions plus net exit proceeds."""
        return self.exit_result.total_distributions

    @property
    def average_cash_on_cash(self) -> float:
        if not self.projections:
            return 0.0
        return float(np.mean([p.cash_on_cash for p in self.projections]))

    @property
    def average_dscr(self) -> float:
        if not self.projections:
            return 0.0
        return float(np.mean([p.dscr for p in self.projections]))

    @property
    def going_in_cap_rate(self) -> float:
        return self.assumptions.going_in_cap_rate

    @property
    def ltv(self) -> float:
        return self.assumptions.ltv

    @property
    def total_project_cost(self) -> float:
        return self.assumptions.total_project_cost

    @property
    def preferred_return(self) -> float:
        return self.assumptions.preferred_return

    # === Waterfall totals ===

    @cached_property
    def annual_lp_gp_totals(self) -> tuple[float, float]:
        """(LP, GP) distributed from annual cash flow."""
        lp_total = gp_total = 0.0
        for distributions in self.annual_distributions:
            lp, gp = summarize_distributions(distributions)
            lp_total += lp
            gp_total += gp
        return lp_total, gp_total

    @cached_property
    def exit_lp_gp_totals(self) -> tuple[float, float]:
        """(LP, GP) distributed from the exit net proceeds."""
        return summarize_distributions(self.exit_distributions)

    @property
    def total_lp_distributions(self) -> float:
        return self.waterfall_state.cumulative_lp

    @property
    def total_gp_distributions(self) -> float:
        return self.waterfall_state.cumulative_gp

    # === Compliance ===

    @property
    def failed_checks(self) -> List["ComplianceCheckResult"]:
        return [c for c in self.compliance_checks if not c.passed]

    @property
    def all_checks_passed(self) -> bool:
        return not self.failed_checks

    # === Tables ===

    @cached_property
    def projection_df(self) -> pd.DataFrame:
        """Year projections indexed by Year."""
        return projections_to_frame(self.projections)

    @cached_property
    def waterfall_df(self) -> pd.DataFrame:
        """Annual and exit distributions in long form; exit rows have Period 'Exit'."""
        years = [p.year for p in self.projections]
        annual = distributions_to_frame(self.annual_distributions, years)
        exit_rows = distributions_to_frame([self.exit_distributions], ["Exit"])
        if annual.empty:
            return exit_rows
        return pd.concat([annual, exit_rows], ignore_index=True)
