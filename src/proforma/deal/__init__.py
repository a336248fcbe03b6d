# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal Structure

Deal assumptions, the LP/GP distribution waterfall and the estimated
depreciation schedule.
"""

from .assumptions import DealAssumptions, WaterfallTier
from .depreciation import DepreciationEstimate, depreciation_to_frame
from .waterfall import (
    WaterfallCumulativeState,
    WaterfallDistribution,
    apply_waterfall,
    distributions_to_frame,
    run_annual_waterfall,
    summarize_distributions,
)

__all__ = [
    # Assumptions
    "DealAssumptions",
    "WaterfallTier",
    # Waterfall
    "WaterfallCumulativeState",
    "WaterfallDistribution",
    "apply_waterfall",
    "distributions_to_frame",
    "run_annual_waterfall",
    "summarize_distributions",
    # Depreciation
    "DepreciationEstimate",
    "depreciation_to_frame",
]
