# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Breakeven occupancy analysis.

Breakeven occupancy is the share of gross potential revenue needed to cover
operating expenses plus debt service. Measured on the first projected year.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import Field

from ..core.primitives import (
    BreakevenAssessmentEnum,
    ComplianceSettings,
    Model,
    PositiveInt,
)

if TYPE_CHECKING:
    from .projection import YearProjection


def breakeven_occupancy(
    gross_revenue: float, operating_expenses: float, debt_service: float
) -> float:
    """
    (Operating expenses + debt service) / gross revenue.

    Returns:
        Breakeven occupancy as decimal; 0.0 without gross revenue
    """
    if gross_revenue <= 0:
        return 0.0
    return (operating_expenses + debt_service) / gross_revenue


def assess_breakeven(
    ratio: float, settings: Optional[ComplianceSettings] = None
) -> BreakevenAssessmentEnum:
    """Grade a breakeven occupancy against the favorable/acceptable thresholds."""
    settings = settings or ComplianceSettings()
    if ratio < settings.breakeven_favorable:
        return BreakevenAssessmentEnum.FAVORABLE
    if ratio < settings.breakeven_acceptable:
        return BreakevenAssessmentEnum.ACCEPTABLE
    return BreakevenAssessmentEnum.ELEVATED


class BreakevenAnalysis(Model):
    """Year-1 breakeven occupancy with its qualitative grade."""

    year: PositiveInt = Field(default=1)
    gross_revenue: float
    operating_expenses: float
    debt_service: float
    breakeven_occupancy: float
    assessment: BreakevenAssessmentEnum

    @property
    def margin_of_safety(self) -> float:
        """Occupancy headroom above breakeven (1 - breakeven)."""
        return 1.0 - self.breakeven_occupancy

    @classmethod
    def from_projection(
        cls,
        projection: "YearProjection",
        settings: Optional[ComplianceSettings] = None,
    ) -> "BreakevenAnalysis":
        """Build the analysis from one projected year (normally year 1)."""
        ratio = breakeven_occupancy(
            projection.gross_revenue,
            projection.operating_expenses,
            projection.debt_service,
        )
        return cls(
            year=projection.year,
            gross_revenue=projection.gross_revenue,
            operating_expenses=projection.operating_expenses,
            debt_service=projection.debt_service,
            breakeven_occupancy=ratio,
            assessment=assess_breakeven(ratio, settings),
        )
