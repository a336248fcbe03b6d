# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Estimated cost recovery for the acquired building.

Straight-line depreciation over 27.5 years (residential rental property) or
39 years (nonresidential real property) on the purchase price less an
estimated land allocation, plus first-year bonus depreciation.
Illustrative only; actual allocations come from an appraisal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np
import pandas as pd

from ..core.primitives import DepreciationSettings, Model, PositiveFloat

if TYPE_CHECKING:
    from .assumptions import DealAssumptions


class DepreciationEstimate(Model):
    """Depreciable basis and annual deductions for one acquisition."""

    purchase_price: PositiveFloat
    is_residential: bool
    recovery_period_years: PositiveFloat
    land_value: PositiveFloat
    depreciable_basis: PositiveFloat
    annual_depreciation: PositiveFloat
    bonus_depreciation_year_1: PositiveFloat
    remaining_basis_after_bonus: PositiveFloat
    cost_segregation_recommended: bool

    @classmethod
    def from_assumptions(
        cls,
        assumptions: "DealAssumptions",
        settings: Optional[DepreciationSettings] = None,
    ) -> "DepreciationEstimate":
        """Estimate depreciation from the deal's price and property type."""
        settings = settings or DepreciationSettings()
        price = assumptions.purchase_price
        residential = assumptions.property_type.is_residential
        life = (
            settings.residential_life_years
            if residential
            else settings.commercial_life_years
        )

        land_value = price * settings.land_value_ratio
        basis = price - land_value
        bonus = basis * settings.bonus_depreciation_rate

        return cls(
            purchase_price=price,
            is_residential=residential,
            recovery_period_years=life,
            land_value=land_value,
            depreciable_basis=basis,
            annual_depreciation=basis / life if life > 0 else 0.0,
            bonus_depreciation_year_1=bonus,
            remaining_basis_after_bonus=basis - bonus,
            cost_segregation_recommended=price > settings.cost_segregation_threshold,
        )


def depreciation_to_frame(estimate: DepreciationEstimate, years: int) -> pd.DataFrame:
    """
    Straight-line schedule (no bonus) for the first `years` years.

    Columns: Depreciation, Accumulated Depreciation, Remaining Basis;
    indexed by Year. Deductions stop once the basis is fully recovered.
    """
    year_index = np.arange(1, years + 1)
    accumulated = np.minimum(
        estimate.annual_depreciation * year_index, estimate.depreciable_basis
    )
    annual = np.diff(np.concatenate(([0.0], accumulated)))

    df = pd.DataFrame(
        {
            "Year": year_index,
            "Depreciation": annual,
            "Accumulated Depreciation": accumulated,
            "Remaining Basis": estimate.depreciable_basis - accumulated,
        }
    )
    df.set_index("Year", inplace=True)
    return df
