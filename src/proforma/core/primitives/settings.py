# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Dict, Tuple

from pydantic import Field, field_validator, model_validator

from .enums import PropertyTypeEnum
from .model import Model
from .types import FloatBetween0And1, PositiveFloat, PositiveInt


class WaterfallSettings(Model):
    """Fallback LP/GP split used when no tier set applies."""

    default_lp_split: FloatBetween0And1 = Field(
        default=0.70,
        description="LP share of cash distributed under the default split.",
    )
    default_gp_split: FloatBetween0And1 = Field(
        default=0.30,
        description="GP share of cash distributed under the default split.",
    )

    @model_validator(mode="after")
    def check_default_split_sums_to_one(self) -> "WaterfallSettings":
        """The default split must conserve cash."""
        total = self.default_lp_split + self.default_gp_split
        if abs(total - 1.0) > 1e-9:
            raise ValueError(
                f"Default LP/GP split must sum to 1.0, got {total:.4f}"
            )
        return self


class IRRSettings(Model):
    """Newton-Raphson parameters for the IRR solver."""

    max_iterations: PositiveInt = Field(
        default=100, description="Iteration budget before returning best effort."
    )
    tolerance: PositiveFloat = Field(
        default=0.0001, description="Convergence tolerance on |NPV|."
    )
    initial_guess: float = Field(default=0.10, description="Starting rate.")


class ComplianceSettings(Model):
    """
    Thresholds for the advisory compliance rule set.

    Usage Examples:
        # Standard underwriting thresholds
        compliance = ComplianceSettings()

        # Stricter lender
        compliance = ComplianceSettings(min_dscr=1.35, max_ltv=0.65)
    """

    min_dscr: PositiveFloat = Field(
        default=1.25, description="Minimum year-1 debt service coverage ratio."
    )
    max_ltv: FloatBetween0And1 = Field(
        default=0.75, description="Maximum loan-to-value ratio."
    )
    breakeven_favorable: FloatBetween0And1 = Field(
        default=0.85, description="Breakeven occupancy below this is favorable."
    )
    breakeven_acceptable: FloatBetween0And1 = Field(
        default=0.90, description="Breakeven occupancy below this is acceptable."
    )
    max_capital_stack_gap: FloatBetween0And1 = Field(
        default=0.05,
        description="Maximum |sources - uses| / uses before the stack is unbalanced.",
    )
    irr_floor: float = Field(default=-0.20, description="Lowest plausible IRR.")
    irr_ceiling: float = Field(default=1.00, description="Highest plausible IRR.")

    @model_validator(mode="after")
    def check_threshold_ordering(self) -> "ComplianceSettings":
        """Ensure paired thresholds are ordered."""
        if self.breakeven_favorable > self.breakeven_acceptable:
            raise ValueError(
                "breakeven_favorable must not exceed breakeven_acceptable"
            )
        if self.irr_floor >= self.irr_ceiling:
            raise ValueError("irr_floor must be below irr_ceiling")
        return self


class SensitivitySettings(Model):
    """Exit cap rate perturbations (absolute) swept by the sensitivity table."""

    cap_rate_deltas: Tuple[float, ...] = Field(
        default=(-0.01, -0.005, 0.0, 0.005, 0.01, 0.015, 0.02),
        description="Absolute deltas added to the base exit cap rate.",
    )

    @field_validator("cap_rate_deltas")
    @classmethod
    def sort_deltas(cls, v: Tuple[float, ...]) -> Tuple[float, ...]:
        """Keep the table ordered from lowest to highest cap rate."""
        return tuple(sorted(v))


class DepreciationSettings(Model):
    """Cost recovery assumptions for the estimated depreciation schedule."""

    land_value_ratio: FloatBetween0And1 = Field(
        default=0.20, description="Share of purchase price allocated to land."
    )
    residential_life_years: PositiveFloat = Field(
        default=27.5, description="Recovery period for residential rental property."
    )
    commercial_life_years: PositiveFloat = Field(
        default=39.0, description="Recovery period for nonresidential real property."
    )
    bonus_depreciation_rate: FloatBetween0And1 = Field(
        default=1.0, description="First-year bonus depreciation share of basis."
    )
    cost_segregation_threshold: PositiveFloat = Field(
        default=1_000_000.0,
        description="Purchase price above which a cost segregation study is recommended.",
    )


# --- Main Engine Settings Class ---


class EngineSettings(Model):
    """Engine-wide settings

    Caller-owned configuration passed by parameter into every component.
    The defaults reproduce the reference benchmarks; no component keeps
    module-level mutable state.
    """

    waterfall: WaterfallSettings = Field(default_factory=WaterfallSettings)
    irr: IRRSettings = Field(default_factory=IRRSettings)
    compliance: ComplianceSettings = Field(default_factory=ComplianceSettings)
    sensitivity: SensitivitySettings = Field(default_factory=SensitivitySettings)
    depreciation: DepreciationSettings = Field(default_factory=DepreciationSettings)
    expense_ratio_overrides: Dict[PropertyTypeEnum, FloatBetween0And1] = Field(
        default_factory=dict,
        description="Per property type replacements for the expense ratio benchmark.",
    )
