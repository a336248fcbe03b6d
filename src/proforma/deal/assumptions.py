# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal Assumptions

Immutable inputs for a syndication pro forma: acquisition and capital stack,
loan terms, operating assumptions, exit assumptions and the ordered LP/GP
distribution waterfall.

Example:
    ```python
    assumptions = DealAssumptions(
        purchase_price=32_000_000.0,
        renovation_budget=3_200_000.0,
        closing_costs=640_000.0,
        total_equity_raise=12_800_000.0,
        loan_amount=22_400_000.0,
        interest_rate=0.058,
        current_noi=1_760_000.0,
        pro_forma_noi=2_100_000.0,
        property_type="MULTIFAMILY",
        waterfall_tiers=(
            WaterfallTier(tier_order=1, tier_name="Preferred Return",
                          hurdle_rate=0.08, lp_split=1.0, gp_split=0.0),
            WaterfallTier(tier_order=2, tier_name="Promote",
                          lp_split=0.7, gp_split=0.3),
        ),
    )
    ```
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from pydantic import Field, field_validator

from ..core.primitives import (
    FloatBetween0And1,
    Model,
    PositiveFloat,
    PositiveInt,
    PositiveIntGe1,
    PropertyTypeEnum,
)

logger = logging.getLogger(__name__)

SPLIT_TOLERANCE = 1e-9


class WaterfallTier(Model):
    """
    One rung of the LP/GP distribution waterfall.

    A tier with a positive hurdle rate receives cash until cumulative LP
    distributions reach `total_equity * hurdle_rate`. A tier without a
    hurdle is the residual tier and absorbs all remaining cash.
    """

    tier_order: int = Field(..., description="Evaluation sequence (unique per deal)")
    tier_name: Optional[str] = Field(default=None, description="Display name")
    hurdle_rate: Optional[float] = Field(
        default=None,
        description="Cumulative LP return threshold as a fraction of total equity",
    )
    lp_split: FloatBetween0And1 = Field(..., description="LP share of tier cash")
    gp_split: FloatBetween0And1 = Field(..., description="GP share of tier cash")

    @property
    def name(self) -> str:
        """Display name, defaulting to "Tier {order}"."""
        return self.tier_name or f"Tier {self.tier_order}"

    @property
    def is_residual(self) -> bool:
        """True when the tier has no hurdle and takes all remaining cash."""
        return self.hurdle_rate is None or self.hurdle_rate <= 0

    @property
    def splits_balanced(self) -> bool:
        """Whether lp_split + gp_split == 1 (cash is conserved by the tier)."""
        return abs(self.lp_split + self.gp_split - 1.0) <= SPLIT_TOLERANCE


class DealAssumptions(Model):
    """
    Complete set of assumptions for one pro forma run.

    Missing or zero values are legal and degrade gracefully downstream
    (no loan -> zero debt service, no tiers -> default split, no renovation
    -> stabilized in year 1). Leverage and capital stack balance are never
    rejected here; they are reported by the compliance rules.
    """

    # === Acquisition & Capital Stack ===
    purchase_price: PositiveFloat = Field(default=0.0, description="Purchase price")
    renovation_budget: PositiveFloat = Field(
        default=0.0, description="Total renovation / value-add budget"
    )
    closing_costs: PositiveFloat = Field(default=0.0, description="Closing costs")
    total_equity_raise: PositiveFloat = Field(
        default=0.0, description="Total equity raised from LPs and sponsor"
    )
    sponsor_equity: PositiveFloat = Field(
        default=0.0, description="Sponsor (GP) co-investment included in the raise"
    )

    # === Financing ===
    loan_amount: PositiveFloat = Field(default=0.0, description="Senior loan amount")
    interest_rate: PositiveFloat = Field(
        default=0.0, description="Annual fixed interest rate"
    )
    loan_term_years: PositiveInt = Field(default=30, description="Loan term in years")
    interest_only: bool = Field(default=False, description="Interest-only period flag")
    io_term_months: Optional[PositiveInt] = Field(
        default=None, description="Interest-only period length in months"
    )

    # === Operations ===
    hold_years: PositiveIntGe1 = Field(
        default=5, description="Projected hold period in years"
    )
    current_noi: PositiveFloat = Field(default=0.0, description="In-place NOI")
    pro_forma_noi: PositiveFloat = Field(
        default=0.0, description="Stabilized (pro forma) NOI"
    )
    vacancy_rate: FloatBetween0And1 = Field(default=0.05, description="Vacancy rate")
    rent_growth_rate: float = Field(default=0.03, description="Annual rent growth")
    expense_growth_rate: float = Field(
        default=0.02, description="Annual operating expense growth"
    )
    property_type: PropertyTypeEnum = Field(
        default=PropertyTypeEnum.MULTIFAMILY,
        description="Selects the expense ratio benchmark",
    )

    # === Exit & Distributions ===
    exit_cap_rate: float = Field(default=0.06, description="Exit capitalization rate")
    preferred_return: FloatBetween0And1 = Field(
        default=0.08, description="LP preferred return"
    )
    disposition_fee_rate: FloatBetween0And1 = Field(
        default=0.0, description="Disposition fee as a share of exit value"
    )
    waterfall_tiers: Tuple[WaterfallTier, ...] = Field(
        default=(), description="Distribution waterfall tiers"
    )

    @field_validator("property_type", mode="before")
    @classmethod
    def coerce_property_type(cls, v):
        """Accept any casing; unknown types fall back to OTHER."""
        resolved = PropertyTypeEnum.coerce(v)
        if resolved is PropertyTypeEnum.OTHER and not (
            isinstance(v, str) and v.strip().upper() == PropertyTypeEnum.OTHER.value
        ):
            logger.warning(f"Unknown property type {v!r}; using default benchmarks")
        return resolved

    @field_validator("waterfall_tiers")
    @classmethod
    def validate_unique_tier_order(
        cls, v: Tuple[WaterfallTier, ...]
    ) -> Tuple[WaterfallTier, ...]:
        """Tier order defines the evaluation sequence and must be unique."""
        orders = [tier.tier_order for tier in v]
        if len(orders) != len(set(orders)):
            raise ValueError(f"Waterfall tier orders must be unique, got {orders}")
        return v

    # === Derived Properties ===

    @property
    def hold_period_specified(self) -> bool:
        """Whether the hold period was supplied rather than defaulted."""
        return "hold_years" in self.model_fields_set

    @property
    def total_project_cost(self) -> float:
        """Total uses: purchase price + renovation + closing costs."""
        return self.purchase_price + self.renovation_budget + self.closing_costs

    @property
    def total_sources(self) -> float:
        """Total sources: senior loan + equity raise."""
        return self.loan_amount + self.total_equity_raise

    @property
    def going_in_cap_rate(self) -> float:
        """Current NOI / purchase price (0 without a price)."""
        if self.purchase_price <= 0:
            return 0.0
        return self.current_noi / self.purchase_price

    @property
    def ltv(self) -> float:
        """Loan / purchase price (0 without a price)."""
        if self.purchase_price <= 0:
            return 0.0
        return self.loan_amount / self.purchase_price

    @property
    def lp_equity(self) -> float:
        """Equity contributed by limited partners."""
        return max(0.0, self.total_equity_raise - self.sponsor_equity)

    @property
    def sorted_tiers(self) -> Tuple[WaterfallTier, ...]:
        """Waterfall tiers in evaluation order."""
        return tuple(sorted(self.waterfall_tiers, key=lambda t: t.tier_order))
