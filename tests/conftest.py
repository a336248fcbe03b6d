# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for Proforma testing.

Provides ready-made deals and waterfall structures so individual tests only
spell out the inputs they actually exercise.
"""

from __future__ import annotations

import pytest

from proforma.core.primitives import EngineSettings
from proforma.deal import DealAssumptions, WaterfallTier


# Waterfall Utilities
def pref_and_promote_tiers(
    pref_rate: float = 0.08, lp_split: float = 0.70, gp_split: float = 0.30
) -> tuple[WaterfallTier, ...]:
    """
    Standard two-tier structure: 100% to LPs until the preferred return is
    met, then an LP/GP promote split on everything above it.
    """
    return (
        WaterfallTier(
            tier_order=1,
            tier_name="Preferred Return",
            hurdle_rate=pref_rate,
            lp_split=1.0,
            gp_split=0.0,
        ),
        WaterfallTier(
            tier_order=2,
            tier_name="Promote",
            lp_split=lp_split,
            gp_split=gp_split,
        ),
    )


def create_all_cash_deal(
    price: float = 10_000_000.0,
    noi: float = 600_000.0,
    hold_years: int = 1,
    exit_cap_rate: float = 0.06,
    **overrides,
) -> DealAssumptions:
    """
    Unlevered, stabilized deal whose equity equals the purchase price.

    With the defaults the exit value equals the price and the one-year IRR
    equals the cap rate, which makes hand-checked expectations trivial.
    """
    params = dict(
        purchase_price=price,
        total_equity_raise=price,
        current_noi=noi,
        pro_forma_noi=noi,
        hold_years=hold_years,
        exit_cap_rate=exit_cap_rate,
    )
    params.update(overrides)
    return DealAssumptions(**params)


@pytest.fixture
def all_cash_deal():
    """Factory fixture for `create_all_cash_deal`."""
    return create_all_cash_deal


@pytest.fixture
def engine_settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def waterfall_tiers() -> tuple[WaterfallTier, ...]:
    return pref_and_promote_tiers()


@pytest.fixture
def value_add_assumptions(waterfall_tiers) -> DealAssumptions:
    """
    Value-add multifamily deal with a two-year interest-only loan.

    Sources equal uses (7.0M loan + 4.2M equity = 10.0M + 1.0M + 0.2M).
    """
    return DealAssumptions(
        purchase_price=10_000_000.0,
        renovation_budget=1_000_000.0,
        closing_costs=200_000.0,
        total_equity_raise=4_200_000.0,
        sponsor_equity=200_000.0,
        loan_amount=7_000_000.0,
        interest_rate=0.06,
        loan_term_years=30,
        interest_only=True,
        io_term_months=24,
        hold_years=5,
        current_noi=550_000.0,
        pro_forma_noi=700_000.0,
        vacancy_rate=0.05,
        rent_growth_rate=0.03,
        expense_growth_rate=0.02,
        property_type="MULTIFAMILY",
        exit_cap_rate=0.06,
        preferred_return=0.08,
        disposition_fee_rate=0.01,
        waterfall_tiers=waterfall_tiers,
    )


@pytest.fixture
def stabilized_assumptions() -> DealAssumptions:
    """Stabilized office deal with a fully amortizing loan and no waterfall."""
    return DealAssumptions(
        purchase_price=8_000_000.0,
        closing_costs=160_000.0,
        total_equity_raise=2_960_000.0,
        loan_amount=5_200_000.0,
        interest_rate=0.065,
        loan_term_years=25,
        hold_years=7,
        current_noi=560_000.0,
        pro_forma_noi=560_000.0,
        property_type="OFFICE",
        exit_cap_rate=0.075,
    )
