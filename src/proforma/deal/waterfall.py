# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
LP/GP Distribution Waterfall

Allocates distributable cash across ordered tiers with cumulative hurdle
tracking. A preferred return is a lifetime-to-date guarantee, so hurdles are
tested against cumulative LP distributions across all periods, not against
the current period alone. The running totals live in a caller-owned
`WaterfallCumulativeState` that is threaded through consecutive calls and
updated in place.

Example:
    ```python
    state = WaterfallCumulativeState()
    for cash in annual_cash_flows:
        distributions = apply_waterfall(
            cash, tiers, preferred_return=0.08, total_equity=1_000_000,
            cumulative_state=state,
        )
    print(f"LP to date: ${state.cumulative_lp:,.0f}")
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import pandas as pd

from ..core.primitives import WaterfallSettings

if TYPE_CHECKING:
    from .assumptions import WaterfallTier

logger = logging.getLogger(__name__)


@dataclass
class WaterfallCumulativeState:
    """
    Running LP/GP distribution totals for one projection run.

    Owned by the caller orchestrating a multi-period run and mutated by each
    `apply_waterfall` call it is passed to.

    Attributes:
        cumulative_lp: LP distributions to date
        cumulative_gp: GP distributions to date
    """

    cumulative_lp: float = 0.0
    cumulative_gp: float = 0.0

    @property
    def total(self) -> float:
        """All distributions to date."""
        return self.cumulative_lp + self.cumulative_gp


@dataclass(frozen=True)
class WaterfallDistribution:
    """Cash allocated by one tier in one period."""

    tier_order: int
    tier_name: str
    lp_amount: float
    gp_amount: float

    @property
    def total(self) -> float:
        return self.lp_amount + self.gp_amount


def _default_split(
    cash: float, tier_order: int, tier_name: str, settings: WaterfallSettings
) -> WaterfallDistribution:
    return WaterfallDistribution(
        tier_order=tier_order,
        tier_name=tier_name,
        lp_amount=cash * settings.default_lp_split,
        gp_amount=cash * settings.default_gp_split,
    )


def _record(
    state: Optional[WaterfallCumulativeState],
    distributions: List[WaterfallDistribution],
) -> List[WaterfallDistribution]:
    if state is not None:
        lp_total, gp_total = summarize_distributions(distributions)
        state.cumulative_lp += lp_total
        state.cumulative_gp += gp_total
    return distributions


def apply_waterfall(
    cash_flow: float,
    tiers: Sequence["WaterfallTier"],
    preferred_return: float,
    total_equity: float,
    cumulative_state: Optional[WaterfallCumulativeState] = None,
    settings: Optional[WaterfallSettings] = None,
) -> List[WaterfallDistribution]:
    """
    Split one period's distributable cash across the waterfall tiers.

    Tiers are walked in ascending `tier_order`:

    - Hurdle tier: target = total_equity * hurdle_rate. When cumulative LP
      distributions already meet the target the tier is skipped. Otherwise
      the tier takes min(remaining, shortfall / lp_split) and splits it by
      lp_split / gp_split; the LP portion advances the running LP total.
    - Residual tier (no hurdle): takes everything that remains.

    Cash left after the last tier goes to an implicit "Residual" tier at the
    default split. With no tiers, or no positive cash, the whole amount is
    distributed as a single "Default Split".

    Args:
        cash_flow: Distributable cash for the period
        tiers: Waterfall tiers (any order)
        preferred_return: Deal preferred return (tiers carry their own hurdles)
        total_equity: Equity base the hurdle rates apply to
        cumulative_state: Caller-owned running totals; updated in place
        settings: Default split configuration

    Returns:
        Ordered list of tier distributions
    """
    settings = settings or WaterfallSettings()

    if not tiers or cash_flow <= 0:
        return _record(
            cumulative_state,
            [_default_split(cash_flow, 1, "Default Split", settings)],
        )

    sorted_tiers = sorted(tiers, key=lambda t: t.tier_order)
    distributions: List[WaterfallDistribution] = []
    remaining = cash_flow
    cum_lp_running = cumulative_state.cumulative_lp if cumulative_state else 0.0

    for tier in sorted_tiers:
        if remaining <= 0:
            break

        if not tier.is_residual:
            target = total_equity * tier.hurdle_rate
            if cum_lp_running >= target:
                logger.debug(
                    f"{tier.name}: hurdle {tier.hurdle_rate:.2%} met "
                    f"(LP to date ${cum_lp_running:,.0f} >= ${target:,.0f}); skipping"
                )
                continue

            shortfall = target - cum_lp_running
            if tier.lp_split > 0:
                tier_cash = min(remaining, shortfall / tier.lp_split)
            else:
                tier_cash = remaining
            lp_amount = tier_cash * tier.lp_split
            distributions.append(
                WaterfallDistribution(
                    tier_order=tier.tier_order,
                    tier_name=tier.name,
                    lp_amount=lp_amount,
                    gp_amount=tier_cash * tier.gp_split,
                )
            )
            remaining -= tier_cash
            cum_lp_running += lp_amount
        else:
            distributions.append(
                WaterfallDistribution(
                    tier_order=tier.tier_order,
                    tier_name=tier.name,
                    lp_amount=remaining * tier.lp_split,
                    gp_amount=remaining * tier.gp_split,
                )
            )
            remaining = 0.0

    if remaining > 0:
        residual_order = sorted_tiers[-1].tier_order + 1
        distributions.append(
            _default_split(remaining, residual_order, "Residual", settings)
        )

    logger.debug(
        f"Distributed ${cash_flow:,.0f} across {len(distributions)} tier(s) "
        f"(pref {preferred_return:.2%}, equity ${total_equity:,.0f})"
    )
    return _record(cumulative_state, distributions)


def run_annual_waterfall(
    cash_flows: Sequence[float],
    tiers: Sequence["WaterfallTier"],
    preferred_return: float,
    total_equity: float,
    state: Optional[WaterfallCumulativeState] = None,
    settings: Optional[WaterfallSettings] = None,
) -> Tuple[List[List[WaterfallDistribution]], WaterfallCumulativeState]:
    """
    Run the waterfall over consecutive periods, strictly in the order given.

    The same cumulative state is threaded through every period so hurdles
    reflect lifetime distributions. Pass the returned state on to a later
    call (e.g. the exit distribution) to continue the same run.

    Returns:
        Tuple of (per-period distributions, cumulative state)
    """
    state = state if state is not None else WaterfallCumulativeState()
    per_period = [
        apply_waterfall(
            cash,
            tiers,
            preferred_return,
            total_equity,
            cumulative_state=state,
            settings=settings,
        )
        for cash in cash_flows
    ]
    return per_period, state


def summarize_distributions(
    distributions: Sequence[WaterfallDistribution],
) -> Tuple[float, float]:
    """Total (LP, GP) amounts across a list of tier distributions."""
    lp_total = sum(d.lp_amount for d in distributions)
    gp_total = sum(d.gp_amount for d in distributions)
    return lp_total, gp_total


def distributions_to_frame(
    per_period: Sequence[Sequence[WaterfallDistribution]],
    periods: Optional[Sequence[int]] = None,
) -> pd.DataFrame:
    """
    Flatten per-period tier distributions into a long DataFrame.

    Columns: Period, Tier Order, Tier, LP Distribution, GP Distribution, Total
    """
    periods = list(periods) if periods is not None else list(range(1, len(per_period) + 1))
    rows = [
        {
            "Period": period,
            "Tier Order": d.tier_order,
            "Tier": d.tier_name,
            "LP Distribution": d.lp_amount,
            "GP Distribution": d.gp_amount,
            "Total": d.total,
        }
        for period, distributions in zip(periods, per_period)
        for d in distributions
    ]
    columns = ["Period", "Tier Order", "Tier", "LP Distribution", "GP Distribution", "Total"]
    return pd.DataFrame(rows, columns=columns)
