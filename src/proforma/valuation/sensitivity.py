# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Exit cap rate sensitivity table"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

import pandas as pd

from ..core.primitives import EngineSettings, Model
from .exit import ExitAnalyzer, ExitResult

if TYPE_CHECKING:
    from ..analysis.projection import YearProjection
    from ..deal.assumptions import DealAssumptions

logger = logging.getLogger(__name__)


class SensitivityScenario(Model):
    """One row of the exit cap rate sensitivity table."""

    cap_rate_delta: float
    exit_cap_rate: float
    exit_value: float
    net_proceeds: float
    equity_multiple: float
    irr: float

    @property
    def is_base_case(self) -> bool:
        return self.cap_rate_delta == 0


class SensitivityAnalyzer:
    """
    Re-prices the exit across a grid of absolute exit cap rate deltas.

    Only the exit cap rate moves: the exit NOI, loan payoff and annual cash
    flows of the base case are held fixed. Each scenario is independent.
    Scenarios whose perturbed cap rate is not positive are dropped.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()
        self._exit_analyzer = ExitAnalyzer(self.settings)

    def analyze(
        self,
        assumptions: "DealAssumptions",
        projections: Sequence["YearProjection"],
        exit_result: ExitResult,
    ) -> List[SensitivityScenario]:
        """
        Build the sensitivity table, ordered from lowest to highest cap rate.

        Args:
            assumptions: Deal assumptions
            projections: Base case year projections
            exit_result: Base case exit

        Returns:
            List of SensitivityScenario
        """
        base_cap = exit_result.exit_cap_rate
        scenarios: List[SensitivityScenario] = []

        for delta in self.settings.sensitivity.cap_rate_deltas:
            cap_rate = base_cap + delta
            if cap_rate <= 0:
                logger.debug(f"Dropping scenario {delta:+.2%}: cap rate {cap_rate:.2%}")
                continue

            scenario_exit = self._exit_analyzer.evaluate(
                assumptions, projections, exit_result.exit_noi, cap_rate
            )
            scenarios.append(
                SensitivityScenario(
                    cap_rate_delta=delta,
                    exit_cap_rate=cap_rate,
                    exit_value=scenario_exit.exit_value,
                    net_proceeds=scenario_exit.net_proceeds,
                    equity_multiple=scenario_exit.equity_multiple,
                    irr=scenario_exit.irr,
                )
            )

        return scenarios


def sensitivity_to_frame(scenarios: Sequence[SensitivityScenario]) -> pd.DataFrame:
    """Sensitivity rows as a DataFrame indexed by exit cap rate."""
    columns = {
        "cap_rate_delta": "Cap Rate Delta",
        "exit_cap_rate": "Exit Cap Rate",
        "exit_value": "Exit Value",
        "net_proceeds": "Net Proceeds",
        "equity_multiple": "Equity Multiple",
        "irr": "IRR",
    }
    df = pd.DataFrame([s.model_dump() for s in scenarios], columns=list(columns))
    df.rename(columns=columns, inplace=True)
    df.set_index("Exit Cap Rate", inplace=True)
    return df
