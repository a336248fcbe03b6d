# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma Valuation Module

Income approach exit valuation (direct capitalization) and the exit cap
rate sensitivity table.
"""

from .exit import ExitAnalyzer, ExitResult, build_irr_cash_flows, direct_cap_value
from .sensitivity import SensitivityAnalyzer, SensitivityScenario, sensitivity_to_frame

__all__ = [
    # Exit
    "ExitAnalyzer",
    "ExitResult",
    "build_irr_cash_flows",
    "direct_cap_value",
    # Sensitivity
    "SensitivityAnalyzer",
    "SensitivityScenario",
    "sensitivity_to_frame",
]
