# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Advisory underwriting compliance checks."""

from .rules import ComplianceCheckResult, ComplianceRuleEngine, dscr_passes

__all__ = [
    "ComplianceCheckResult",
    "ComplianceRuleEngine",
    "dscr_passes",
]
