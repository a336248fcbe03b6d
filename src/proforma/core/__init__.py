# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma Core Framework

Foundational building blocks shared by every engine component: primitives,
settings and pure financial calculations.
"""

from . import primitives
from .calculations import FinancialCalculations, IRRResult, solve_irr
from .primitives import (
    BreakevenAssessmentEnum,
    ComplianceCategoryEnum,
    EngineSettings,
    Model,
    PropertyTypeEnum,
)

__all__ = [
    "primitives",
    # Calculations
    "FinancialCalculations",
    "IRRResult",
    "solve_irr",
    # Primitives
    "BreakevenAssessmentEnum",
    "ComplianceCategoryEnum",
    "EngineSettings",
    "Model",
    "PropertyTypeEnum",
]
