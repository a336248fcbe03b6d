# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma Core Primitives

Building blocks shared by every engine component: the immutable base model,
constrained numeric types, enums and engine settings.
"""

from .enums import BreakevenAssessmentEnum, ComplianceCategoryEnum, PropertyTypeEnum
from .model import Model
from .settings import (
    ComplianceSettings,
    DepreciationSettings,
    EngineSettings,
    IRRSettings,
    SensitivitySettings,
    WaterfallSettings,
)
from .types import FloatBetween0And1, PositiveFloat, PositiveInt, PositiveIntGe1

__all__ = [
    # Core models
    "Model",
    # Settings
    "EngineSettings",
    "ComplianceSettings",
    "DepreciationSettings",
    "IRRSettings",
    "SensitivitySettings",
    "WaterfallSettings",
    # Enums
    "BreakevenAssessmentEnum",
    "ComplianceCategoryEnum",
    "PropertyTypeEnum",
    # Types
    "FloatBetween0And1",
    "PositiveFloat",
    "PositiveInt",
    "PositiveIntGe1",
]
