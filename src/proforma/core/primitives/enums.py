# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum
from typing import Optional


class PropertyTypeEnum(str, Enum):
    """
    Type of syndicated real estate asset.

    Drives the operating expense ratio benchmark used for NOI growth and the
    revenue/expense display decomposition, and the depreciation life
    (residential vs. nonresidential real property).

    Values match the upstream deal records (e.g. "HOTEL", "NNN_RETAIL").
    Lookup is case-insensitive; unrecognised values resolve to OTHER.
    """

    MULTIFAMILY = "MULTIFAMILY"
    OFFICE = "OFFICE"
    RETAIL = "RETAIL"
    INDUSTRIAL = "INDUSTRIAL"
    MIXED_USE = "MIXED_USE"
    SELF_STORAGE = "SELF_STORAGE"
    MOBILE_HOME_PARK = "MOBILE_HOME_PARK"
    HOTEL = "HOTEL"
    NNN_RETAIL = "NNN_RETAIL"
    SENIOR_HOUSING = "SENIOR_HOUSING"
    STUDENT_HOUSING = "STUDENT_HOUSING"
    BUILD_TO_RENT = "BUILD_TO_RENT"
    OTHER = "OTHER"

    @classmethod
    def _missing_(cls, value: object) -> Optional["PropertyTypeEnum"]:
        if isinstance(value, str):
            normalized = value.strip().upper().replace(" ", "_").replace("-", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @classmethod
    def coerce(cls, value: object) -> "PropertyTypeEnum":
        """Resolve any raw value to a member, falling back to OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER

    @property
    def is_residential(self) -> bool:
        """True for residential rental property (27.5-year depreciation life)."""
        return self in _RESIDENTIAL_TYPES


_RESIDENTIAL_TYPES = frozenset(
    {
        PropertyTypeEnum.MULTIFAMILY,
        PropertyTypeEnum.STUDENT_HOUSING,
        PropertyTypeEnum.MOBILE_HOME_PARK,
        PropertyTypeEnum.BUILD_TO_RENT,
        PropertyTypeEnum.SENIOR_HOUSING,
    }
)


class ComplianceCategoryEnum(str, Enum):
    """Category a compliance check reports under."""

    FINANCIAL = "financial"
    WATERFALL = "waterfall"


class BreakevenAssessmentEnum(str, Enum):
    """
    Qualitative grade for breakeven occupancy.

    Options:
        FAVORABLE: below the favorable threshold (85% by default)
        ACCEPTABLE: below the acceptable threshold (90% by default)
        ELEVATED: at or above the acceptable threshold
    """

    FAVORABLE = "Favorable"
    ACCEPTABLE = "Acceptable"
    ELEVATED = "Elevated"
