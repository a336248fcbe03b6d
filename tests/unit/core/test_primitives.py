# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for enums, the base model and engine settings."""

import pytest
from pydantic import ValidationError

from proforma.core.primitives import (
    ComplianceSettings,
    EngineSettings,
    IRRSettings,
    PropertyTypeEnum,
    SensitivitySettings,
    WaterfallSettings,
)


class TestPropertyTypeEnum:
    def test_thirteen_categories(self):
        assert len(PropertyTypeEnum) == 13

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("HOTEL", PropertyTypeEnum.HOTEL),
            ("hotel", PropertyTypeEnum.HOTEL),
            ("Mixed Use", PropertyTypeEnum.MIXED_USE),
            ("self-storage", PropertyTypeEnum.SELF_STORAGE),
            (" nnn_retail ", PropertyTypeEnum.NNN_RETAIL),
        ],
    )
    def test_lookup_is_case_insensitive(self, raw, expected):
        assert PropertyTypeEnum(raw) is expected

    @pytest.mark.parametrize("raw", ["CAR_WASH", "", None, 42])
    def test_coerce_unknown_falls_back_to_other(self, raw):
        assert PropertyTypeEnum.coerce(raw) is PropertyTypeEnum.OTHER

    def test_coerce_passes_members_through(self):
        assert PropertyTypeEnum.coerce(PropertyTypeEnum.OFFICE) is PropertyTypeEnum.OFFICE

    @pytest.mark.parametrize(
        "member",
        [
            PropertyTypeEnum.MULTIFAMILY,
            PropertyTypeEnum.STUDENT_HOUSING,
            PropertyTypeEnum.MOBILE_HOME_PARK,
            PropertyTypeEnum.BUILD_TO_RENT,
            PropertyTypeEnum.SENIOR_HOUSING,
        ],
    )
    def test_residential_types(self, member):
        assert member.is_residential

    @pytest.mark.parametrize(
        "member",
        [PropertyTypeEnum.OFFICE, PropertyTypeEnum.HOTEL, PropertyTypeEnum.OTHER],
    )
    def test_nonresidential_types(self, member):
        assert not member.is_residential


class TestModel:
    def test_models_are_frozen(self):
        settings = IRRSettings()
        with pytest.raises(ValidationError):
            settings.max_iterations = 10

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            IRRSettings(max_iter=10)


class TestEngineSettings:
    def test_defaults(self):
        settings = EngineSettings()

        assert settings.waterfall.default_lp_split == 0.70
        assert settings.waterfall.default_gp_split == 0.30
        assert settings.irr.max_iterations == 100
        assert settings.irr.tolerance == 0.0001
        assert settings.irr.initial_guess == 0.10
        assert settings.compliance.min_dscr == 1.25
        assert settings.compliance.max_ltv == 0.75
        assert settings.sensitivity.cap_rate_deltas == (
            -0.01, -0.005, 0.0, 0.005, 0.01, 0.015, 0.02,
        )
        assert settings.depreciation.residential_life_years == 27.5
        assert settings.expense_ratio_overrides == {}

    def test_instances_do_not_share_overrides(self):
        first = EngineSettings(expense_ratio_overrides={"HOTEL": 0.60})
        second = EngineSettings()

        assert first.expense_ratio_overrides == {PropertyTypeEnum.HOTEL: 0.60}
        assert second.expense_ratio_overrides == {}

    def test_default_split_must_sum_to_one(self):
        with pytest.raises(ValidationError, match="sum to 1.0"):
            WaterfallSettings(default_lp_split=0.8, default_gp_split=0.3)

    def test_override_ratio_bounded(self):
        with pytest.raises(ValidationError):
            EngineSettings(expense_ratio_overrides={"HOTEL": 1.5})

    def test_sensitivity_deltas_sorted(self):
        settings = SensitivitySettings(cap_rate_deltas=(0.01, -0.01, 0.0))
        assert settings.cap_rate_deltas == (-0.01, 0.0, 0.01)

    def test_compliance_threshold_ordering(self):
        with pytest.raises(ValidationError):
            ComplianceSettings(breakeven_favorable=0.95, breakeven_acceptable=0.90)
        with pytest.raises(ValidationError):
            ComplianceSettings(irr_floor=0.5, irr_ceiling=0.2)
