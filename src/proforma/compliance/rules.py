# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Advisory underwriting checks.

Each rule reports a labeled pass/fail with a citation and a note. Checks are
advisory: a failed check never raises and never blocks the rest of the run.

Rule order:
    1. Debt Service Coverage Ratio (DSCR)
    2. Loan-to-Value Ratio (LTV)
    3. NOI Data Provided
    4. Exit Cap Rate Reasonableness
    5. Breakeven Occupancy
    6. Hold Period Specified
    7. Capital Stack Balance
    8. IRR Plausibility (only with equity and pro forma NOI)
    9. Waterfall Split Balance (only with waterfall tiers)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..analysis.breakeven import BreakevenAnalysis
from ..analysis.projection import ProjectionEngine
from ..core.calculations import FinancialCalculations
from ..core.primitives import (
    BreakevenAssessmentEnum,
    ComplianceCategoryEnum,
    ComplianceSettings,
    EngineSettings,
    Model,
)
from ..debt.amortization import annual_debt_service
from ..valuation.exit import ExitAnalyzer

if TYPE_CHECKING:
    from ..analysis.projection import YearProjection
    from ..deal.assumptions import DealAssumptions
    from ..valuation.exit import ExitResult

logger = logging.getLogger(__name__)


class ComplianceCheckResult(Model):
    """Outcome of one advisory check."""

    name: str
    regulation: str
    category: ComplianceCategoryEnum = ComplianceCategoryEnum.FINANCIAL
    passed: bool
    note: str


def dscr_passes(
    noi: float, debt_service: float, settings: Optional[ComplianceSettings] = None
) -> bool:
    """
    Whether NOI covers debt service at the minimum DSCR.

    The threshold is inclusive: 125,000 / 100,000 = 1.25x passes.
    """
    settings = settings or ComplianceSettings()
    return FinancialCalculations.calculate_dscr(noi, debt_service) >= settings.min_dscr


def _currency(value: float) -> str:
    return f"${value:,.0f}"


class ComplianceRuleEngine:
    """
    Evaluates the advisory rule set for a deal.

    Projections and the exit result are optional; whatever is missing is
    computed from the assumptions with the same engine settings.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()

    @property
    def thresholds(self) -> ComplianceSettings:
        return self.settings.compliance

    # --- individual rules ---

    def check_dscr(self, assumptions: "DealAssumptions") -> ComplianceCheckResult:
        """Year-1 debt service against in-place NOI."""
        debt_service = annual_debt_service(
            assumptions.loan_amount,
            assumptions.interest_rate,
            assumptions.loan_term_years,
            assumptions.interest_only,
            assumptions.io_term_months,
            1,
        )
        dscr = FinancialCalculations.calculate_dscr(assumptions.current_noi, debt_service)
        minimum = self.thresholds.min_dscr
        passed = dscr_passes(assumptions.current_noi, debt_service, self.thresholds)
        status = (
            f"meets minimum {minimum:.2f}x requirement"
            if passed
            else f"below minimum {minimum:.2f}x, refinancing risk"
        )
        return ComplianceCheckResult(
            name="Debt Service Coverage Ratio (DSCR)",
            regulation=f"Prudent Lending Standards (>{minimum:.2f}x required)",
            passed=passed,
            note=f"DSCR: {dscr:.2f}x - {status}",
        )

    def check_ltv(self, assumptions: "DealAssumptions") -> ComplianceCheckResult:
        ltv = assumptions.ltv
        maximum = self.thresholds.max_ltv
        passed = ltv <= maximum
        status = (
            "within standard range" if passed else f"exceeds standard {maximum:.0%} maximum"
        )
        return ComplianceCheckResult(
            name="Loan-to-Value Ratio (LTV)",
            regulation=f"Prudent Lending Standards (60-{maximum:.0%})",
            passed=passed,
            note=f"LTV: {ltv:.1%} - {status}",
        )

    def check_noi_provided(self, assumptions: "DealAssumptions") -> ComplianceCheckResult:
        passed = assumptions.current_noi > 0 or assumptions.pro_forma_noi > 0
        note = (
            f"Current NOI: {_currency(assumptions.current_noi)}, "
            f"Pro Forma: {_currency(assumptions.pro_forma_noi)}"
            if passed
            else "No NOI data, projections cannot be calculated"
        )
        return ComplianceCheckResult(
            name="NOI Data Provided",
            regulation="Pro Forma Standards",
            passed=passed,
            note=note,
        )

    def check_exit_cap(self, assumptions: "DealAssumptions") -> ComplianceCheckResult:
        exit_cap = assumptions.exit_cap_rate
        going_in = assumptions.going_in_cap_rate
        passed = exit_cap >= going_in
        status = (
            "conservative (exit >= going-in)"
            if passed
            else "aggressive (exit < going-in), cap rate compression assumed"
        )
        return ComplianceCheckResult(
            name="Exit Cap Rate Reasonableness",
            regulation="Underwriting Standards",
            passed=passed,
            note=f"Exit cap: {exit_cap:.2%}, Going-in: {going_in:.2%} - {status}",
        )

    def check_breakeven(self, first_year: "YearProjection") -> ComplianceCheckResult:
        analysis = BreakevenAnalysis.from_projection(first_year, self.thresholds)
        passed = analysis.assessment is BreakevenAssessmentEnum.FAVORABLE
        grade = {
            BreakevenAssessmentEnum.FAVORABLE: "favorable",
            BreakevenAssessmentEnum.ACCEPTABLE: "acceptable",
            BreakevenAssessmentEnum.ELEVATED: "elevated risk",
        }[analysis.assessment]
        return ComplianceCheckResult(
            name="Breakeven Occupancy",
            regulation=(
                f"Underwriting Standards (<{self.thresholds.breakeven_favorable:.0%})"
            ),
            passed=passed,
            note=f"Breakeven: {analysis.breakeven_occupancy:.1%} - {grade}",
        )

    def check_hold_period(self, assumptions: "DealAssumptions") -> ComplianceCheckResult:
        passed = assumptions.hold_period_specified
        note = (
            f"{assumptions.hold_years}-year hold period"
            if passed
            else f"No hold period, defaulting to {assumptions.hold_years} years"
        )
        return ComplianceCheckResult(
            name="Hold Period Specified",
            regulation="Projection Standards",
            passed=passed,
            note=note,
        )

    def check_capital_stack(self, assumptions: "DealAssumptions") -> ComplianceCheckResult:
        uses = assumptions.total_project_cost
        sources = assumptions.total_sources
        gap = abs(sources - uses) / uses if uses > 0 else 0.0
        passed = gap < self.thresholds.max_capital_stack_gap
        status = "balanced" if passed else f"{gap:.1%} gap"
        return ComplianceCheckResult(
            name="Capital Stack Balance",
            regulation="Sources = Uses",
            passed=passed,
            note=f"Sources: {_currency(sources)}, Uses: {_currency(uses)} - {status}",
        )

    def check_irr(self, irr: float) -> ComplianceCheckResult:
        floor = self.thresholds.irr_floor
        ceiling = self.thresholds.irr_ceiling
        passed = floor <= irr <= ceiling
        band = f"({floor:.0%} to {ceiling:.0%})"
        note = (
            f"Projected IRR: {irr:.1%} - within plausible range {band}"
            if passed
            else (
                f"Projected IRR: {irr:.1%} - outside plausible range {band}. "
                f"Review assumptions for reasonableness."
            )
        )
        return ComplianceCheckResult(
            name="IRR Plausibility",
            regulation="Underwriting Best Practices",
            passed=passed,
            note=note,
        )

    def check_waterfall_splits(
        self, assumptions: "DealAssumptions"
    ) -> ComplianceCheckResult:
        unbalanced = [t for t in assumptions.sorted_tiers if not t.splits_balanced]
        passed = not unbalanced
        if passed:
            note = f"All {len(assumptions.waterfall_tiers)} tier(s) split 100% of cash"
        else:
            details = ", ".join(
                f"{t.name} ({t.lp_split + t.gp_split:.1%})" for t in unbalanced
            )
            note = f"LP + GP split does not total 100%: {details}"
            logger.warning(note)
        return ComplianceCheckResult(
            name="Waterfall Split Balance",
            regulation="Operating Agreement Distribution Provisions",
            category=ComplianceCategoryEnum.WATERFALL,
            passed=passed,
            note=note,
        )

    # --- rule set ---

    def evaluate(
        self,
        assumptions: "DealAssumptions",
        projections: Optional[Sequence["YearProjection"]] = None,
        exit_result: Optional["ExitResult"] = None,
    ) -> List[ComplianceCheckResult]:
        """
        Run every applicable rule, in order.

        Args:
            assumptions: Deal assumptions
            projections: Year projections (computed when omitted or empty)
            exit_result: Exit analysis supplying the IRR (computed when omitted)

        Returns:
            Ordered list of ComplianceCheckResult
        """
        if not projections:
            projections = ProjectionEngine(self.settings).project(assumptions)

        checks = [
            self.check_dscr(assumptions),
            self.check_ltv(assumptions),
            self.check_noi_provided(assumptions),
            self.check_exit_cap(assumptions),
            self.check_breakeven(projections[0]),
            self.check_hold_period(assumptions),
            self.check_capital_stack(assumptions),
        ]

        if assumptions.total_equity_raise > 0 and assumptions.pro_forma_noi > 0:
            if exit_result is None:
                exit_result = ExitAnalyzer(self.settings).analyze(assumptions, projections)
            checks.append(self.check_irr(exit_result.irr))

        if assumptions.waterfall_tiers:
            checks.append(self.check_waterfall_splits(assumptions))

        failed = [c.name for c in checks if not c.passed]
        logger.debug(
            f"Compliance: {len(checks) - len(failed)}/{len(checks)} passed"
            + (f"; failed: {', '.join(failed)}" if failed else "")
        )
        return checks
