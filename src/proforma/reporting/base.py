# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Base reporting classes.

Reports translate a completed pro forma run into presentation tables using
familiar real estate terminology.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..analysis.results import ProFormaResults


class BaseReport(ABC):
    """
    Abstract base class for all report formatters.

    Reports operate on final ProFormaResults objects and transform them into
    presentation-ready formats. Reports should only format and present data,
    never perform calculations.
    """

    def __init__(self, results: "ProFormaResults"):
        """
        Initialize report with analysis results.

        Args:
            results: Complete ProFormaResults from proforma.analysis.run()
        """
        # Import at runtime to avoid circular dependencies
        from ..analysis.results import ProFormaResults  # noqa: PLC0415

        if not isinstance(results, ProFormaResults):
            raise TypeError("BaseReport requires a ProFormaResults object")
        self._results = results

    @abstractmethod
    def generate(self, **kwargs) -> Any:
        """
        Generate the formatted report output.

        This method should transform the analysis results into the
        appropriate output format (DataFrame, dict, etc.) without
        performing any financial calculations.
        """
        pass
