# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Proforma Reporting Module

Presentation tables built from a completed run:
    results = run(assumptions)
    tables = ProFormaReport(results).generate()

This module also exports the base class for custom report development.
"""

from .base import BaseReport
from .pro_forma import ProFormaReport

__all__ = [
    # Base class for custom reports
    "BaseReport",
    # Reports
    "ProFormaReport",
]
