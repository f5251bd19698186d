"""Reporting module for kong-route-tester."""

from __future__ import annotations

from kong_route_tester.reporting.console import ConsoleReporter, truncate
from kong_route_tester.reporting.summary import (
    OutcomeClass,
    RunSummary,
    classify,
    is_problematic,
    summarize,
)

__all__ = [
    "ConsoleReporter",
    "OutcomeClass",
    "RunSummary",
    "classify",
    "is_problematic",
    "summarize",
    "truncate",
]
