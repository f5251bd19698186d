"""Probe execution."""

from __future__ import annotations

from kong_route_tester.execution.client import ProbeClient
from kong_route_tester.execution.runner import DRY_RUN_MESSAGE, ProbeOutcome, ProbeRunner, run_probes

__all__ = [
    "DRY_RUN_MESSAGE",
    "ProbeClient",
    "ProbeOutcome",
    "ProbeRunner",
    "run_probes",
]
