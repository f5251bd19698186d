"""Probe generation from declared routes."""

from __future__ import annotations

from kong_route_tester.generation.body import probe_body
from kong_route_tester.generation.path import PATH_REPLACEMENTS, has_capture_syntax, materialize_path
from kong_route_tester.generation.probes import Probe, derive_probes

__all__ = [
    "PATH_REPLACEMENTS",
    "Probe",
    "derive_probes",
    "has_capture_syntax",
    "materialize_path",
    "probe_body",
]
