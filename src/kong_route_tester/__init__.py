"""kong-route-tester: probe every route of a Kong declarative configuration."""

from __future__ import annotations

from kong_route_tester.__metadata__ import __version__
from kong_route_tester.auth import AuthProvider, BearerTokenAuth, NoAuth, requires_auth
from kong_route_tester.config import RouteTestConfig, load_config_from_pyproject, merge_configs
from kong_route_tester.discovery import (
    DEFAULT_METHODS,
    KongConfig,
    Plugin,
    Route,
    Service,
    load_kong_config,
    resolve_templates,
)
from kong_route_tester.errors import ConfigError, ConfigErrorKind, ErrorCategory
from kong_route_tester.execution import DRY_RUN_MESSAGE, ProbeClient, ProbeOutcome, ProbeRunner, run_probes
from kong_route_tester.generation import Probe, derive_probes, materialize_path
from kong_route_tester.reporting import ConsoleReporter, OutcomeClass, RunSummary, summarize

__all__ = [
    "__version__",
    # Auth
    "AuthProvider",
    "BearerTokenAuth",
    "NoAuth",
    "requires_auth",
    # Config
    "RouteTestConfig",
    "load_config_from_pyproject",
    "merge_configs",
    # Discovery
    "DEFAULT_METHODS",
    "KongConfig",
    "Plugin",
    "Route",
    "Service",
    "load_kong_config",
    "resolve_templates",
    # Errors
    "ConfigError",
    "ConfigErrorKind",
    "ErrorCategory",
    # Execution
    "DRY_RUN_MESSAGE",
    "ProbeClient",
    "ProbeOutcome",
    "ProbeRunner",
    "run_probes",
    # Generation
    "Probe",
    "derive_probes",
    "materialize_path",
    # Reporting
    "ConsoleReporter",
    "OutcomeClass",
    "RunSummary",
    "summarize",
]
