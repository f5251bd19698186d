"""Declarative configuration model and loading."""

from __future__ import annotations

from kong_route_tester.discovery.base import DEFAULT_METHODS, KongConfig, Plugin, Route, Service
from kong_route_tester.discovery.kong import load_kong_config
from kong_route_tester.discovery.templating import resolve_templates

__all__ = [
    "DEFAULT_METHODS",
    "KongConfig",
    "Plugin",
    "Route",
    "Service",
    "load_kong_config",
    "resolve_templates",
]
