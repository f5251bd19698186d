"""Authentication support for kong-route-tester."""

from __future__ import annotations

from kong_route_tester.auth.classifier import requires_auth
from kong_route_tester.auth.providers import AuthProvider, BearerTokenAuth, NoAuth, auth_for_token, resolve_token

__all__ = [
    "AuthProvider",
    "BearerTokenAuth",
    "NoAuth",
    "auth_for_token",
    "requires_auth",
    "resolve_token",
]
