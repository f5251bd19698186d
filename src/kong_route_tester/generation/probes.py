"""Derivation of concrete probes from a Kong configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kong_route_tester.auth.classifier import requires_auth
from kong_route_tester.generation.path import has_capture_syntax, materialize_path

if TYPE_CHECKING:
    from collections.abc import Iterator

    from kong_route_tester.config import RouteTestConfig
    from kong_route_tester.discovery.base import KongConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Probe:
    """One concrete HTTP request synthesized from a route.

    Attributes:
        service: Owning service name.
        route: Route name.
        path: Concrete request path.
        method: HTTP method.
        requires_auth: Whether the route is gated by an ``auth`` plugin.
    """

    service: str
    route: str
    path: str
    method: str
    requires_auth: bool

    def __repr__(self) -> str:
        auth = " [AUTH]" if self.requires_auth else ""
        return f"Probe({self.method} {self.path} {self.service}/{self.route}{auth})"


def derive_probes(kong_config: KongConfig, config: RouteTestConfig) -> Iterator[Probe]:
    """Yield probes in service, route, path, method order.

    Infrastructure services and routes excluded by the auth toggles are
    skipped. Paths with capture syntax are materialized; other paths are used
    verbatim. The generator is lazy, so a caller enforcing a request budget
    stops derivation as soon as it stops iterating.

    Args:
        kong_config: The loaded configuration.
        config: Run settings providing skip rules and auth toggles.

    Yields:
        One Probe per (route, path, method) combination.
    """
    for service in kong_config.services:
        if config.should_skip_service(service.name):
            logger.info("Skipping test service: %s", service.name)
            continue

        for route in service.routes:
            route_requires_auth = requires_auth(route, service)
            if not config.should_test(requires_auth=route_requires_auth):
                logger.debug("Skipping route %s/%s (auth=%s)", service.name, route.name, route_requires_auth)
                continue

            methods = route.effective_methods()
            for template in route.paths:
                path = materialize_path(template) if has_capture_syntax(template) else template
                for method in methods:
                    yield Probe(
                        service=service.name,
                        route=route.name,
                        path=path,
                        method=method,
                        requires_auth=route_requires_auth,
                    )
