"""Authentication requirement inference from plugin lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kong_route_tester.discovery.base import Route, Service


def requires_auth(route: Route, service: Service) -> bool:
    """Check whether a route is gated by an ``auth`` plugin.

    Only the route scope and its owning service scope are consulted; there is
    no plugin that disables authentication for a single route.

    Args:
        route: The route to classify.
        service: The service owning ``route``.

    Returns:
        True if either scope carries a plugin named ``auth``.
    """
    return any(plugin.is_auth for plugin in route.plugins) or any(plugin.is_auth for plugin in service.plugins)
