"""Typed model of a Kong declarative configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from kong_route_tester.errors import ConfigError, ConfigErrorKind

#: Methods a route accepts when it declares none (Kong 3.x semantics).
DEFAULT_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH")

AUTH_PLUGIN_NAME = "auth"


def _invalid(where: str, expected: str, value: Any) -> ConfigError:
    detail = f"{where}: expected {expected}, got {type(value).__name__}"
    return ConfigError(ConfigErrorKind.PARSE_ERROR, detail)


def _mapping(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _invalid(where, "a mapping", value)
    return value


def _sequence(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise _invalid(where, "a list", value)
    return value


def _string(value: Any, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise _invalid(where, "a string", value)
    return str(value)


def _strings(value: Any, where: str) -> list[str]:
    return [_string(item, f"{where}[{i}]") for i, item in enumerate(_sequence(value, where))]


def _integer(value: Any, where: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(where, "an integer", value)
    return value


@dataclass(frozen=True)
class Plugin:
    """A named behavior attached to a route or a service.

    Only the ``auth`` plugin is interpreted; ``config`` is carried as-is.
    """

    name: str
    config: dict[str, Any] = field(default_factory=dict)

    @property
    def is_auth(self) -> bool:
        return self.name == AUTH_PLUGIN_NAME

    @classmethod
    def from_dict(cls, data: Any, where: str = "plugin") -> Plugin:
        data = _mapping(data, where)
        return cls(
            name=_string(data.get("name"), f"{where}.name"),
            config=_mapping(data.get("config"), f"{where}.config"),
        )


def _plugins(value: Any, where: str) -> tuple[Plugin, ...]:
    return tuple(Plugin.from_dict(item, f"{where}[{i}]") for i, item in enumerate(_sequence(value, where)))


@dataclass(frozen=True)
class Route:
    """A declared path/method/plugin binding inside a service.

    Attributes:
        name: Route identifier.
        paths: Path templates, possibly containing regex capture syntax.
        methods: Declared HTTP methods. Empty means any of ``DEFAULT_METHODS``.
        hosts: Declared hosts (informational).
        plugins: Route-scope plugins.
        priority: The ``regex_priority`` value (informational).
    """

    name: str
    paths: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    hosts: tuple[str, ...] = ()
    plugins: tuple[Plugin, ...] = ()
    priority: int = 0

    def __repr__(self) -> str:
        methods_str = ",".join(self.methods) or "*"
        return f"Route({self.name!r} {methods_str} {list(self.paths)})"

    def effective_methods(self) -> tuple[str, ...]:
        """Return the declared methods, or the default method set if none are declared."""
        return self.methods or DEFAULT_METHODS

    @classmethod
    def from_dict(cls, data: Any, where: str = "route") -> Route:
        data = _mapping(data, where)
        return cls(
            name=_string(data.get("name"), f"{where}.name"),
            paths=tuple(_strings(data.get("paths"), f"{where}.paths")),
            methods=tuple(_strings(data.get("methods"), f"{where}.methods")),
            hosts=tuple(_strings(data.get("hosts"), f"{where}.hosts")),
            plugins=_plugins(data.get("plugins"), f"{where}.plugins"),
            priority=_integer(data.get("regex_priority"), f"{where}.regex_priority"),
        )


@dataclass(frozen=True)
class Service:
    """A named upstream grouping of routes with optional shared plugins.

    ``url`` is informational only; probes always target the configured base URL.
    """

    name: str
    url: str = ""
    plugins: tuple[Plugin, ...] = ()
    routes: tuple[Route, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, where: str = "service") -> Service:
        data = _mapping(data, where)
        routes = _sequence(data.get("routes"), f"{where}.routes")
        return cls(
            name=_string(data.get("name"), f"{where}.name"),
            url=_string(data.get("url"), f"{where}.url"),
            plugins=_plugins(data.get("plugins"), f"{where}.plugins"),
            routes=tuple(Route.from_dict(item, f"{where}.routes[{i}]") for i, item in enumerate(routes)),
        )


@dataclass(frozen=True)
class KongConfig:
    """An ordered collection of services, immutable once loaded."""

    services: tuple[Service, ...] = ()

    @property
    def route_count(self) -> int:
        return sum(len(service.routes) for service in self.services)

    @classmethod
    def from_dict(cls, data: Any) -> KongConfig:
        """Build the model from a parsed document.

        Unknown keys are ignored and missing keys default to empty values.

        Raises:
            ConfigError: If a field has the wrong structural type.
        """
        data = _mapping(data, "document")
        services = _sequence(data.get("services"), "services")
        return cls(services=tuple(Service.from_dict(item, f"services[{i}]") for i, item in enumerate(services)))
