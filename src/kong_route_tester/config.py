"""Configuration for kong-route-tester."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

_PYPROJECT_SECTION = "kong-route-tester"


def _flag(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        msg = f"{key} must be true or false, got {value!r}"
        raise ValueError(msg)
    return value


def _names(data: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key, default)
    # A bare string would otherwise be split into characters.
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        msg = f"{key} must be a list of strings, got {value!r}"
        raise ValueError(msg)
    if not all(isinstance(item, str) for item in value):
        msg = f"{key} must only contain strings, got {value!r}"
        raise ValueError(msg)
    return tuple(value)


@dataclass(frozen=True)
class RouteTestConfig:
    """Settings for one route testing run.

    Built once at the boundary (CLI or ``pyproject.toml``) and never mutated;
    use ``dataclasses.replace`` to derive a variant.

    Attributes:
        config_file: Path to the Kong declarative configuration.
        base_url: Target the probes are sent to; each probe URL is
            ``base_url + path``.
        token: Bearer token for routes that require authentication. A value
            starting with "$" names an environment variable.
        test_auth_routes: Probe routes that require authentication.
        test_unauth_routes: Probe routes that do not require authentication.
        verbose: Report successful probes too.
        dry_run: Derive probes without sending any request.
        max_requests: Request budget for the run (0 = unlimited).
        timeout: Per-request timeout in seconds.
        request_delay: Pause between two consecutive requests, in seconds.
        skip_service_substrings: Services whose name contains any of these
            are not probed.
        skip_service_names: Services with exactly these names are not probed.
    """

    config_file: str = "kong.yaml"
    base_url: str = "http://localhost:8000"
    token: str | None = None
    test_auth_routes: bool = True
    test_unauth_routes: bool = True
    verbose: bool = False
    dry_run: bool = False
    max_requests: int = 0
    timeout: float = 10.0
    request_delay: float = 0.1
    skip_service_substrings: tuple[str, ...] = ("test", "health-check")
    skip_service_names: tuple[str, ...] = ("atlantis", "atlantis-legacy")

    def __post_init__(self) -> None:
        if self.max_requests < 0:
            msg = f"max_requests must be >= 0, got {self.max_requests}"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = f"timeout must be positive, got {self.timeout}"
            raise ValueError(msg)
        if self.request_delay < 0:
            msg = f"request_delay must be >= 0, got {self.request_delay}"
            raise ValueError(msg)

    def should_skip_service(self, name: str) -> bool:
        """Check whether a service is infrastructure that must not be probed."""
        return name in self.skip_service_names or any(part in name for part in self.skip_service_substrings)

    def should_test(self, *, requires_auth: bool) -> bool:
        """Check the auth toggles for a route with the given classification."""
        return self.test_auth_routes if requires_auth else self.test_unauth_routes

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RouteTestConfig:
        """Build a config from option names as written in ``[tool.kong-route-tester]``.

        Args:
            data: Mapping of option names (``file``, ``url``, ``max``, ``delay``, ...) to values.

        Returns:
            A config with every missing option left at its default.

        Raises:
            ValueError: If a flag is not a boolean, a skip list is not a list of
                strings, or a numeric option is out of range.

        Examples:
            >>> config = RouteTestConfig.from_dict({"url": "http://127.0.0.1:8080", "max": 5})
            >>> config.max_requests
            5
        """
        defaults = cls()

        return cls(
            config_file=str(data.get("file", defaults.config_file)),
            base_url=data.get("url", defaults.base_url),
            token=data.get("token", defaults.token),
            test_auth_routes=_flag(data, "test_auth", defaults.test_auth_routes),
            test_unauth_routes=_flag(data, "test_unauth", defaults.test_unauth_routes),
            verbose=_flag(data, "verbose", defaults.verbose),
            dry_run=_flag(data, "dry_run", defaults.dry_run),
            max_requests=int(data.get("max", defaults.max_requests)),
            timeout=float(data.get("timeout", defaults.timeout)),
            request_delay=float(data.get("delay", defaults.request_delay)),
            skip_service_substrings=_names(data, "skip_service_substrings", defaults.skip_service_substrings),
            skip_service_names=_names(data, "skip_services", defaults.skip_service_names),
        )


def load_config_from_pyproject(path: Path | None = None) -> RouteTestConfig:
    """Load configuration from the ``[tool.kong-route-tester]`` section.

    Args:
        path: The TOML file to read. Defaults to ``pyproject.toml`` in the working directory.

    Returns:
        RouteTestConfig loaded from file, or defaults if the file or section is missing.

    Raises:
        ValueError: If pyproject.toml cannot be parsed or holds invalid values.
    """
    if path is None:
        path = Path.cwd() / "pyproject.toml"

    if not path.exists():
        return RouteTestConfig()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        msg = f"Failed to parse pyproject.toml: {e}"
        raise ValueError(msg) from e

    config_data = data.get("tool", {}).get(_PYPROJECT_SECTION, {})
    if not config_data:
        return RouteTestConfig()

    return RouteTestConfig.from_dict(config_data)


def merge_configs(
    cli_config: RouteTestConfig | None = None,
    file_config: RouteTestConfig | None = None,
) -> RouteTestConfig:
    """Combine command line and file settings field by field.

    A command line value that differs from the built-in default wins; otherwise
    the file value is used, which itself falls back to the default. A command
    line value equal to the default therefore cannot override the file: set
    the option in the file instead (for example ``test_auth = true``).

    Examples:
        >>> file_cfg = RouteTestConfig(base_url="http://staging", max_requests=20)
        >>> cli_cfg = RouteTestConfig(max_requests=5)
        >>> merged = merge_configs(cli_cfg, file_cfg)
        >>> merged.max_requests, merged.base_url
        (5, 'http://staging')
    """
    defaults = RouteTestConfig()

    if cli_config is None and file_config is None:
        return defaults
    if cli_config is None:
        return file_config or defaults
    if file_config is None:
        return cli_config

    values: dict[str, Any] = {}
    for f in fields(RouteTestConfig):
        cli_value = getattr(cli_config, f.name)
        values[f.name] = cli_value if cli_value != getattr(defaults, f.name) else getattr(file_config, f.name)
    return RouteTestConfig(**values)
