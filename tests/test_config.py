"""Tests for configuration loading and merging."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from kong_route_tester.config import RouteTestConfig, load_config_from_pyproject, merge_configs


def test_route_test_config_defaults() -> None:
    """Test that RouteTestConfig has the documented defaults."""
    config = RouteTestConfig()

    assert config.config_file == "kong.yaml"
    assert config.base_url == "http://localhost:8000"
    assert config.token is None
    assert config.test_auth_routes is True
    assert config.test_unauth_routes is True
    assert config.verbose is False
    assert config.dry_run is False
    assert config.max_requests == 0
    assert config.timeout == 10.0
    assert config.request_delay == 0.1
    assert config.skip_service_substrings == ("test", "health-check")
    assert config.skip_service_names == ("atlantis", "atlantis-legacy")


def test_config_is_frozen() -> None:
    """Test that a config cannot be mutated after construction."""
    config = RouteTestConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.max_requests = 5  # type: ignore[misc]


@pytest.mark.parametrize(
    ("kwargs", "match"),
    [
        ({"max_requests": -1}, "max_requests"),
        ({"timeout": 0}, "timeout"),
        ({"timeout": -2.5}, "timeout"),
        ({"request_delay": -0.1}, "request_delay"),
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, float], match: str) -> None:
    """Test that out-of-range numeric settings are rejected."""
    with pytest.raises(ValueError, match=match):
        RouteTestConfig(**kwargs)


def test_zero_delay_allowed() -> None:
    """Test that pacing can be disabled."""
    assert RouteTestConfig(request_delay=0).request_delay == 0


@pytest.mark.parametrize(
    ("name", "skipped"),
    [
        ("test-service", True),
        ("my-testing-api", True),
        ("health-check", True),
        ("svc-health-check", True),
        ("atlantis", True),
        ("atlantis-legacy", True),
        ("atlantis-v2", False),
        ("users", False),
        ("Health", False),
    ],
)
def test_should_skip_service(name: str, skipped: bool) -> None:
    """Test the default infrastructure-service rules."""
    assert RouteTestConfig().should_skip_service(name) is skipped


def test_should_test_toggles() -> None:
    """Test that auth toggles select routes by classification."""
    only_auth = RouteTestConfig(test_unauth_routes=False)
    only_unauth = RouteTestConfig(test_auth_routes=False)

    assert only_auth.should_test(requires_auth=True)
    assert not only_auth.should_test(requires_auth=False)
    assert only_unauth.should_test(requires_auth=False)
    assert not only_unauth.should_test(requires_auth=True)


def test_from_dict_with_all_fields() -> None:
    """Test creating config from dictionary with all fields."""
    data = {
        "file": "gateway/kong.yml",
        "url": "http://staging:8000",
        "token": "$STAGING_TOKEN",
        "test_auth": False,
        "test_unauth": True,
        "verbose": True,
        "dry_run": True,
        "max": 25,
        "timeout": 3,
        "delay": 0,
        "skip_service_substrings": ["internal"],
        "skip_services": ["legacy"],
    }

    config = RouteTestConfig.from_dict(data)

    assert config.config_file == "gateway/kong.yml"
    assert config.base_url == "http://staging:8000"
    assert config.token == "$STAGING_TOKEN"
    assert config.test_auth_routes is False
    assert config.test_unauth_routes is True
    assert config.verbose is True
    assert config.dry_run is True
    assert config.max_requests == 25
    assert config.timeout == 3.0
    assert config.request_delay == 0.0
    assert config.skip_service_substrings == ("internal",)
    assert config.skip_service_names == ("legacy",)


def test_from_dict_empty_gives_defaults() -> None:
    """Test that an empty dictionary yields the defaults."""
    assert RouteTestConfig.from_dict({}) == RouteTestConfig()


def test_load_config_from_pyproject(tmp_path: Path) -> None:
    """Test loading the [tool.kong-route-tester] section."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        """\
[project]
name = "gateway"

[tool.kong-route-tester]
file = "deploy/kong.yaml"
url = "http://gateway.local"
max = 10
delay = 0.5
skip_services = ["atlantis"]
"""
    )

    config = load_config_from_pyproject(pyproject)

    assert config.config_file == "deploy/kong.yaml"
    assert config.base_url == "http://gateway.local"
    assert config.max_requests == 10
    assert config.request_delay == 0.5
    assert config.skip_service_names == ("atlantis",)


def test_load_config_missing_file(tmp_path: Path) -> None:
    """Test that a missing pyproject.toml yields defaults."""
    assert load_config_from_pyproject(tmp_path / "pyproject.toml") == RouteTestConfig()


def test_load_config_missing_section(tmp_path: Path) -> None:
    """Test that a pyproject.toml without the section yields defaults."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "gateway"\n')

    assert load_config_from_pyproject(pyproject) == RouteTestConfig()


def test_load_config_invalid_toml(tmp_path: Path) -> None:
    """Test that unparseable TOML is reported as ValueError."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text("[tool.kong-route-tester\nurl = ")

    with pytest.raises(ValueError, match="Failed to parse pyproject.toml"):
        load_config_from_pyproject(pyproject)


def test_load_config_invalid_value(tmp_path: Path) -> None:
    """Test that out-of-range values in the file are rejected."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text("[tool.kong-route-tester]\nmax = -3\n")

    with pytest.raises(ValueError, match="max_requests"):
        load_config_from_pyproject(pyproject)


def test_load_config_from_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the working directory's pyproject.toml is used by default."""
    (tmp_path / "pyproject.toml").write_text('[tool.kong-route-tester]\nurl = "http://cwd"\n')
    monkeypatch.chdir(tmp_path)

    assert load_config_from_pyproject().base_url == "http://cwd"


def test_merge_configs_cli_precedence() -> None:
    """Test that non-default CLI values override file values."""
    file_config = RouteTestConfig(base_url="http://staging", max_requests=20, verbose=True)
    cli_config = RouteTestConfig(max_requests=5)

    merged = merge_configs(cli_config, file_config)

    assert merged.max_requests == 5
    assert merged.base_url == "http://staging"
    assert merged.verbose is True


def test_merge_configs_none() -> None:
    """Test merging when one or both sides are missing."""
    config = RouteTestConfig(max_requests=3)

    assert merge_configs(None, None) == RouteTestConfig()
    assert merge_configs(config, None) is config
    assert merge_configs(None, config) is config


@pytest.mark.parametrize(
    ("data", "match"),
    [
        ({"skip_service_substrings": "test"}, "skip_service_substrings must be a list of strings"),
        ({"skip_services": "atlantis"}, "skip_services must be a list of strings"),
        ({"skip_services": ["atlantis", 3]}, "skip_services must only contain strings"),
        ({"test_auth": "false"}, "test_auth must be true or false"),
        ({"test_unauth": 0}, "test_unauth must be true or false"),
        ({"verbose": "yes"}, "verbose must be true or false"),
        ({"dry_run": None}, "dry_run must be true or false"),
    ],
)
def test_from_dict_rejects_mistyped_values(data: dict[str, object], match: str) -> None:
    """Test that a string skip list or a non-boolean flag is rejected, not coerced."""
    with pytest.raises(ValueError, match=match):
        RouteTestConfig.from_dict(data)


def test_mistyped_pyproject_value_rejected(tmp_path: Path) -> None:
    """Test that type errors in the file surface as ValueError."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[tool.kong-route-tester]\nskip_service_substrings = "test"\n')

    with pytest.raises(ValueError, match="skip_service_substrings"):
        load_config_from_pyproject(pyproject)


def test_merge_configs_default_cli_value_does_not_override_file() -> None:
    """Test that a CLI value equal to the default leaves the file value in place."""
    file_config = RouteTestConfig(test_auth_routes=False, max_requests=50)
    cli_config = RouteTestConfig(test_auth_routes=True, max_requests=0)

    merged = merge_configs(cli_config, file_config)

    assert merged.test_auth_routes is False
    assert merged.max_requests == 50
