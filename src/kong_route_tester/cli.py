"""kong-route-tester CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from kong_route_tester.config import RouteTestConfig, load_config_from_pyproject, merge_configs
from kong_route_tester.discovery.kong import load_kong_config
from kong_route_tester.errors import ConfigError
from kong_route_tester.execution.runner import ProbeRunner
from kong_route_tester.log import setup_logging
from kong_route_tester.reporting.console import ConsoleReporter
from kong_route_tester.reporting.summary import summarize

EXIT_CONFIG_ERROR = 1
EXIT_USAGE_ERROR = 2

_TRUE_VALUES = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "f", "no", "n", "off"})


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    msg = f"invalid boolean value: {value!r}"
    raise argparse.ArgumentTypeError(msg)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kong-route-tester",
        description="Probe every route of a Kong declarative configuration against a base URL",
        epilog=(
            "Options read from [tool.kong-route-tester] in pyproject.toml are overridden only by "
            "command line values that differ from the defaults."
        ),
    )
    parser.add_argument("--file", help="Path to Kong configuration file (default: kong.yaml)")
    parser.add_argument("--url", help="Base URL for testing")
    parser.add_argument("--token", help="Authentication token for testing authenticated routes ($VAR reads env)")
    parser.add_argument(
        "--test-auth",
        type=_parse_bool,
        nargs="?",
        const=True,
        metavar="BOOL",
        help="Test authenticated routes (default: true)",
    )
    parser.add_argument(
        "--test-unauth",
        type=_parse_bool,
        nargs="?",
        const=True,
        metavar="BOOL",
        help="Test unauthenticated routes (default: true)",
    )
    parser.add_argument("--verbose", action="store_true", default=None, help="Verbose output")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Show what would be tested without making requests",
    )
    parser.add_argument("--max", type=int, help="Maximum number of requests to make (0 = unlimited)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds (default: 10)")
    parser.add_argument("--delay", type=float, help="Delay between requests in seconds (default: 0.1)")
    parser.add_argument("--pyproject", help="pyproject.toml to read [tool.kong-route-tester] from")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON instead of text")
    return parser


def config_from_args(args: argparse.Namespace) -> RouteTestConfig:
    """Build a RouteTestConfig from the options given on the command line."""
    options: dict[str, Any] = {
        "file": args.file,
        "url": args.url,
        "token": args.token,
        "test_auth": args.test_auth,
        "test_unauth": args.test_unauth,
        "verbose": args.verbose,
        "dry_run": args.dry_run,
        "max": args.max,
        "timeout": args.timeout,
        "delay": args.delay,
    }
    return RouteTestConfig.from_dict({key: value for key, value in options.items() if value is not None})


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        file_config = load_config_from_pyproject(Path(args.pyproject) if args.pyproject else None)
        config = merge_configs(config_from_args(args), file_config)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    setup_logging("INFO" if config.verbose else None)

    try:
        kong_config = load_kong_config(config.config_file)
    except ConfigError as e:
        print(f"Error reading Kong configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    reporter = ConsoleReporter(verbose=config.verbose)
    try:
        runner = ProbeRunner(config, on_outcome=None if args.json else reporter.report_outcome)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    outcomes = asyncio.run(runner.run(kong_config))
    summary = summarize(outcomes)

    if args.json:
        json.dump(summary.to_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        reporter.report_summary(summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
