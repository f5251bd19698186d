"""Logging helpers for kong-route-tester."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("KONG_ROUTE_TESTER_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["DEFAULT_LOG_LEVEL", "setup_logging"]
