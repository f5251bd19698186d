"""Request body generation for probes."""

from __future__ import annotations

from typing import Any

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

_PROBE_BODY: dict[str, Any] = {"test": "data"}


def probe_body(method: str) -> dict[str, Any] | None:
    """Return the JSON body to send with ``method``, or None for bodiless methods."""
    if method.upper() in BODY_METHODS:
        return dict(_PROBE_BODY)
    return None
