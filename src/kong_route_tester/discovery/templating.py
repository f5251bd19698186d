"""Environment placeholder substitution for declarative configuration text."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

#: Stand-in for the service-discovery address when no variable is set.
SERVICE_ADDRESS_FALLBACK = "http://services.sms.community:10000"

#: Substituted for every other unset placeholder.
PLACEHOLDER_VALUE = "http://placeholder"

_PLACEHOLDER_RE = re.compile(r"\$\{([^:}]+)(?::[^}]+)?\}")


def resolve_templates(text: str, environ: Mapping[str, str] | None = None) -> str:
    """Expand ``${NAME}`` and ``${NAME:<op><default>}`` placeholders.

    The written default is never used. An unset or empty variable resolves to
    ``SERVICE_ADDRESS_FALLBACK`` when its name contains ``SERVICE_ADDRESS`` and
    to ``PLACEHOLDER_VALUE`` otherwise.

    Args:
        text: Raw configuration text.
        environ: Variables to consult. Defaults to ``os.environ``.

    Returns:
        The text with every placeholder replaced.

    Example:
        >>> resolve_templates("url: ${API_URL:=http://localhost:8080}", {})
        'url: http://placeholder'
    """
    env = os.environ if environ is None else environ

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        value = env.get(name, "")
        if value:
            return value
        if "SERVICE_ADDRESS" in name:
            return SERVICE_ADDRESS_FALLBACK
        return PLACEHOLDER_VALUE

    return _PLACEHOLDER_RE.sub(_substitute, text)
