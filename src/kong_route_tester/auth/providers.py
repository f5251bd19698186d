"""Credentials attached to probes of routes gated by the ``auth`` plugin.

A token given as ``$NAME`` is read from the environment variable ``NAME``
when headers are requested, so a missing secret surfaces before the first
probe is sent::

    auth = auth_for_token("$KONG_TOKEN")
    auth.get_headers()  # {"Authorization": "Bearer <value of KONG_TOKEN>"}
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_TOKEN_PREFIX = "$"


def resolve_token(token: str, environ: Mapping[str, str] | None = None) -> str:
    """Return ``token`` itself, or the variable it names when it starts with "$".

    Raises:
        ValueError: If the named variable is unset or empty, or the token is
            not ASCII (HTTP header values cannot carry it).
    """
    value = token
    if token.startswith(ENV_TOKEN_PREFIX):
        env = os.environ if environ is None else environ
        name = token[len(ENV_TOKEN_PREFIX) :]
        value = env.get(name, "")
        if not value:
            msg = f"Environment variable '{name}' is not set"
            raise ValueError(msg)
    if not value.isascii():
        msg = "token must be ASCII to be sent in the Authorization header"
        raise ValueError(msg)
    return value


class AuthProvider(ABC):
    """Source of the headers sent with probes that require authentication."""

    @abstractmethod
    def get_headers(self) -> dict[str, str]: ...


class NoAuth(AuthProvider):
    """Used when no token is configured; gated routes are probed bare."""

    def get_headers(self) -> dict[str, str]:
        return {}


class BearerTokenAuth(AuthProvider):
    """``Authorization: Bearer <token>`` credentials.

    Args:
        token: Literal token, or ``$NAME`` to read it from the environment.
    """

    def __init__(self, token: str) -> None:
        self._token = token

    @property
    def token(self) -> str:
        return resolve_token(self._token)

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def auth_for_token(token: str | None) -> AuthProvider:
    """Return a BearerTokenAuth for a non-empty token, NoAuth otherwise."""
    if token:
        return BearerTokenAuth(token)
    return NoAuth()
