"""Error taxonomy for kong-route-tester."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class ConfigErrorKind(str, Enum):
    """Why a declarative configuration could not be loaded."""

    NOT_FOUND = "NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"


class ConfigError(Exception):
    """Raised when the Kong configuration cannot be read or parsed.

    Configuration errors are fatal to a run: no probes are issued.

    Attributes:
        kind: Whether the file was unreadable or structurally invalid.
        path: The configuration file path, if known.
        detail: Human-readable description of the problem.
    """

    def __init__(self, kind: ConfigErrorKind, detail: str, path: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        self.path = path
        where = f"{path}: " if path else ""
        super().__init__(f"{where}{detail}")


class ErrorCategory(str, Enum):
    """Category of a transport failure recorded on a probe outcome."""

    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """Map httpx and socket exceptions to an ErrorCategory.

    httpx wraps the underlying OS error, so the cause chain is inspected for
    DNS and TLS failures before falling back to the httpx class.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    seen: set[int] = set()
    cause: BaseException | None = exc
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        if isinstance(cause, (ssl.SSLError, ssl.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(cause, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        cause = cause.__cause__ or cause.__context__

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "ConfigError",
    "ConfigErrorKind",
    "ErrorCategory",
    "categorize_exception",
]
