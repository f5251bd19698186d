"""Probe execution runner."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from kong_route_tester.auth.providers import auth_for_token
from kong_route_tester.errors import ErrorCategory, categorize_exception
from kong_route_tester.execution.client import ProbeClient
from kong_route_tester.generation.body import probe_body
from kong_route_tester.generation.probes import Probe, derive_probes

if TYPE_CHECKING:
    from kong_route_tester.config import RouteTestConfig
    from kong_route_tester.discovery.base import KongConfig
    from kong_route_tester.reporting.summary import OutcomeClass

logger = logging.getLogger(__name__)

DRY_RUN_MESSAGE = "DRY RUN"

_ERROR_STATUS_THRESHOLD = 400


@dataclass(frozen=True)
class ProbeOutcome:
    """Recorded result of executing one probe.

    Attributes:
        service: Owning service name.
        route: Route name.
        path: Concrete request path.
        method: HTTP method.
        requires_auth: Whether the route is gated by an ``auth`` plugin.
        status_code: Response status, or 0 if no response was received.
        error: Transport failure description, if the request did not complete.
        error_category: Category of the transport failure.
        message: Message extracted from an error response, or the dry-run marker.
        elapsed_ms: Time spent on the request in milliseconds.
    """

    service: str
    route: str
    path: str
    method: str
    requires_auth: bool
    status_code: int = 0
    error: str | None = None
    error_category: ErrorCategory | None = None
    message: str = ""
    elapsed_ms: float = 0.0

    @classmethod
    def for_probe(cls, probe: Probe, **kwargs: Any) -> ProbeOutcome:
        return cls(
            service=probe.service,
            route=probe.route,
            path=probe.path,
            method=probe.method,
            requires_auth=probe.requires_auth,
            **kwargs,
        )

    @property
    def classification(self) -> OutcomeClass:
        from kong_route_tester.reporting.summary import classify

        return classify(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert outcome to dictionary for serialization."""
        return {
            "service": self.service,
            "route": self.route,
            "path": self.path,
            "method": self.method,
            "requires_auth": self.requires_auth,
            "status_code": self.status_code,
            "error": self.error,
            "error_category": self.error_category.value if self.error_category else None,
            "message": self.message,
            "elapsed_ms": round(self.elapsed_ms, 2),
        }


def extract_error_message(body: str) -> str:
    """Best-effort human-readable message from an error response body.

    Tries, in order: ``errors[0].message``, a top-level ``message``, and the
    raw body when it is not a JSON object.

    Args:
        body: Response body text.

    Returns:
        The extracted message, or an empty string.
    """
    if not body:
        return ""
    try:
        data = json.loads(body)
    except ValueError:
        return body
    if data is None:
        return ""
    if not isinstance(data, dict):
        return body

    errors = data.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and isinstance(first.get("message"), str):
            return first["message"]
        return ""

    message = data.get("message")
    return message if isinstance(message, str) else ""


class ProbeRunner:
    """Executes probes derived from a Kong configuration, one at a time."""

    def __init__(
        self,
        config: RouteTestConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        on_outcome: Callable[[ProbeOutcome], None] | None = None,
    ) -> None:
        """Initialize probe runner.

        Args:
            config: Run settings.
            transport: Optional httpx transport passed to the client.
            on_outcome: Called with every outcome as soon as it is recorded.

        Raises:
            ValueError: If the token names an environment variable that is not set.
        """
        self.config = config
        self.on_outcome = on_outcome
        self.auth = auth_for_token(config.token)
        self._auth_headers = self.auth.get_headers()
        self.client: ProbeClient | None = None
        if not config.dry_run:
            self.client = ProbeClient(config.base_url, transport=transport, timeout=config.timeout)

    def _record(self, outcomes: list[ProbeOutcome], outcome: ProbeOutcome) -> None:
        outcomes.append(outcome)
        if self.on_outcome is not None:
            self.on_outcome(outcome)

    async def run(self, kong_config: KongConfig) -> list[ProbeOutcome]:
        """Probe every route of the configuration.

        Stops as soon as the request budget is spent, even in the middle of a
        route, and returns the outcomes recorded so far.

        Args:
            kong_config: The loaded configuration.

        Returns:
            Outcomes in execution order.
        """
        outcomes: list[ProbeOutcome] = []
        budget = self.config.max_requests
        sent = 0

        for probe in derive_probes(kong_config, self.config):
            if budget > 0 and sent >= budget:
                logger.info("Request budget of %d reached, stopping", budget)
                break

            if self.config.dry_run:
                outcome = ProbeOutcome.for_probe(probe, message=DRY_RUN_MESSAGE)
            else:
                if sent:
                    await asyncio.sleep(self.config.request_delay)
                outcome = await self.execute_probe(probe)

            sent += 1
            self._record(outcomes, outcome)

        return outcomes

    def build_headers(self, probe: Probe) -> dict[str, str]:
        """Build the request headers for a probe."""
        headers: dict[str, str] = {}
        if probe_body(probe.method) is not None:
            headers["Content-Type"] = "application/json"
        if probe.requires_auth:
            headers.update(self._auth_headers)
        return headers

    async def execute_probe(self, probe: Probe) -> ProbeOutcome:
        """Send a single request for a probe. No retry is attempted.

        Args:
            probe: The probe to execute.

        Returns:
            The outcome; transport failures are recorded with status 0.
        """
        if self.client is None:
            msg = "execute_probe called on a dry-run runner"
            raise RuntimeError(msg)

        start = time.perf_counter()
        try:
            response = await self.client.request(
                probe.method,
                probe.path,
                json=probe_body(probe.method),
                headers=self.build_headers(probe),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug("%s %s failed: %r", probe.method, probe.path, e)
            return ProbeOutcome.for_probe(
                probe,
                error=str(e) or type(e).__name__,
                error_category=categorize_exception(e),
                elapsed_ms=elapsed_ms,
            )

        elapsed_ms = (time.perf_counter() - start) * 1000
        message = ""
        if response.status_code >= _ERROR_STATUS_THRESHOLD:
            message = extract_error_message(response.text)

        return ProbeOutcome.for_probe(
            probe,
            status_code=response.status_code,
            message=message,
            elapsed_ms=elapsed_ms,
        )


def run_probes(
    kong_config: KongConfig,
    config: RouteTestConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    on_outcome: Callable[[ProbeOutcome], None] | None = None,
) -> list[ProbeOutcome]:
    """Synchronous entry point: run all probes and return their outcomes."""
    runner = ProbeRunner(config, transport=transport, on_outcome=on_outcome)
    return asyncio.run(runner.run(kong_config))
