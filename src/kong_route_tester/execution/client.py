"""HTTP client wrapper for probes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from httpx import AsyncClient

if TYPE_CHECKING:
    from httpx import AsyncBaseTransport, Response


class ProbeClient:
    """Async client issuing single, non-redirecting requests against a base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        transport: AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize probe client.

        Args:
            base_url: Prefix of every request URL. Paths are appended verbatim.
            transport: Optional httpx transport (e.g. ``httpx.ASGITransport``
                to probe an in-process app). Defaults to the network.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url
        self.transport = transport
        self.timeout = timeout

    def url_for(self, path: str) -> str:
        return self.base_url + path

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send one request. Redirects are returned, never followed.

        Args:
            method: HTTP method.
            path: Request path, appended to ``base_url``.
            json: JSON body.
            headers: Request headers.

        Returns:
            The HTTP response, with its body read.

        Raises:
            httpx.HTTPError: On transport failure or timeout.
        """
        async with AsyncClient(transport=self.transport, timeout=self.timeout, follow_redirects=False) as client:
            return await client.request(
                method=method,
                url=self.url_for(path),
                json=json,
                headers=headers or {},
            )
