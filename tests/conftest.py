"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from starlette.routing import Route

from kong_route_tester.config import RouteTestConfig

GATEWAY_TOKEN = "test-integration-token"
BASE_URL = "http://testserver"

ALL_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]

INTEGRATION_CONFIG = """\
_format_version: "1.1"
services:
  # Service with authenticated routes
  - name: auth-service
    url: http://127.0.0.1:8001
    routes:
      - name: protected-endpoint
        paths:
          - /auth/v1/protected
        methods: ["GET", "POST"]
        plugins:
          - name: auth
  # Service with public routes
  - name: public-service
    url: http://127.0.0.1:8002
    routes:
      - name: public-endpoint
        paths:
          - /api/v1/public/health
          - /api/v1/public/status
        methods: ["GET"]
  # Mixed service with both auth and public routes
  - name: mixed-service
    url: http://127.0.0.1:8003
    routes:
      - name: mixed-auth-route
        paths:
          - /api/v1/users/(?<user_id>[^/]+)/profile
        methods: ["GET", "PUT"]
        plugins:
          - name: auth
      - name: mixed-public-route
        paths:
          - /api/v1/public/info
        methods: ["GET"]
"""


def make_gateway_app(*, require_auth: bool = False, token: str = GATEWAY_TOKEN) -> Starlette:
    """Create a mock gateway backend.

    Every request is recorded on ``app.state.requests``. With ``require_auth``
    every path except ``/health`` demands ``Authorization: Bearer <token>``.
    """

    async def health(request: Request) -> Response:
        return JSONResponse({"status": "ok"})

    async def redirect(request: Request) -> Response:
        return RedirectResponse("/elsewhere", status_code=302)

    async def nested_error(request: Request) -> Response:
        return JSONResponse({"errors": [{"message": "validation failed"}]}, status_code=422)

    async def message_error(request: Request) -> Response:
        return JSONResponse({"message": "no such resource"}, status_code=404)

    async def plain_error(request: Request) -> Response:
        return PlainTextResponse("upstream exploded", status_code=502)

    async def catch_all(request: Request) -> Response:
        body = await request.body()
        request.app.state.requests.append(
            {
                "method": request.method,
                "path": request.url.path,
                "headers": dict(request.headers),
                "body": body,
            }
        )
        if require_auth and request.headers.get("authorization") != f"Bearer {token}":
            return JSONResponse({"message": "Unauthorized"}, status_code=401)
        return JSONResponse({"method": request.method, "path": request.url.path})

    app = Starlette(
        routes=[
            Route("/health", health),
            Route("/redirect", redirect, methods=ALL_METHODS),
            Route("/errors/nested", nested_error, methods=ALL_METHODS),
            Route("/errors/message", message_error, methods=ALL_METHODS),
            Route("/errors/plain", plain_error, methods=ALL_METHODS),
            Route("/{path:path}", catch_all, methods=ALL_METHODS),
        ]
    )
    app.state.requests = []
    return app


@pytest.fixture
def gateway_app() -> Starlette:
    """Mock gateway that accepts every request."""
    return make_gateway_app()


@pytest.fixture
def auth_gateway_app() -> Starlette:
    """Mock gateway that demands the bearer token on every route."""
    return make_gateway_app(require_auth=True)


@pytest.fixture
def gateway_transport(gateway_app: Starlette) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=gateway_app)


@pytest.fixture
def auth_gateway_transport(auth_gateway_app: Starlette) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=auth_gateway_app)


@pytest.fixture
def route_config() -> RouteTestConfig:
    """Run settings pointing at the in-process gateway, without pacing."""
    return RouteTestConfig(base_url=BASE_URL, request_delay=0.0)


@pytest.fixture
def kong_yaml(tmp_path: Path) -> Path:
    """The integration configuration written to a temporary file."""
    path = tmp_path / "kong.yaml"
    path.write_text(INTEGRATION_CONFIG)
    return path


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def gateway_token() -> str:
    return GATEWAY_TOKEN
