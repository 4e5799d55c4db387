"""Shared test fixtures for the Bullhorn client test suite."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio

from bullhorn_client.config import BullhornSettings, Credentials

AUTH_ENDPOINT = "https://auth.bullhorn.test/oauth/"
API_ROOT = "https://rest.bullhorn.test/rest-services/"
REST_URL = "https://rest42.bullhorn.test/rest-services/corp1/"
REDIRECT_URI = "https://app.example.com/callback"

SAMPLE_USERNAME = "api.user"
SAMPLE_PASSWORD = "hunter2"
SAMPLE_CLIENT_ID = "client_abc123"
SAMPLE_CLIENT_SECRET = "secret_def456"


# ============================================================================
# Fake Bullhorn
# ============================================================================

Responder = httpx.Response | Callable[[httpx.Request], httpx.Response]


class FakeBullhorn:
    """Scripted stand-in for the auth, login and REST endpoints.

    Every authorize call hands out a new code (``code-1``, ``code-2``, ...)
    and every login a new ``BhRestToken`` (``rest-token-1``, ...). Any of
    the three auth hops can be overridden with a fixed response.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.authorize_calls = 0
        self.token_calls = 0
        self.login_calls = 0

        self.authorize_response: Responder | None = None
        self.token_response: Responder | None = None
        self.login_response: Responder | None = None
        self.routes: dict[tuple[str, str], Responder] = {}
        self.transport_error_on: set[str] = set()

    @property
    def rest_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url).startswith(REST_URL)]

    def route(self, method: str, path: str, response: Responder) -> None:
        """Answer ``method {REST_URL}{path}`` with ``response``."""
        self.routes[(method, path)] = response

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # Let concurrent callers interleave like on a real network.
        await asyncio.sleep(0)

        url = str(request.url).split("?")[0]
        hop = _hop_for(url)
        if hop in self.transport_error_on:
            raise httpx.ConnectError("connection refused", request=request)

        if hop == "authorize":
            self.authorize_calls += 1
            override = self._answer(self.authorize_response, request)
            return override if override is not None else httpx.Response(
                302,
                headers={"Location": f"{REDIRECT_URI}?code=code-{self.authorize_calls}&client_id=x"},
            )
        if hop == "token":
            self.token_calls += 1
            code = request.url.params.get("code")
            override = self._answer(self.token_response, request)
            return override if override is not None else httpx.Response(
                200,
                json={
                    "access_token": f"access-for-{code}",
                    "refresh_token": f"refresh-for-{code}",
                    "expires_in": 600,
                },
            )
        if hop == "login":
            self.login_calls += 1
            override = self._answer(self.login_response, request)
            return override if override is not None else httpx.Response(
                200,
                json={"restUrl": REST_URL, "BhRestToken": f"rest-token-{self.login_calls}"},
            )

        path = url[len(REST_URL):]
        responder = self.routes.get((request.method, path))
        if responder is None:
            return httpx.Response(404, json={"errorMessage": f"No route for {request.method} {path}"})
        return self._answer(responder, request)

    @staticmethod
    def _answer(responder: Responder | None, request: httpx.Request) -> httpx.Response | None:
        if responder is None:
            return None
        if callable(responder):
            return responder(request)
        return responder


def _hop_for(url: str) -> str:
    if url == AUTH_ENDPOINT + "authorize":
        return "authorize"
    if url == AUTH_ENDPOINT + "token":
        return "token"
    if url == API_ROOT + "login":
        return "login"
    return "rest"


def form_body(request: httpx.Request) -> dict[str, str]:
    """Decode a form-encoded request body into a flat dict."""
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


class FakeClock:
    """Controllable replacement for ``time.time``."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def fake() -> FakeBullhorn:
    return FakeBullhorn()


@pytest_asyncio.fixture
async def http(fake):
    """httpx.AsyncClient wired to the fake Bullhorn."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake.handler)) as client:
        yield client


@pytest.fixture
def settings() -> BullhornSettings:
    return BullhornSettings(
        _env_file=None,
        auth_endpoint=AUTH_ENDPOINT,
        api_root=API_ROOT,
        username=SAMPLE_USERNAME,
        password=SAMPLE_PASSWORD,
        client_id=SAMPLE_CLIENT_ID,
        client_secret=SAMPLE_CLIENT_SECRET,
    )


@pytest.fixture
def credentials(settings) -> Credentials:
    return settings.credentials()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def authenticator(http, credentials):
    from bullhorn_client.oauth.client import Authenticator

    return Authenticator(
        http,
        credentials,
        auth_endpoint=AUTH_ENDPOINT,
        api_root=API_ROOT,
    )


@pytest.fixture
def manager(authenticator, clock):
    from bullhorn_client.auth.manager import SessionManager

    return SessionManager(authenticator, clock=clock)


@pytest.fixture
def bullhorn(settings, http, manager):
    """BullhornClient using the fake transport and a controllable clock."""
    from bullhorn_client.api.client import BullhornClient

    return BullhornClient(settings, http=http, sessions=manager)


def json_body(request: httpx.Request) -> Any:
    """Decode a JSON request body."""
    return json.loads(request.content)
