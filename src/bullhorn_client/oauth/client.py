"""OAuth client for the Bullhorn REST API.

Turns long-lived credentials into a platform session in three hops:
1. POST the credentials to ``authorize`` and read the authorization code
   off the redirect the server answers with
2. Exchange the code for an access token (and refresh token)
3. Call the platform ``login`` endpoint with the access token to get the
   REST base URL and the ``BhRestToken``

Each hop depends on the output of the previous one, so they always run
in sequence and the first failure stops the chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..config import DEFAULT_API_ROOT, DEFAULT_AUTH_ENDPOINT, Credentials
from ..errors import AuthError, AuthTransportError, LoginError

log = logging.getLogger(__name__)


def join_url(base: str, path: str) -> str:
    """Join a base URL and a relative path with exactly one slash."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True)
class TokenPair:
    """Tokens returned by the token endpoint."""

    access_token: str = field(repr=False)
    # Captured but never used; no refresh flow exists.
    refresh_token: str | None = field(default=None, repr=False)


@dataclass(frozen=True)
class LoginResult:
    """What the platform login call hands back."""

    rest_url: str
    bh_rest_token: str = field(repr=False)


class Authenticator:
    """Performs the authorization-code login against Bullhorn.

    Usage:
        async with httpx.AsyncClient() as http:
            auth = Authenticator(http, credentials)
            result = await auth.login()
            # result.rest_url, result.bh_rest_token

    The authenticator holds no session state. The only thing it remembers
    is the most recent refresh token, which is kept as inert data.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        credentials: Credentials,
        auth_endpoint: str = DEFAULT_AUTH_ENDPOINT,
        api_root: str = DEFAULT_API_ROOT,
        version: str = "2.0",
        logger: logging.Logger | None = None,
    ):
        self._http = http
        self.credentials = credentials
        self.auth_endpoint = auth_endpoint
        self.api_root = api_root
        self.version = version
        self._log = logger or log

        self.refresh_token: str | None = None

    async def _send(self, hop: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            self._log.warning("Bullhorn %s request failed: %s", hop, e.__class__.__name__)
            raise AuthTransportError(
                f"{hop} request failed: {e}",
                details={"hop": hop},
            ) from e

    async def request_authorization_code(self) -> str:
        """Log in with username/password and return the authorization code.

        The code never appears in a response body. The server answers with
        a redirect whose target carries ``code`` in its query string, so
        the redirect is read rather than followed.

        Raises:
            AuthError: If there is no redirect or the redirect has no code
            AuthTransportError: On network failure
        """
        creds = self.credentials
        self._log.debug("Requesting authorization code for client %s", creds.client_id)

        response = await self._send(
            "authorize",
            "POST",
            join_url(self.auth_endpoint, "authorize"),
            params={
                "client_id": creds.client_id,
                "response_type": "code",
                "action": "Login",
            },
            data={"username": creds.username, "password": creds.password},
            follow_redirects=False,
        )

        location = response.headers.get("location") if response.is_redirect else None
        if not location:
            raise AuthError(
                f"Authorization did not redirect (status {response.status_code})",
                status_code=response.status_code,
                details={"hop": "authorize"},
            )

        params = httpx.URL(location).params
        code = params.get("code")
        if not code:
            raise AuthError(
                "Authorization redirect carried no code",
                status_code=response.status_code,
                details={"hop": "authorize", "error": params.get("error")},
            )
        return code

    async def exchange_code_for_token(
        self,
        code: str,
        grant_type: str = "authorization_code",
    ) -> TokenPair:
        """Exchange an authorization code for an access token.

        Raises:
            AuthError: On a non-success response or a body without access_token
            AuthTransportError: On network failure
        """
        creds = self.credentials
        self._log.debug("Exchanging authorization code (grant_type=%s)", grant_type)

        response = await self._send(
            "token",
            "POST",
            join_url(self.auth_endpoint, "token"),
            params={
                "code": code,
                "client_id": creds.client_id,
                "client_secret": creds.client_secret,
                "grant_type": grant_type,
            },
        )

        if not response.is_success:
            error_data = _error_body(response)
            raise AuthError(
                f"Token exchange failed: {response.status_code}",
                status_code=response.status_code,
                details=error_data,
            )

        data = _json_body(response, AuthError, "token")
        access_token = data.get("access_token")
        if not access_token:
            raise AuthError(
                "Token response did not contain an access_token",
                status_code=response.status_code,
                details={"response_keys": list(data.keys())},
            )

        tokens = TokenPair(access_token=access_token, refresh_token=data.get("refresh_token"))
        self.refresh_token = tokens.refresh_token
        return tokens

    async def login(self) -> LoginResult:
        """Run the full authorize -> token -> login sequence.

        A fresh authorization code and access token are fetched on every
        call; neither is reused across attempts.

        Raises:
            AuthError: From the authorize or token hops
            LoginError: If the platform login call does not yield a session
        """
        code = await self.request_authorization_code()
        tokens = await self.exchange_code_for_token(code)

        self._log.debug("Logging in to %s (version %s)", self.api_root, self.version)
        response = await self._send(
            "login",
            "GET",
            join_url(self.api_root, "login"),
            params={"version": self.version, "access_token": tokens.access_token},
        )

        if not response.is_success:
            raise LoginError(
                f"Login failed: {response.status_code}",
                status_code=response.status_code,
                details=_error_body(response),
            )

        data = _json_body(response, LoginError, "login")
        rest_url = data.get("restUrl")
        bh_rest_token = data.get("BhRestToken")
        if not rest_url or not bh_rest_token:
            raise LoginError(
                "Login response missing restUrl or BhRestToken",
                status_code=response.status_code,
                details={"response_keys": list(data.keys())},
            )

        self._log.info("Logged in to Bullhorn at %s", rest_url)
        return LoginResult(rest_url=rest_url, bh_rest_token=bh_rest_token)


def _json_body(response: httpx.Response, error_cls: type[AuthError], hop: str) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise error_cls(
            f"{hop} response was not JSON",
            status_code=response.status_code,
            details={"raw_response": response.text[:500]},
        ) from e
    if not isinstance(data, dict):
        raise error_cls(
            f"{hop} response was not a JSON object",
            status_code=response.status_code,
        )
    return data


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json() if response.content else {}
    except ValueError:
        return {"raw_response": response.text[:500]}
    return data if isinstance(data, dict) else {"raw_response": response.text[:500]}
