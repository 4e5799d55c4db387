"""Bullhorn API Client - async wrapper for the Bullhorn REST API.

Every call first obtains a valid session from the SessionManager and then
targets ``{restUrl}{path}`` with the session's ``BhRestToken`` as a query
parameter.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..auth.manager import Session, SessionManager
from ..config import BullhornSettings
from ..errors import DomainError, TransportError
from ..oauth.client import Authenticator, join_url
from .candidates import CandidatesAPI
from .files import FilesAPI
from .jobs import JobOrdersAPI
from .submissions import SubmissionsAPI
from .tearsheets import TearsheetsAPI

log = logging.getLogger(__name__)


class BullhornClient:
    """Bullhorn REST client with domain-specific sub-APIs.

    Usage:
        settings = BullhornSettings(
            username="api.user",
            password="secret",
            client_id="client-id",
            client_secret="client-secret",
        )
        async with BullhornClient(settings) as bullhorn:
            jobs = await bullhorn.jobs.get_open_jobs()
            candidate_id = await bullhorn.candidates.get_or_create_by_email(
                "jane@example.com", first_name="Jane", last_name="Doe"
            )
            await bullhorn.submissions.create(candidate_id, jobs[0]["id"])

    Settings default to the environment (``BULLHORN_*`` variables or a
    ``.env`` file) when not passed in. REST calls always go through this
    client's own ``httpx.AsyncClient`` (``http`` or one it creates), even
    when an external ``sessions`` manager handles login.
    """

    def __init__(
        self,
        settings: BullhornSettings | None = None,
        *,
        http: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
        sessions: SessionManager | None = None,
    ):
        self.settings = settings or BullhornSettings()
        self._log = logger or log

        credentials = self.settings.credentials()
        missing = credentials.missing()
        if missing and sessions is None:
            raise ValueError(f"Missing Bullhorn credentials: {', '.join(missing)}")

        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.timeout),
        )

        self.sessions = sessions or SessionManager(
            Authenticator(
                self._http,
                credentials,
                auth_endpoint=self.settings.auth_endpoint,
                api_root=self.settings.api_root,
                version=self.settings.version,
                logger=logger,
            ),
            logger=logger,
        )

        self.jobs = JobOrdersAPI(self)
        self.candidates = CandidatesAPI(self)
        self.submissions = SubmissionsAPI(self)
        self.files = FilesAPI(self)
        self.tearsheets = TearsheetsAPI(self)

    async def __aenter__(self) -> "BullhornClient":
        return self

    async def __aexit__(self, *args):
        await self.close()

    async def close(self):
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def session(self) -> Session:
        """Valid session for the next call (logs in if needed)."""
        return await self.sessions.get_valid_session()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated REST call with error handling."""
        session = await self.session()

        query = dict(params or {})
        query["BhRestToken"] = session.bh_rest_token

        try:
            response = await self._http.request(
                method,
                join_url(session.rest_url, path),
                params=query,
                json=json,
            )
        except httpx.TransportError as e:
            self._log.warning("Bullhorn %s %s failed: %s", method, path, e.__class__.__name__)
            raise TransportError(f"{method} {path} failed: {e}") from e

        if not response.is_success:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {"raw_response": response.text[:500]}
            raise DomainError(
                f"API error: {response.status_code}",
                status_code=response.status_code,
                details=error_data if isinstance(error_data, dict) else {"errors": error_data},
            )

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise DomainError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
                details={"raw_response": response.text[:500]},
            ) from e
        if not isinstance(data, dict):
            raise DomainError(
                f"{method} {path} returned a non-object body",
                status_code=response.status_code,
                details={"raw_response": response.text[:500]},
            )
        return data

    async def _get(self, path: str, **params: Any) -> dict[str, Any]:
        return await self._request("GET", path, params=params)

    async def _put(self, path: str, data: Any | None = None, **params: Any) -> dict[str, Any]:
        return await self._request("PUT", path, params=params, json=data)

    async def _post(self, path: str, data: Any | None = None, **params: Any) -> dict[str, Any]:
        return await self._request("POST", path, params=params, json=data)
