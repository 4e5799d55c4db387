"""Session manager for Bullhorn REST access.

Owns the cached platform session and hands out a valid one to every
domain call, logging in again once the cached session is too old.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Callable

from ..oauth.client import Authenticator

log = logging.getLogger(__name__)

# Sessions older than this are discarded and a new login is performed.
SESSION_MAX_AGE = timedelta(minutes=8)


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FRESH = "fresh"
    STALE = "stale"


@dataclass(frozen=True)
class Session:
    """A platform session from a single login response."""

    rest_url: str
    bh_rest_token: str = field(repr=False)
    acquired_at: float  # Unix timestamp

    def age(self, now: float) -> float:
        """Seconds since the session was acquired."""
        return now - self.acquired_at

    def is_stale(self, now: float) -> bool:
        return self.age(now) >= SESSION_MAX_AGE.total_seconds()


class SessionManager:
    """Caches the Bullhorn session and re-authenticates when it goes stale.

    Usage:
        manager = SessionManager(authenticator)

        # Cached session if fresh, otherwise logs in first
        session = await manager.get_valid_session()

    At most one login runs at a time. Callers arriving while a login is in
    flight wait on that login and all observe its single outcome, whether
    a new session or the error it failed with. A failed login leaves the
    previous session (or its absence) untouched.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        clock: Callable[[], float] = time.time,
        logger: logging.Logger | None = None,
    ):
        self.authenticator = authenticator
        self._clock = clock
        self._log = logger or log

        self._session: Session | None = None
        self._login_task: asyncio.Task[Session] | None = None

    @property
    def session(self) -> Session | None:
        """The cached session, fresh or not."""
        return self._session

    @property
    def state(self) -> SessionState:
        if self._session is None:
            return SessionState.UNAUTHENTICATED
        if self._session.is_stale(self._clock()):
            return SessionState.STALE
        return SessionState.FRESH

    @property
    def login_in_flight(self) -> bool:
        return self._login_task is not None

    async def get_valid_session(self) -> Session:
        """Return a fresh session, logging in first if needed.

        Raises:
            AuthError: If the login attempt fails (any subclass)
        """
        session = self._session
        if session is not None and not session.is_stale(self._clock()):
            return session

        if self._login_task is None:
            if session is not None:
                self._log.info(
                    "Bullhorn session is %.0fs old, logging in again",
                    session.age(self._clock()),
                )
            self._login_task = asyncio.ensure_future(self._login())
        else:
            self._log.debug("Waiting on in-flight Bullhorn login")

        return await asyncio.shield(self._login_task)

    async def _login(self) -> Session:
        try:
            result = await self.authenticator.login()
            session = Session(
                rest_url=result.rest_url,
                bh_rest_token=result.bh_rest_token,
                acquired_at=self._clock(),
            )
            self._session = session
            return session
        except Exception as e:
            self._log.warning("Bullhorn login failed: %s", e)
            raise
        finally:
            self._login_task = None
