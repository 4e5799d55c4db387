"""Async client for the Bullhorn staffing REST API.

Logs in through Bullhorn's authorization-code flow, keeps the resulting
session for up to eight minutes, and logs in again transparently when it
goes stale. Concurrent callers share a single login.

Examples
--------

```python
from bullhorn_client import BullhornClient, BullhornSettings

settings = BullhornSettings(
    username="api.user",
    password="secret",
    client_id="client-id",
    client_secret="client-secret",
)

async with BullhornClient(settings) as bullhorn:
    jobs = await bullhorn.jobs.get_open_jobs()
```

Settings can also come from ``BULLHORN_*`` environment variables or a
``.env`` file.
"""

from .api import BullhornClient
from .auth import SESSION_MAX_AGE, Session, SessionManager, SessionState
from .config import BullhornSettings, Credentials
from .errors import (
    AuthError,
    AuthTransportError,
    BullhornError,
    DomainError,
    LoginError,
    TransportError,
)
from .oauth import Authenticator, LoginResult, TokenPair

__version__ = "0.1.0"

__all__ = [
    "Authenticator",
    "AuthError",
    "AuthTransportError",
    "BullhornClient",
    "BullhornError",
    "BullhornSettings",
    "Credentials",
    "DomainError",
    "LoginError",
    "LoginResult",
    "SESSION_MAX_AGE",
    "Session",
    "SessionManager",
    "SessionState",
    "TokenPair",
    "TransportError",
]
