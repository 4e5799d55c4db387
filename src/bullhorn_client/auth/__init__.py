"""Session management for Bullhorn.

Usage:
    from bullhorn_client.auth import SessionManager

    manager = SessionManager(authenticator)
    session = await manager.get_valid_session()
"""

from .manager import SESSION_MAX_AGE, Session, SessionManager, SessionState

__all__ = [
    "SESSION_MAX_AGE",
    "Session",
    "SessionManager",
    "SessionState",
]
