"""OAuth module for Bullhorn authentication.

Provides the authorization-code login that turns credentials into a
platform session.

Usage:
    from bullhorn_client.oauth import Authenticator

    auth = Authenticator(http, settings.credentials())
    result = await auth.login()
"""

from .client import Authenticator, LoginResult, TokenPair

__all__ = [
    "Authenticator",
    "LoginResult",
    "TokenPair",
]
