"""Client configuration via pydantic-settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic_settings import BaseSettings


DEFAULT_AUTH_ENDPOINT = "https://auth.bullhornstaffing.com/oauth/"
DEFAULT_API_ROOT = "https://rest.bullhornstaffing.com/rest-services/"


@dataclass(frozen=True)
class Credentials:
    """Long-lived credentials used for every login."""

    username: str
    password: str = field(repr=False)
    client_id: str
    client_secret: str = field(repr=False)

    def missing(self) -> list[str]:
        """Names of the fields that are empty."""
        return [
            name
            for name in ("username", "password", "client_id", "client_secret")
            if not getattr(self, name)
        ]


class BullhornSettings(BaseSettings):
    auth_endpoint: str = DEFAULT_AUTH_ENDPOINT
    api_root: str = DEFAULT_API_ROOT
    version: str = "2.0"
    username: str = ""
    password: str = ""
    client_id: str = ""
    client_secret: str = ""
    # None disables the timeout; a hung hop hangs the whole login.
    timeout: float | None = None

    model_config = {"env_prefix": "BULLHORN_", "env_file": ".env", "extra": "ignore"}

    def credentials(self) -> Credentials:
        return Credentials(
            username=self.username,
            password=self.password,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )
