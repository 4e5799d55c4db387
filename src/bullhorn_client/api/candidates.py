"""Candidates API - lookup and creation of Bullhorn candidates."""

from __future__ import annotations

import asyncio
from typing import Any, TYPE_CHECKING

from ..errors import DomainError

if TYPE_CHECKING:
    from .client import BullhornClient


def normalize_email(email: str) -> str:
    return email.strip().lower()


def quote_search_term(value: str) -> str:
    """Quote a value for a Lucene search query, escaping ``\\`` and ``"``."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class CandidatesAPI:
    """Candidates API for Bullhorn.

    Usage:
        async with BullhornClient(settings) as bullhorn:
            # Look up by email
            candidate = await bullhorn.candidates.find_by_email("jane@example.com")

            # Create unconditionally
            candidate_id = await bullhorn.candidates.create(
                "jane@example.com", first_name="Jane", last_name="Doe"
            )

            # Reuse an existing candidate or create one
            candidate_id = await bullhorn.candidates.get_or_create_by_email(
                "jane@example.com", first_name="Jane", last_name="Doe"
            )

    ``get_or_create_by_email`` remembers the id it resolved for each email,
    so repeating it for the same address never creates a second candidate.
    Bullhorn's search index lags behind creates, which makes the lookup
    alone unreliable for this.
    """

    def __init__(self, client: "BullhornClient"):
        self._client = client
        self._ids: dict[str, int] = {}
        self._pending: dict[str, asyncio.Task[int]] = {}

    async def find_by_email(self, email: str, fields: str = "id") -> dict[str, Any] | None:
        """Find the first candidate with this email.

        Args:
            email: Email address to search for
            fields: Comma-separated field projection (default "id")

        Returns:
            Candidate record, or None if there is no match
        """
        resp = await self._client._get(
            "search/Candidate",
            query=f"email:{quote_search_term(email.strip())}",
            fields=fields,
        )
        data = resp.get("data") or []
        return data[0] if data else None

    async def create(
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        **fields: Any,
    ) -> int:
        """Create a candidate.

        Args:
            email: Email address
            first_name: First name
            last_name: Last name
            **fields: Additional Candidate fields (phone, source, status, ...)

        Returns:
            The new candidate's id
        """
        data: dict[str, Any] = {"email": email.strip()}
        if first_name:
            data["firstName"] = first_name
        if last_name:
            data["lastName"] = last_name
        if first_name or last_name:
            data["name"] = " ".join(part for part in (first_name, last_name) if part)

        data.update(fields)

        resp = await self._client._put("entity/Candidate", data)
        candidate_id = resp.get("changedEntityId")
        if candidate_id is None:
            raise DomainError("Candidate create returned no changedEntityId", details=resp)
        return candidate_id

    async def get_or_create_by_email(
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        **fields: Any,
    ) -> int:
        """Return the id of the candidate with this email, creating one if needed.

        Concurrent calls for the same email share one lookup (and at most
        one create).
        """
        key = normalize_email(email)
        if not key:
            raise ValueError("email must be provided")

        if key in self._ids:
            return self._ids[key]

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(
                self._find_or_create(key, email, first_name, last_name, fields)
            )
            self._pending[key] = task
        return await asyncio.shield(task)

    async def _find_or_create(
        self,
        key: str,
        email: str,
        first_name: str | None,
        last_name: str | None,
        fields: dict[str, Any],
    ) -> int:
        try:
            existing = await self.find_by_email(email)
            if existing and existing.get("id") is not None:
                candidate_id = existing["id"]
            else:
                candidate_id = await self.create(email, first_name, last_name, **fields)
                self._client._log.info("Created Bullhorn candidate %s", candidate_id)
            self._ids[key] = candidate_id
            return candidate_id
        finally:
            self._pending.pop(key, None)
