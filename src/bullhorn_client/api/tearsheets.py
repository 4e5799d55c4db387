"""Tearsheets API."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .client import BullhornClient


class TearsheetsAPI:
    """Tearsheet associations."""

    def __init__(self, client: "BullhornClient"):
        self._client = client

    async def add_candidate(self, tearsheet_id: int, candidate_id: int) -> dict[str, Any]:
        """Associate a candidate with a tearsheet."""
        return await self._client._put(f"entity/Tearsheet/{tearsheet_id}/candidates/{candidate_id}")
