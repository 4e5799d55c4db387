"""Job orders API."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .client import BullhornClient

# Largest page the open-jobs query asks for.
MAX_QUERY_COUNT = 499


class JobOrdersAPI:
    """Job orders for Bullhorn.

    Usage:
        async with BullhornClient(settings) as bullhorn:
            jobs = await bullhorn.jobs.get_open_jobs()
            titles = [job["title"] for job in jobs]
    """

    def __init__(self, client: "BullhornClient"):
        self._client = client

    async def get_open_jobs(
        self,
        fields: str = "*",
        count: int = MAX_QUERY_COUNT,
    ) -> list[dict[str, Any]]:
        """List open job orders.

        Args:
            fields: Comma-separated field projection (default all fields)
            count: Max rows to return (capped at 499)

        Returns:
            List of JobOrder records
        """
        resp = await self._client._get(
            "query/JobOrder",
            fields=fields,
            where="isOpen=true",
            count=min(count, MAX_QUERY_COUNT),
        )
        return resp.get("data") or []
