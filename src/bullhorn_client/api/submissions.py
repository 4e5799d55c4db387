"""Job submissions API."""

from __future__ import annotations

import time
from typing import Any, TYPE_CHECKING

from ..errors import DomainError

if TYPE_CHECKING:
    from .client import BullhornClient


class SubmissionsAPI:
    """Submit candidates to job orders."""

    def __init__(self, client: "BullhornClient"):
        self._client = client

    async def create(
        self,
        candidate_id: int,
        job_order_id: int,
        status: str = "New Lead",
        source: str | None = None,
    ) -> int:
        """Create a JobSubmission linking a candidate to a job order.

        Args:
            candidate_id: Candidate to submit
            job_order_id: Job order being applied to
            status: Submission status (default "New Lead")
            source: Where the application came from

        Returns:
            The new submission's id
        """
        data: dict[str, Any] = {
            "candidate": {"id": candidate_id},
            "jobOrder": {"id": job_order_id},
            "status": status,
            "dateWebResponse": int(time.time() * 1000),
        }
        if source:
            data["source"] = source

        resp = await self._client._put("entity/JobSubmission", data)
        submission_id = resp.get("changedEntityId")
        if submission_id is None:
            raise DomainError("JobSubmission create returned no changedEntityId", details=resp)
        return submission_id
