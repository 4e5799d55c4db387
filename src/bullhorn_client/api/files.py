"""Entity file attachments API."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import PurePath
from typing import Any, TYPE_CHECKING

from ..errors import DomainError

if TYPE_CHECKING:
    from .client import BullhornClient


class FilesAPI:
    """Attach files to candidates.

    Usage:
        async with BullhornClient(settings) as bullhorn:
            resume = Path("resume.pdf").read_bytes()
            file_id = await bullhorn.files.attach(candidate_id, "resume.pdf", resume)
    """

    def __init__(self, client: "BullhornClient"):
        self._client = client

    async def attach(
        self,
        candidate_id: int,
        name: str,
        content: bytes | str,
        *,
        file_type: str = "SAMPLE",
        external_id: str = "portfolio",
        content_type: str | None = None,
        description: str | None = None,
        attachment_type: str | None = None,
    ) -> int:
        """Upload a file onto a candidate record.

        Args:
            candidate_id: Candidate to attach the file to
            name: File name shown in Bullhorn (its extension is sent too)
            content: Raw bytes, or text which is UTF-8 encoded
            file_type: Bullhorn fileType (default "SAMPLE")
            external_id: Bullhorn externalID (default "portfolio")
            content_type: MIME type; guessed from the name when omitted
            description: Optional description
            attachment_type: Bullhorn attachment category, e.g. "Resume"

        Returns:
            The new file's id
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        data: dict[str, Any] = {
            "externalID": external_id,
            "fileContent": base64.b64encode(content).decode("ascii"),
            "fileType": file_type,
            "name": name,
        }
        extension = PurePath(name).suffix
        if extension:
            data["fileExtension"] = extension
        content_type = content_type or mimetypes.guess_type(name)[0]
        if content_type:
            data["contentType"] = content_type
        if description:
            data["description"] = description
        if attachment_type:
            data["type"] = attachment_type

        resp = await self._client._put(f"file/Candidate/{candidate_id}", data)
        file_id = resp.get("fileId")
        if file_id is None:
            raise DomainError("File upload returned no fileId", details=resp)
        return file_id
