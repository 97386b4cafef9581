"""Beeswax Segment Upload Manager.

Handles bulk audience segment ingestion: register an upload with metadata,
push the segment file, and read the upload record back.
"""

import logging
from pathlib import Path
from typing import Any

from beeswax_client.errors import BeeswaxAPIError
from beeswax_client.managers.entities import BeeswaxEntityManager, _payload
from beeswax_client.schemas import OperationResult

logger = logging.getLogger(__name__)

DEFAULT_CONTINENT = "NAM"


class SegmentUploadManager(BeeswaxEntityManager):
    """Manages segment uploads on top of the generic segment_upload CRUD."""

    @property
    def upload_endpoint(self) -> str:
        return f"{self.endpoint}/upload"

    async def create_upload(
        self,
        file_path: str | Path | None = None,
        *,
        user_id_type: str,
        file_name: str | None = None,
        size_in_bytes: int | None = None,
        continent: str = DEFAULT_CONTINENT,
        **extra: Any,
    ) -> OperationResult:
        """Register a segment upload (metadata only, no file content).

        Args:
            file_path: Optional source file; provides the default file_name
                and size_in_bytes
            user_id_type: Type of user ids in the file (e.g. "BEESWAX", "IDFA")
            file_name: Upload name
            size_in_bytes: Size of the file to be pushed
            continent: Beeswax continent code
            **extra: Other segment_upload fields passed through

        Returns:
            OperationResult with the registered upload

        Raises:
            ValueError: If no file_name is given and none can be derived
            BeeswaxAPIError: If the request fails
        """
        if file_path is not None:
            path = Path(file_path)
            file_name = file_name or path.name
            if size_in_bytes is None:
                size_in_bytes = path.stat().st_size

        if not file_name:
            raise ValueError("file_name is required when no file_path is given")

        body: dict[str, Any] = {
            **extra,
            "continent": continent,
            "file_name": file_name,
            "user_id_type": user_id_type,
        }
        if size_in_bytes is not None:
            body["size_in_bytes"] = size_in_bytes

        result = await self.client.post(self.endpoint, body)
        self.log(f"Registered Beeswax segment upload: {file_name}")
        return OperationResult.ok(_payload(result))

    async def upload_file(self, segment_upload_id: int | str, file_path: str | Path) -> OperationResult:
        """Push segment file content to a registered upload.

        Args:
            segment_upload_id: Id returned by create_upload
            file_path: Segment file to stream

        Returns:
            OperationResult with the raw upload response

        Raises:
            BeeswaxAPIError: If authentication or the upload fails
        """
        response = await self.client.upload_file(
            f"{self.upload_endpoint}/{segment_upload_id}",
            self.entity.upload_field,
            file_path,
        )
        return OperationResult.ok(response)

    async def upload_segment(self, file_path: str | Path, **params: Any) -> OperationResult:
        """Register a segment upload, push the file and read the upload back.

        Args:
            file_path: Segment file to upload
            **params: Passed to create_upload (user_id_type, continent, ...)

        Returns:
            OperationResult with the segment upload as read from Beeswax

        Raises:
            BeeswaxAPIError: If any of the requests fails
        """
        created = await self.create_upload(file_path, **params)
        segment_upload_id = self._extract_id(created.payload)
        if segment_upload_id is None:
            raise BeeswaxAPIError("Segment upload response has no id", response_body=created.payload)

        await self.upload_file(segment_upload_id, file_path)
        logger.info(f"Uploaded segment file {Path(file_path).name} as upload {segment_upload_id}")

        return await self.find(segment_upload_id)
