"""Beeswax Entity Manager.

Generic CRUD operations for one Beeswax entity kind (advertisers, campaigns,
line items, ...), parameterized by the entity's REST path and id field.
Writes are verified by reading the entity back.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from beeswax_client.config_schema import EntityConfig
from beeswax_client.errors import BeeswaxAPIError, is_not_found_error
from beeswax_client.schemas import OperationResult

if TYPE_CHECKING:
    from beeswax_client.client import BeeswaxClient

logger = logging.getLogger(__name__)

PAGE_SIZE = 50


def _payload(body: Any) -> Any:
    return body.get("payload") if isinstance(body, dict) else None


def _first(payload: Any) -> Any:
    if isinstance(payload, list):
        return payload[0] if payload else None
    return payload


class BeeswaxEntityManager:
    """Manages CRUD operations for one Beeswax entity.

    Attributes:
        client: Beeswax API client
        entity: Endpoint and id field of the managed entity
    """

    def __init__(
        self,
        client: "BeeswaxClient",
        entity: EntityConfig,
        log_func: Callable[[str], None] | None = None,
    ):
        """Initialize the entity manager.

        Args:
            client: Beeswax API client
            entity: Endpoint and id field of the managed entity
            log_func: Optional logging function
        """
        self.client = client
        self.entity = entity
        self.log = log_func or (lambda msg: logger.info(msg))

    @property
    def endpoint(self) -> str:
        return self.entity.endpoint

    @property
    def id_field(self) -> str:
        return self.entity.id_field

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self.endpoint!r}, id_field={self.id_field!r})"

    # =========================================================================
    # Reads
    # =========================================================================

    async def find(self, entity_id: int | str) -> OperationResult:
        """Find a single entity by id.

        Args:
            entity_id: Entity identifier

        Returns:
            OperationResult with the record, or a "Not found" failure if
            Beeswax returns no match
        """
        body = await self.client.get(self.endpoint, {self.id_field: entity_id})
        record = _first(_payload(body))
        if record is None:
            logger.debug(f"No {self.endpoint} record with {self.id_field}={entity_id}")
            return OperationResult.not_found()
        return OperationResult.ok(record)

    async def query(self, filters: dict[str, Any] | None = None) -> OperationResult:
        """Fetch one response worth of entities matching a JSON filter.

        Args:
            filters: Beeswax query body (field filters, rows, offset, ...)

        Returns:
            OperationResult with the unprocessed payload list
        """
        body = await self.client.get(self.endpoint, dict(filters or {}))
        return OperationResult.ok(_payload(body))

    async def query_all(self, filters: dict[str, Any] | None = None) -> OperationResult:
        """Fetch every entity matching a filter, PAGE_SIZE records at a time.

        Pages are sorted by the id field and returned in server order. The
        loop stops on a short page, or on a page that adds no record not
        already fetched, so an exact multiple of PAGE_SIZE costs one extra
        empty request and a server repeating a page cannot loop forever.

        Args:
            filters: Beeswax query body; rows, offset and sort_by are overridden

        Returns:
            OperationResult with all matching records
        """
        results: list[Any] = []
        seen_ids: set[Any] = set()
        offset = 0

        while True:
            page_body = {**(filters or {}), "rows": PAGE_SIZE, "offset": offset, "sort_by": self.id_field}
            page = _payload(await self.client.get(self.endpoint, page_body)) or []
            logger.debug(f"Fetched {len(page)} {self.endpoint} records at offset {offset}")

            added = 0
            for record in page:
                record_id = record.get(self.id_field) if isinstance(record, dict) else None
                if record_id is not None:
                    if record_id in seen_ids:
                        continue
                    seen_ids.add(record_id)
                results.append(record)
                added += 1

            if len(page) < PAGE_SIZE:
                break
            if added == 0:
                logger.warning(
                    f"Stopping {self.endpoint} pagination at offset {offset}: page added no new records"
                )
                break
            offset += PAGE_SIZE

        return OperationResult.ok(results)

    # =========================================================================
    # Writes
    # =========================================================================

    @staticmethod
    def _is_valid_body(body: Any) -> bool:
        return isinstance(body, dict) and len(body) > 0

    def _extract_id(self, payload: Any) -> Any:
        record = _first(payload)
        if isinstance(record, dict):
            return record.get("id", record.get(self.id_field))
        return record

    async def create(self, body: dict[str, Any]) -> OperationResult:
        """Create an entity and return it as read back from Beeswax.

        Args:
            body: Entity fields

        Returns:
            OperationResult with the created record, or a code 400 failure
            (without any request) if body is not a non-empty dict

        Raises:
            BeeswaxAPIError: If the create request fails or returns no id
        """
        # Beeswax answers an empty body with a misleading 401
        if not self._is_valid_body(body):
            return OperationResult.empty_body()

        created = await self.client.post(self.entity.strict_endpoint, body)
        entity_id = self._extract_id(_payload(created))
        if entity_id is None:
            raise BeeswaxAPIError(f"Beeswax {self.endpoint} create response has no id", response_body=created)
        self.log(f"Created Beeswax {self.endpoint} record: {entity_id}")

        return await self.find(entity_id)

    async def edit(
        self,
        entity_id: int | str,
        body: dict[str, Any],
        fail_on_not_found: bool = False,
    ) -> OperationResult:
        """Update an entity and return it as read back from Beeswax.

        Args:
            entity_id: Entity identifier
            body: Fields to update
            fail_on_not_found: Raise instead of returning "Not found" when
                the entity does not exist

        Returns:
            OperationResult with the updated record, or a code 400 failure
            for an invalid body or a missing entity

        Raises:
            BeeswaxAPIError: If the update fails for any other reason
        """
        if not self._is_valid_body(body):
            return OperationResult.empty_body()

        try:
            await self.client.put(self.entity.strict_endpoint, {**body, self.id_field: entity_id})
        except BeeswaxAPIError as e:
            if is_not_found_error(e, "update") and not fail_on_not_found:
                logger.info(f"Beeswax {self.endpoint} record {entity_id} not found for update")
                return OperationResult.not_found()
            raise

        self.log(f"Updated Beeswax {self.endpoint} record: {entity_id}")
        return await self.find(entity_id)

    async def delete(self, entity_id: int | str, fail_on_not_found: bool = False) -> OperationResult:
        """Delete an entity.

        Args:
            entity_id: Entity identifier
            fail_on_not_found: Raise instead of returning "Not found" when
                the entity does not exist

        Returns:
            OperationResult with the deleted record as reported by Beeswax

        Raises:
            BeeswaxAPIError: If the delete fails for any other reason
        """
        try:
            body = await self.client.delete(self.entity.strict_endpoint, {self.id_field: entity_id})
        except BeeswaxAPIError as e:
            if is_not_found_error(e, "delete") and not fail_on_not_found:
                logger.info(f"Beeswax {self.endpoint} record {entity_id} not found for delete")
                return OperationResult.not_found()
            raise

        self.log(f"Deleted Beeswax {self.endpoint} record: {entity_id}")
        return OperationResult.ok(_first(_payload(body)))

    async def upload(self, entity_id: int | str, file_path: str | Path) -> OperationResult:
        """Upload file content for an entity (e.g. a creative asset).

        Args:
            entity_id: Entity identifier
            file_path: Local file to upload

        Returns:
            OperationResult with the raw upload response

        Raises:
            BeeswaxAPIError: If authentication or the upload fails
        """
        response = await self.client.upload_file(
            f"{self.endpoint}/{entity_id}",
            self.entity.upload_field,
            file_path,
        )
        return OperationResult.ok(response)
