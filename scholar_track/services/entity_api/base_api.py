# /scholar_track/services/entity_api/base_api.py

"""
The shared machinery behind every entity API module.

Each subclass names its table and its field mappers; this base class builds
the query parameters, makes one platform call per operation (list reads
keep requesting pages until the collection is exhausted),
inspects the per-record batch results, reports every failure through the
notifier and returns an `ApiResult`. Nothing here raises for a platform
failure: a failed call returns the method's empty sentinel inside a failed
result.
"""

from typing import Any, Dict, List, Optional

from ... import config
from ...app_logger import get_logger
from ...models.common_model import ApiResult, ErrorKind
from ...models.platform_model import MutationResponse, RecordResult
from ..notifier import Notifier
from ..outbox import Outbox
from ..platform_client import PlatformClient, PlatformError
from ..platform_schema import CONFLICT_CODE, NOT_FOUND_CODE, build_fields

logger = get_logger("entity_api")


# --- Query parameter builders ---

def equals(field_name: str, value: Any) -> Dict[str, Any]:
    return {"FieldName": field_name, "Operator": "EqualTo", "Values": [value]}


def contains_any(field_names: List[str], text: str) -> Dict[str, Any]:
    """A whereGroup matching records where any of the fields contains `text`."""
    return {
        "operator": "OR",
        "subGroups": [{
            "conditions": [
                {"fieldName": name, "operator": "Contains", "values": [text]} for name in field_names
            ],
            "operator": "OR",
        }],
    }


def is_unfiltered(value: Optional[str]) -> bool:
    return value is None or str(value).strip() in ("", "all")


class BaseEntityApi:
    table_name: str = ""
    entity_label: str = "record"
    entity_plural: str = "records"
    order_by: List[Dict[str, str]] = [{"fieldName": "Id", "sorttype": "ASC"}]
    page_size: Optional[int] = None
    # List reads follow the pages until the whole collection is loaded.
    fetch_all_pages: bool = True

    def __init__(self, client: PlatformClient, notifier: Notifier, outbox: Optional[Outbox] = None):
        self.client = client
        self.notifier = notifier
        self.outbox = outbox

    # --- Mapping hooks (implemented per entity) ---

    def to_view(self, record: Dict[str, Any]):
        raise NotImplementedError

    def to_payload(self, data: Any) -> Dict[str, Any]:
        raise NotImplementedError

    def prepare_create(self, data: Any) -> Dict[str, Any]:
        """Builds the create payload; subclasses add their defaults here."""
        return self.to_payload(data)

    # --- Helpers ---

    @property
    def limit(self) -> int:
        return self.page_size or config.DEFAULT_PAGE_SIZE

    def build_params(
        self,
        where: Optional[List[Dict[str, Any]]] = None,
        where_groups: Optional[List[Dict[str, Any]]] = None,
        offset: int = 0,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "fields": build_fields(self.table_name),
            "orderBy": list(self.order_by),
            "pagingInfo": {"limit": self.limit, "offset": offset},
        }
        if where:
            params["where"] = where
        if where_groups:
            params["whereGroups"] = where_groups
        return params

    def _transport_failure(self, action: str, error: PlatformError, sentinel: Any) -> ApiResult:
        self.notifier.error(f"Failed to {action}")
        return ApiResult.failure(ErrorKind.TRANSPORT, str(error), sentinel=sentinel)

    def _platform_failure(self, action: str, message: str, sentinel: Any) -> ApiResult:
        self.notifier.error(message or f"Failed to {action}")
        return ApiResult.failure(ErrorKind.PLATFORM, message or f"Failed to {action}", sentinel=sentinel)

    def _report_record_failure(self, result: RecordResult) -> None:
        for error in result.errors:
            self.notifier.error(f"{error.fieldLabel}: {error.message}")
        if result.message:
            self.notifier.error(result.message)

    @staticmethod
    def _failure_kind(failed: List[RecordResult]) -> ErrorKind:
        codes = {r.code for r in failed}
        if CONFLICT_CODE in codes:
            return ErrorKind.CONFLICT
        if NOT_FOUND_CODE in codes:
            return ErrorKind.NOT_FOUND
        return ErrorKind.VALIDATION

    # --- Reads ---

    async def _fetch_many(
        self,
        where: Optional[List[Dict[str, Any]]] = None,
        where_groups: Optional[List[Dict[str, Any]]] = None,
    ) -> ApiResult:
        action = f"fetch {self.entity_plural}"
        records: List[Dict[str, Any]] = []

        while True:
            params = self.build_params(where, where_groups, offset=len(records))
            try:
                response = await self.client.fetch_records(self.table_name, params)
            except PlatformError as e:
                return self._transport_failure(action, e, sentinel=[])

            if not response.success:
                return self._platform_failure(action, response.message, sentinel=[])

            page = response.data or []
            records.extend(page)
            # A short page ends the collection; so does reaching the reported total.
            if not self.fetch_all_pages or len(page) < self.limit:
                break
            if response.total and len(records) >= response.total:
                break

        return ApiResult.success([self.to_view(record) for record in records])

    async def get_all(self) -> ApiResult:
        return await self._fetch_many()

    async def get_by_id(self, record_id: int) -> ApiResult:
        action = f"fetch {self.entity_label} {record_id}"
        try:
            response = await self.client.get_record_by_id(
                self.table_name, int(record_id), {"fields": build_fields(self.table_name)}
            )
        except PlatformError as e:
            return self._transport_failure(action, e, sentinel=None)

        if not response.success:
            return self._platform_failure(action, response.message, sentinel=None)
        if not response.data:
            message = f"{self.entity_label.capitalize()} {record_id} not found"
            self.notifier.error(message)
            return ApiResult.failure(ErrorKind.NOT_FOUND, message, sentinel=None)
        return ApiResult.success(self.to_view(response.data))

    # --- Writes ---

    async def _mutate(self, operation: str, records: List[Dict[str, Any]]) -> ApiResult:
        """Sends a batch (always one record in practice) and returns the first success."""
        action = f"{operation} {self.entity_label}"
        call = self.client.create_record if operation == "create" else self.client.update_record
        try:
            response: MutationResponse = await call(self.table_name, {"records": records})
        except PlatformError as e:
            return self._transport_failure(action, e, sentinel=None)

        if not response.success:
            return self._platform_failure(action, response.message, sentinel=None)

        results = response.results or []
        succeeded = [r for r in results if r.success]
        failed = [r for r in results if not r.success]

        if failed:
            logger.error("Failed to %s %d %s record(s)", operation, len(failed), self.entity_label)
            for result in failed:
                self._report_record_failure(result)

        if succeeded:
            return ApiResult.success(self.to_view(succeeded[0].data or {}))

        if not failed:
            return self._platform_failure(action, "Unexpected response format", sentinel=None)
        return ApiResult.failure(
            self._failure_kind(failed), failed[0].message or f"Failed to {action}", sentinel=None
        )

    async def create(self, data: Any) -> ApiResult:
        return await self._mutate("create", [self.prepare_create(data)])

    async def update(self, record_id: int, data: Any) -> ApiResult:
        payload = {"Id": int(record_id), **self.to_payload(data)}
        return await self._mutate("update", [payload])

    async def delete(self, record_id: int) -> ApiResult:
        action = f"delete {self.entity_label}"
        try:
            response = await self.client.delete_record(self.table_name, {"RecordIds": [int(record_id)]})
        except PlatformError as e:
            return self._transport_failure(action, e, sentinel=False)

        if not response.success:
            return self._platform_failure(action, response.message, sentinel=False)

        failed = [r for r in response.results or [] if not r.success]
        if failed:
            for result in failed:
                self._report_record_failure(result)
            return ApiResult.failure(
                self._failure_kind(failed), failed[0].message or f"Failed to {action}", sentinel=False
            )
        return ApiResult.success(True)
