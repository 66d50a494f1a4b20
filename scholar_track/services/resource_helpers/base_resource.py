# /scholar_track/services/resource_helpers/base_resource.py

"""
Stateful, cached view over one entity API module.

A resource keeps the last loaded list of records together with its loading
and error state, and keeps that cache in step with the mutations made
through it. It is the server-side counterpart of a UI data hook: create it,
`mount()` it once, mutate through it, `unmount()` it when done. Results that
arrive after `unmount()` are dropped instead of touching the state.
"""

from enum import Enum
from typing import Any, List, Optional

from ...app_logger import get_logger
from ...models.common_model import ApiResult, ErrorKind
from ..entity_api.base_api import BaseEntityApi

logger = get_logger("resources")


class ResourceState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


class ResourceError(Exception):
    """Raised by a resource mutation that the platform did not accept."""

    def __init__(self, kind: Optional[ErrorKind], message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class BaseResource:
    def __init__(self, api: BaseEntityApi):
        self.api = api
        self.items: List[Any] = []
        self.loading = False
        self.error = ""
        self.state = ResourceState.IDLE
        self._mounted = False
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    # --- Lifecycle ---

    async def mount(self) -> None:
        if self._mounted or self._disposed:
            return
        self._mounted = True
        await self.load_all()

    def unmount(self) -> None:
        self._disposed = True

    # --- Helpers ---

    def _fail(self, message: str, result: ApiResult) -> ResourceError:
        if not self._disposed:
            self.error = message
        logger.error("%s: %s", message, result.message)
        return ResourceError(result.kind, result.message or message)

    def _succeeded(self, action: str) -> None:
        self.api.notifier.success(f"{self.api.entity_label.capitalize()} {action} successfully")

    def _replace(self, record_id: int, item: Any) -> None:
        self.items = [item if existing.Id == record_id else existing for existing in self.items]

    async def _reload(self, fetch, failure_message: str) -> List[Any]:
        """Drives the loading state machine around one list fetch."""
        self.loading = True
        self.error = ""
        self.state = ResourceState.LOADING

        result: ApiResult = await fetch()
        if self._disposed:
            return result.value

        if result.ok:
            self.items = list(result.value)
            self.state = ResourceState.READY
        else:
            self.error = failure_message
            self.state = ResourceState.ERRORED
            logger.error("%s: %s", failure_message, result.message)
        self.loading = False
        return result.value

    # --- Actions ---

    async def load_all(self) -> List[Any]:
        return await self._reload(self.api.get_all, f"Failed to load {self.api.entity_plural}")

    async def create(self, data: Any) -> Any:
        result = await self.api.create(data)
        if not result.ok:
            raise self._fail(f"Failed to create {self.api.entity_label}", result)
        if not self._disposed:
            self.items = self.items + [result.value]
        self._succeeded("created")
        return result.value

    async def update(self, record_id: int, data: Any) -> Any:
        result = await self.api.update(record_id, data)
        if not result.ok:
            raise self._fail(f"Failed to update {self.api.entity_label}", result)
        if not self._disposed:
            self._replace(int(record_id), result.value)
        self._succeeded("updated")
        return result.value

    async def delete(self, record_id: int) -> bool:
        result = await self.api.delete(record_id)
        if not result.ok:
            raise self._fail(f"Failed to delete {self.api.entity_label}", result)
        if not self._disposed:
            self.items = [item for item in self.items if item.Id != int(record_id)]
        self._succeeded("deleted")
        return True
