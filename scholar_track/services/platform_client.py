# /scholar_track/services/platform_client.py

"""
The client-context object every entity API module is constructed with.

`PlatformClient` defines the platform boundary; `HttpPlatformClient` talks to
the hosted backend over HTTP. Implementations raise `PlatformError` for every
transport-level failure (unreachable host, HTTP error status, undecodable or
malformed body) and nothing else, so callers have one exception to catch.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..app_logger import get_logger
from ..models.platform_model import (
    FetchResponse, FunctionResponse, MutationResponse, RecordResponse,
)

logger = get_logger("platform_client")

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class PlatformError(Exception):
    """The platform could not be reached or answered with something unusable."""


class PlatformClient(ABC):

    @abstractmethod
    async def fetch_records(self, table_name: str, params: Dict[str, Any]) -> FetchResponse: ...

    @abstractmethod
    async def get_record_by_id(self, table_name: str, record_id: int, params: Dict[str, Any]) -> RecordResponse: ...

    @abstractmethod
    async def create_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse: ...

    @abstractmethod
    async def update_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse: ...

    @abstractmethod
    async def delete_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse: ...

    @abstractmethod
    async def invoke_function(self, name: str, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> FunctionResponse: ...

    async def aclose(self) -> None:
        """Releases any connections held by the client."""


def parse_response(model: Type[ResponseModel], raw: Any) -> ResponseModel:
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise PlatformError(f"Unexpected response format: {e}") from e


class HttpPlatformClient(PlatformClient):
    """
    Hosted-platform client. One `httpx.AsyncClient` is kept for the lifetime
    of the instance; call `aclose()` on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        project_id: str,
        public_key: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not base_url:
            raise ValueError("FATAL ERROR: PLATFORM_BASE_URL is not set.")
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "X-Project-Id": project_id,
                "Authorization": f"Bearer {public_key}",
                "Content-Type": "application/json",
            },
        )

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self._http.request(method, path, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.exception("Platform call failed: %s %s", method, path)
            raise PlatformError(f"Error calling platform {method} {path}: {e}") from e
        except ValueError as e:
            # response.json() on a non-JSON body
            logger.exception("Platform returned a non-JSON body: %s %s", method, path)
            raise PlatformError(f"Platform returned an undecodable body for {path}") from e

    async def fetch_records(self, table_name: str, params: Dict[str, Any]) -> FetchResponse:
        raw = await self._request("POST", f"/tables/{table_name}/records/query", params)
        return parse_response(FetchResponse, raw)

    async def get_record_by_id(self, table_name: str, record_id: int, params: Dict[str, Any]) -> RecordResponse:
        raw = await self._request("POST", f"/tables/{table_name}/records/{record_id}", params)
        return parse_response(RecordResponse, raw)

    async def create_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        raw = await self._request("POST", f"/tables/{table_name}/records", params)
        return parse_response(MutationResponse, raw)

    async def update_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        raw = await self._request("PUT", f"/tables/{table_name}/records", params)
        return parse_response(MutationResponse, raw)

    async def delete_record(self, table_name: str, params: Dict[str, Any]) -> MutationResponse:
        raw = await self._request("DELETE", f"/tables/{table_name}/records", params)
        return parse_response(MutationResponse, raw)

    async def invoke_function(self, name: str, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> FunctionResponse:
        raw = await self._request("POST", f"/functions/{name}/invoke", {"body": body, "headers": headers or {}})
        return parse_response(FunctionResponse, raw)

    async def aclose(self) -> None:
        await self._http.aclose()
