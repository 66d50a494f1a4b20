# /scholar_track/routers/router_helpers.py

from typing import Any, Optional

from fastapi import HTTPException, status

from ..models.common_model import ApiResult, ErrorKind
from ..services.notifier import Notifier
from ..services.resource_helpers.base_resource import ResourceError

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.TRANSPORT: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.PLATFORM: status.HTTP_502_BAD_GATEWAY,
}


def error_response(kind: Optional[ErrorKind], message: str, notifier: Notifier) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_KIND.get(kind, status.HTTP_502_BAD_GATEWAY),
        detail={"message": message, "notifications": notifier.messages()},
    )


def unwrap_or_raise(result: ApiResult, notifier: Notifier) -> Any:
    """Returns the result's value, or raises the HTTPException matching its kind."""
    if not result.ok:
        raise error_response(result.kind, result.message, notifier)
    return result.value


def resource_error_response(error: ResourceError, notifier: Notifier) -> HTTPException:
    return error_response(error.kind, error.message, notifier)
