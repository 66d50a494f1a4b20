# /scholar_track/models/common_model.py

"""
Shared result and relation types used across the data layer.

`ApiResult` is the single return shape of every entity API method. A failed
result still carries a `value`: the documented empty sentinel for that method
(`[]`, `None` or `False`), so callers that only read `value` keep working
while callers that care can branch on `ok` and `kind`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")


class ErrorKind(str, Enum):
    TRANSPORT = "transport"     # platform unreachable or returned garbage
    PLATFORM = "platform"       # platform answered success: false
    VALIDATION = "validation"   # every record in the batch was rejected
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"       # stale optimistic-concurrency token


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    ok: bool
    value: T
    kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, sentinel: Any = None) -> "ApiResult[Any]":
        return cls(ok=False, value=sentinel, kind=kind, message=message)


# --- Relations ---
# A lookup field arrives either as a bare id or as a resolved object.

class UnresolvedRelation(BaseModel):
    kind: str = "unresolved"
    id: int


class ResolvedRelation(BaseModel):
    kind: str = "resolved"
    id: int
    name: Optional[str] = None


Relation = Union[UnresolvedRelation, ResolvedRelation]
