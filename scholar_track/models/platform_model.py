# /scholar_track/models/platform_model.py

"""
Response contracts of the backend platform. Both platform clients return
these models, so the entity API modules never inspect raw dictionaries.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    fieldLabel: str = ""
    message: str = ""


class RecordResult(BaseModel):
    """The outcome of a single record inside a create/update/delete batch."""
    success: bool
    data: Optional[Dict[str, Any]] = None
    errors: List[FieldError] = Field(default_factory=list)
    message: str = ""
    # Set to "CONFLICT" when the record carried a stale version token.
    code: Optional[str] = None


class FetchResponse(BaseModel):
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    message: str = ""
    total: int = 0


class RecordResponse(BaseModel):
    success: bool = True
    data: Optional[Dict[str, Any]] = None
    message: str = ""


class MutationResponse(BaseModel):
    success: bool
    results: Optional[List[RecordResult]] = None
    message: str = ""


class FunctionResponse(BaseModel):
    success: bool
    data: Optional[Dict[str, Any]] = None
    message: str = ""
