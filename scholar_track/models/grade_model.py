# /scholar_track/models/grade_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GradeStatus(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    GRADED = "graded"
    OVERDUE = "overdue"


class Grade(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    Id: int
    score: float = 0.0
    submissionDate: str = ""
    status: GradeStatus = GradeStatus.PENDING
    feedback: Optional[str] = None
    studentId: Optional[int] = None
    assignmentId: Optional[int] = None


class GradeCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    score: float = Field(..., ge=0, le=100)
    submissionDate: str = ""
    status: GradeStatus = GradeStatus.PENDING
    feedback: Optional[str] = None
    studentId: int
    assignmentId: int


class GradeUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    score: Optional[float] = Field(default=None, ge=0, le=100)
    submissionDate: Optional[str] = None
    status: Optional[GradeStatus] = None
    feedback: Optional[str] = None
    studentId: Optional[int] = None
    assignmentId: Optional[int] = None
