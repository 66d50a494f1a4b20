# /scholar_track/models/student_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .settings_model import GradeLevel


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"
    GRADUATED = "graduated"


class Student(BaseModel):
    """
    The view model of a student record, as produced by the field mapper.
    `gpa` is computed by the platform and is never sent back on writes.
    """
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    Id: int
    firstName: str = ""
    lastName: str = ""
    studentId: str = Field(default="", description="Display code such as STU007.")
    email: str = ""
    phone: str = ""
    enrollmentDate: str = ""
    status: StudentStatus = StudentStatus.ACTIVE
    gradeLevel: str = ""
    gpa: float = 0.0


class StudentCreate(BaseModel):
    """The payload accepted when a student is created."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)
    email: str = ""
    phone: str = ""
    gradeLevel: GradeLevel
    status: StudentStatus = StudentStatus.ACTIVE
    studentId: Optional[str] = None
    enrollmentDate: Optional[str] = None


class StudentUpdate(BaseModel):
    """All fields are optional; only the ones provided are sent."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    firstName: Optional[str] = Field(default=None, min_length=1)
    lastName: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    gradeLevel: Optional[GradeLevel] = None
    status: Optional[StudentStatus] = None
    studentId: Optional[str] = None
    enrollmentDate: Optional[str] = None
