# /scholar_track/models/activity_model.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityStatus(str, Enum):
    PLANNING = "Planning"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class CurriculumActivity(BaseModel):
    """A curriculum activity. `attachedFiles` holds File Ids."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    Id: int
    title: str = ""
    description: str = ""
    type: str = ""
    subject: str = ""
    gradeLevel: str = ""
    duration: str = ""
    startDate: str = ""
    endDate: str = ""
    status: ActivityStatus = ActivityStatus.PLANNING
    instructor: str = ""
    participants: int = 0
    materials: str = ""
    objectives: str = ""
    attachedFiles: List[int] = Field(default_factory=list)


class ActivityCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    description: str = ""
    gradeLevel: str = ""
    duration: str = ""
    startDate: str = ""
    endDate: str = ""
    status: ActivityStatus = ActivityStatus.PLANNING
    instructor: str = ""
    participants: int = Field(default=0, ge=0)
    materials: str = ""
    objectives: str = ""
    attachedFiles: List[int] = Field(default_factory=list)


class ActivityUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: Optional[str] = Field(default=None, min_length=1)
    type: Optional[str] = None
    subject: Optional[str] = None
    description: Optional[str] = None
    gradeLevel: Optional[str] = None
    duration: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    status: Optional[ActivityStatus] = None
    instructor: Optional[str] = None
    participants: Optional[int] = Field(default=None, ge=0)
    materials: Optional[str] = None
    objectives: Optional[str] = None
    attachedFiles: Optional[List[int]] = None


class ActivityFilters(BaseModel):
    """Search filters; "all" or an empty string disables a filter."""
    status: str = "all"
    subject: str = "all"
    type: str = "all"
