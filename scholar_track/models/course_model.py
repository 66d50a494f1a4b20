# /scholar_track/models/course_model.py

from typing import List, Optional

from pydantic import BaseModel, Field


class Course(BaseModel):
    """
    A class/course. `enrolledStudents` holds Student Ids; the platform keeps
    it as a comma-joined string. `version` is the optimistic-concurrency token
    that must travel with every membership write.
    """
    Id: int
    name: str = ""
    code: str = ""
    semester: str = ""
    credits: int = 0
    enrolledStudents: List[int] = Field(default_factory=list)
    version: Optional[int] = None


class CourseCreate(BaseModel):
    name: str = Field(..., min_length=1)
    code: str = ""
    semester: str = ""
    credits: int = Field(default=0, ge=0)


class CourseUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = None
    semester: Optional[str] = None
    credits: Optional[int] = Field(default=None, ge=0)
    enrolledStudents: Optional[List[int]] = None
    version: Optional[int] = None
