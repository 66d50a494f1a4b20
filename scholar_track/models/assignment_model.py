# /scholar_track/models/assignment_model.py

from typing import Optional

from pydantic import BaseModel, Field


class Assignment(BaseModel):
    Id: int
    title: str = ""
    description: str = ""
    dueDate: str = ""
    maxPoints: int = 100
    type: str = ""
    courseId: Optional[int] = None


class AssignmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    dueDate: str = ""
    maxPoints: int = Field(default=100, gt=0)
    type: str = ""
    courseId: int


class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    dueDate: Optional[str] = None
    maxPoints: Optional[int] = Field(default=None, gt=0)
    type: Optional[str] = None
    courseId: Optional[int] = None
