# /scholar_track/models/report_model.py

from typing import Dict

from pydantic import BaseModel, Field


class OverviewReport(BaseModel):
    """
    Defines the data contract of the academic overview report: summary counts,
    the letter-grade distribution and the enrollment per grade level.
    """
    totalStudents: int = Field(..., example=120)
    activeStudents: int = Field(..., example=112)
    totalCourses: int = Field(..., example=8)
    totalGrades: int = Field(..., example=640)
    averageGPA: float = Field(..., description="Mean GPA rounded to two decimals.", example=3.21)
    gradeDistribution: Dict[str, int]
    enrollmentByGrade: Dict[str, int]
