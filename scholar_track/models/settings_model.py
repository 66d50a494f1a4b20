# /scholar_track/models/settings_model.py

"""
The single source of truth for school-wide academic settings: the grade
levels a student can be enrolled in and the letter-grade scale used by the
reports. Both the student models and the report service import from here.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, model_validator


class GradeLevel(str, Enum):
    NINTH = "9th Grade"
    TENTH = "10th Grade"
    ELEVENTH = "11th Grade"
    TWELFTH = "12th Grade"


GRADE_LEVELS: List[str] = [level.value for level in GradeLevel]

LETTER_GRADES: List[str] = ["A", "B", "C", "D", "F"]


class GradingScale(BaseModel):
    """
    Minimum score (inclusive) for each passing letter grade. Anything below
    `dMin` is an F. Thresholds must be strictly descending.
    """
    aMin: int = Field(default=90, ge=0, le=100)
    bMin: int = Field(default=80, ge=0, le=100)
    cMin: int = Field(default=70, ge=0, le=100)
    dMin: int = Field(default=60, ge=0, le=100)

    @model_validator(mode="after")
    def thresholds_must_descend(self):
        if not (self.aMin > self.bMin > self.cMin > self.dMin):
            raise ValueError("Grade thresholds must be strictly descending (A > B > C > D).")
        return self

    def letter_for(self, score: float) -> str:
        if score >= self.aMin:
            return "A"
        if score >= self.bMin:
            return "B"
        if score >= self.cMin:
            return "C"
        if score >= self.dMin:
            return "D"
        return "F"
