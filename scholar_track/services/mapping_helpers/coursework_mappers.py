# /scholar_track/services/mapping_helpers/coursework_mappers.py

"""Field mappers for assignments and grades."""

from typing import Any, Dict, Mapping

from ...models.assignment_model import Assignment
from ...models.grade_model import Grade, GradeStatus
from .coercion import (
    as_input_dict, map_fields, to_enum_value, to_float,
    to_int, to_number, to_optional_str, to_str,
)
from .relations import normalize_relation

# --- Assignments ---

ASSIGNMENT_WRITE_FIELDS = {
    "title": ("title_c", to_str),
    "description": ("description_c", to_str),
    "dueDate": ("due_date_c", to_str),
    "maxPoints": ("max_points_c", lambda value: to_int(value, default=100)),
    "type": ("type_c", to_str),
    "courseId": ("course_id_c", normalize_relation),
}


def assignment_to_view(record: Mapping[str, Any]) -> Assignment:
    return Assignment(
        Id=to_int(record.get("Id")),
        title=to_str(record.get("title_c")),
        description=to_str(record.get("description_c")),
        dueDate=to_str(record.get("due_date_c")),
        maxPoints=to_int(record.get("max_points_c"), default=100),
        type=to_str(record.get("type_c")),
        courseId=normalize_relation(record.get("course_id_c")),
    )


def assignment_to_payload(data: Any) -> Dict[str, Any]:
    values = as_input_dict(data)
    payload = map_fields(values, ASSIGNMENT_WRITE_FIELDS)
    if "title" in values:
        payload["Name"] = to_str(values["title"])
    return payload


# --- Grades ---

GRADE_WRITE_FIELDS = {
    "score": ("score_c", to_number),
    "submissionDate": ("submission_date_c", to_str),
    "status": ("status_c", to_str),
    "feedback": ("feedback_c", to_optional_str),
    "studentId": ("student_id_c", normalize_relation),
    "assignmentId": ("assignment_id_c", normalize_relation),
}


def grade_to_view(record: Mapping[str, Any]) -> Grade:
    return Grade(
        Id=to_int(record.get("Id")),
        score=to_float(record.get("score_c")),
        submissionDate=to_str(record.get("submission_date_c")),
        status=to_enum_value(record.get("status_c"), GradeStatus, GradeStatus.PENDING),
        feedback=to_optional_str(record.get("feedback_c")),
        studentId=normalize_relation(record.get("student_id_c")),
        assignmentId=normalize_relation(record.get("assignment_id_c")),
    )


def grade_to_payload(data: Any) -> Dict[str, Any]:
    return map_fields(as_input_dict(data), GRADE_WRITE_FIELDS)
