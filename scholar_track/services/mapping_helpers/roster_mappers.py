# /scholar_track/services/mapping_helpers/roster_mappers.py

"""
Field mappers for the roster entities: students and courses.

`*_to_view` turns a backend record into its view model and never raises;
`*_to_payload` turns a view-shaped mapping (or pydantic model) into the
subset of backend columns the platform accepts on create/update.
"""

from typing import Any, Dict, Mapping

from ...models.course_model import Course
from ...models.student_model import Student, StudentStatus
from .coercion import (
    as_input_dict, join_id_list, map_fields, parse_id_list,
    to_enum_value, to_float, to_int, to_str,
)

# --- Students ---

STUDENT_WRITE_FIELDS = {
    "firstName": ("first_name_c", to_str),
    "lastName": ("last_name_c", to_str),
    "studentId": ("student_id_c", to_str),
    "email": ("email_c", to_str),
    "phone": ("phone_c", to_str),
    "enrollmentDate": ("enrollment_date_c", to_str),
    "status": ("status_c", to_str),
    "gradeLevel": ("grade_level_c", to_str),
}


def display_code(record_id: int) -> str:
    return f"STU{record_id:03d}"


def student_to_view(record: Mapping[str, Any]) -> Student:
    record_id = to_int(record.get("Id"))
    return Student(
        Id=record_id,
        firstName=to_str(record.get("first_name_c")),
        lastName=to_str(record.get("last_name_c")),
        studentId=to_str(record.get("student_id_c")) or display_code(record_id),
        email=to_str(record.get("email_c")),
        phone=to_str(record.get("phone_c")),
        enrollmentDate=to_str(record.get("enrollment_date_c")),
        status=to_enum_value(record.get("status_c"), StudentStatus, StudentStatus.ACTIVE),
        gradeLevel=to_str(record.get("grade_level_c")),
        gpa=to_float(record.get("gpa_c")),
    )


def student_to_payload(data: Any) -> Dict[str, Any]:
    values = as_input_dict(data)
    payload = map_fields(values, STUDENT_WRITE_FIELDS)
    if "firstName" in values or "lastName" in values:
        full_name = f"{to_str(values.get('firstName'))} {to_str(values.get('lastName'))}"
        payload["Name"] = full_name.strip()
    return payload


# --- Courses ---

COURSE_WRITE_FIELDS = {
    "name": ("name_c", to_str),
    "code": ("code_c", to_str),
    "semester": ("semester_c", to_str),
    "credits": ("credits_c", to_int),
    "enrolledStudents": ("enrolled_students_c", join_id_list),
}


def course_to_view(record: Mapping[str, Any]) -> Course:
    version = record.get("version_c")
    return Course(
        Id=to_int(record.get("Id")),
        name=to_str(record.get("name_c")) or to_str(record.get("Name")),
        code=to_str(record.get("code_c")),
        semester=to_str(record.get("semester_c")),
        credits=to_int(record.get("credits_c")),
        enrolledStudents=parse_id_list(record.get("enrolled_students_c")),
        version=to_int(version) if version is not None else None,
    )


def course_to_payload(data: Any) -> Dict[str, Any]:
    values = as_input_dict(data)
    payload = map_fields(values, COURSE_WRITE_FIELDS)
    if "name" in values:
        payload["Name"] = to_str(values["name"])
    # The version token is only sent when the caller actually holds one.
    if values.get("version") is not None:
        payload["version_c"] = to_int(values["version"])
    return payload
