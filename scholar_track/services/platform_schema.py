# /scholar_track/services/platform_schema.py

"""
The fixed per-table contracts of the backend platform: table names, the
exact column names each entity reads and writes, which columns are lookups
to other tables, and which tables carry an optimistic-concurrency token.

Both the entity API modules (to build field lists) and the local platform
(to validate writes and resolve lookups) read from here.
"""

from typing import Dict, List

STUDENT_TABLE = "student_c"
COURSE_TABLE = "course_c"
ASSIGNMENT_TABLE = "assignment_c"
GRADE_TABLE = "grade_c"
ACTIVITY_TABLE = "curriculum_activity_c"
FILES_TABLE = "files_c"

VERSION_FIELD = "version_c"

TABLE_FIELDS: Dict[str, List[str]] = {
    STUDENT_TABLE: [
        "Name", "first_name_c", "last_name_c", "student_id_c", "email_c", "phone_c",
        "enrollment_date_c", "status_c", "grade_level_c", "gpa_c",
    ],
    COURSE_TABLE: [
        "Name", "name_c", "code_c", "semester_c", "credits_c", "enrolled_students_c", VERSION_FIELD,
    ],
    ASSIGNMENT_TABLE: [
        "Name", "title_c", "description_c", "due_date_c", "max_points_c", "type_c", "course_id_c",
    ],
    GRADE_TABLE: [
        "Name", "score_c", "submission_date_c", "status_c", "feedback_c", "student_id_c", "assignment_id_c",
    ],
    ACTIVITY_TABLE: [
        "Name", "title_c", "description_c", "type_c", "subject_c", "grade_level_c", "duration_c",
        "start_date_c", "end_date_c", "status_c", "instructor_c", "participants_c", "materials_c",
        "objectives_c", "attached_files_c",
    ],
    FILES_TABLE: [
        "Name", "Tags", "file_name_c", "file_type_c", "file_size_c", "upload_date_c",
        "openai_description_c", "entity_type_c", "entity_id_c",
    ],
}

# Lookup columns and the table they point at. The platform returns these
# resolved as {"Id": ..., "Name": ...}.
LOOKUP_FIELDS: Dict[str, Dict[str, str]] = {
    ASSIGNMENT_TABLE: {"course_id_c": COURSE_TABLE},
    GRADE_TABLE: {"student_id_c": STUDENT_TABLE, "assignment_id_c": ASSIGNMENT_TABLE},
}

VERSIONED_TABLES = {COURSE_TABLE}

CONFLICT_CODE = "CONFLICT"
NOT_FOUND_CODE = "NOT_FOUND"


def build_fields(table_name: str) -> List[Dict]:
    """Builds the `fields` parameter the platform expects for a table."""
    return [{"field": {"Name": name}} for name in TABLE_FIELDS[table_name]]
