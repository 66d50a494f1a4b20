# /scholar_track/services/mapping_helpers/activity_mappers.py

"""Field mappers for curriculum activities and their file attachments."""

from typing import Any, Dict, Mapping

from ...models.activity_model import ActivityStatus, CurriculumActivity
from ...models.file_model import FileRecord
from .coercion import (
    as_input_dict, join_id_list, map_fields, parse_id_list,
    to_enum_value, to_int, to_optional_str, to_str,
)
from .relations import normalize_relation

# --- Curriculum activities ---

ACTIVITY_WRITE_FIELDS = {
    "title": ("title_c", to_str),
    "description": ("description_c", to_str),
    "type": ("type_c", to_str),
    "subject": ("subject_c", to_str),
    "gradeLevel": ("grade_level_c", to_str),
    "duration": ("duration_c", to_str),
    "startDate": ("start_date_c", to_str),
    "endDate": ("end_date_c", to_str),
    "status": ("status_c", to_str),
    "instructor": ("instructor_c", to_str),
    "participants": ("participants_c", to_int),
    "materials": ("materials_c", to_str),
    "objectives": ("objectives_c", to_str),
    "attachedFiles": ("attached_files_c", join_id_list),
}


def activity_to_view(record: Mapping[str, Any]) -> CurriculumActivity:
    return CurriculumActivity(
        Id=to_int(record.get("Id")),
        title=to_str(record.get("title_c")),
        description=to_str(record.get("description_c")),
        type=to_str(record.get("type_c")),
        subject=to_str(record.get("subject_c")),
        gradeLevel=to_str(record.get("grade_level_c")),
        duration=to_str(record.get("duration_c")),
        startDate=to_str(record.get("start_date_c")),
        endDate=to_str(record.get("end_date_c")),
        status=to_enum_value(record.get("status_c"), ActivityStatus, ActivityStatus.PLANNING),
        instructor=to_str(record.get("instructor_c")),
        participants=to_int(record.get("participants_c")),
        materials=to_str(record.get("materials_c")),
        objectives=to_str(record.get("objectives_c")),
        attachedFiles=parse_id_list(record.get("attached_files_c")),
    )


def activity_to_payload(data: Any) -> Dict[str, Any]:
    values = as_input_dict(data)
    payload = map_fields(values, ACTIVITY_WRITE_FIELDS)
    if "title" in values:
        payload["Name"] = to_str(values["title"])
    return payload


# --- Files ---

FILE_WRITE_FIELDS = {
    "name": ("Name", to_str),
    "tags": ("Tags", to_str),
    "fileName": ("file_name_c", to_str),
    "fileType": ("file_type_c", to_str),
    "fileSize": ("file_size_c", to_int),
    "uploadDate": ("upload_date_c", to_str),
    "openaiDescription": ("openai_description_c", to_str),
    "entityType": ("entity_type_c", to_str),
    "entityId": ("entity_id_c", normalize_relation),
}


def file_to_view(record: Mapping[str, Any]) -> FileRecord:
    return FileRecord(
        Id=to_int(record.get("Id")),
        name=to_str(record.get("Name")),
        tags=to_str(record.get("Tags")),
        fileName=to_str(record.get("file_name_c")),
        fileType=to_str(record.get("file_type_c")),
        fileSize=to_int(record.get("file_size_c")),
        uploadDate=to_str(record.get("upload_date_c")),
        openaiDescription=to_optional_str(record.get("openai_description_c")),
        entityType=to_str(record.get("entity_type_c")),
        entityId=normalize_relation(record.get("entity_id_c")),
    )


def file_to_payload(data: Any) -> Dict[str, Any]:
    values = as_input_dict(data)
    payload = map_fields(values, FILE_WRITE_FIELDS)
    if not payload.get("Name") and values.get("fileName"):
        payload["Name"] = to_str(values["fileName"])
    return payload
