# /scholar_track/services/entity_api/students_api.py

from datetime import datetime, timezone
from typing import Any, Dict

from ...models.common_model import ApiResult
from ...models.student_model import Student, StudentStatus
from ..mapping_helpers.coercion import as_input_dict
from ..mapping_helpers.roster_mappers import student_to_payload, student_to_view
from ..outbox import STUDENT_CREATED
from ..platform_schema import STUDENT_TABLE
from .base_api import BaseEntityApi, contains_any, equals, is_unfiltered

SEARCH_FIELDS = ["first_name_c", "last_name_c", "email_c", "student_id_c"]


class StudentsApi(BaseEntityApi):
    table_name = STUDENT_TABLE
    entity_label = "student"
    entity_plural = "students"

    def to_view(self, record: Dict[str, Any]) -> Student:
        return student_to_view(record)

    def to_payload(self, data: Any) -> Dict[str, Any]:
        return student_to_payload(data)

    def prepare_create(self, data: Any) -> Dict[str, Any]:
        """
        New students start active, enrolled now. GPA is computed by the
        platform, so it is dropped even if the caller supplied one.
        """
        values = as_input_dict(data)
        values.pop("gpa", None)
        values.setdefault("status", StudentStatus.ACTIVE.value)
        if not values.get("enrollmentDate"):
            values["enrollmentDate"] = datetime.now(timezone.utc).isoformat()
        return student_to_payload(values)

    async def create(self, data: Any) -> ApiResult:
        result = await super().create(data)
        if result.ok and self.outbox is not None and result.value.email:
            student: Student = result.value
            self.outbox.publish(STUDENT_CREATED, {
                "studentId": student.Id,
                "email": student.email,
                "firstName": student.firstName,
                "lastName": student.lastName,
            })
        return result

    async def search(self, query: str) -> ApiResult:
        text = (query or "").strip()
        if not text:
            return await self.get_all()
        return await self._fetch_many(where_groups=[contains_any(SEARCH_FIELDS, text)])

    async def filter_by_status(self, status: str) -> ApiResult:
        if is_unfiltered(status):
            return await self.get_all()
        return await self._fetch_many(where=[equals("status_c", status)])

    async def filter_by_grade_level(self, grade_level: str) -> ApiResult:
        if is_unfiltered(grade_level):
            return await self.get_all()
        return await self._fetch_many(where=[equals("grade_level_c", grade_level)])
