# /scholar_track/services/entity_api/grades_api.py

from typing import Any, Dict

from ...models.common_model import ApiResult
from ...models.grade_model import Grade, GradeStatus
from ..mapping_helpers.coercion import as_input_dict
from ..mapping_helpers.coursework_mappers import grade_to_payload, grade_to_view
from ..platform_schema import GRADE_TABLE
from .base_api import BaseEntityApi, equals, is_unfiltered


class GradesApi(BaseEntityApi):
    table_name = GRADE_TABLE
    entity_label = "grade"
    entity_plural = "grades"

    def to_view(self, record: Dict[str, Any]) -> Grade:
        return grade_to_view(record)

    def to_payload(self, data: Any) -> Dict[str, Any]:
        return grade_to_payload(data)

    def prepare_create(self, data: Any) -> Dict[str, Any]:
        values = as_input_dict(data)
        values.setdefault("status", GradeStatus.PENDING.value)
        return grade_to_payload(values)

    async def get_by_student(self, student_id: int) -> ApiResult:
        return await self._fetch_many(where=[equals("student_id_c", int(student_id))])

    async def get_by_assignment(self, assignment_id: int) -> ApiResult:
        return await self._fetch_many(where=[equals("assignment_id_c", int(assignment_id))])

    async def get_by_status(self, status: str) -> ApiResult:
        if is_unfiltered(status):
            return await self.get_all()
        return await self._fetch_many(where=[equals("status_c", status)])
