# /scholar_track/services/entity_api/assignments_api.py

from typing import Any, Dict

from ...models.assignment_model import Assignment
from ...models.common_model import ApiResult
from ..mapping_helpers.coercion import as_input_dict
from ..mapping_helpers.coursework_mappers import assignment_to_payload, assignment_to_view
from ..platform_schema import ASSIGNMENT_TABLE
from .base_api import BaseEntityApi, equals, is_unfiltered


class AssignmentsApi(BaseEntityApi):
    table_name = ASSIGNMENT_TABLE
    entity_label = "assignment"
    entity_plural = "assignments"

    def to_view(self, record: Dict[str, Any]) -> Assignment:
        return assignment_to_view(record)

    def to_payload(self, data: Any) -> Dict[str, Any]:
        return assignment_to_payload(data)

    def prepare_create(self, data: Any) -> Dict[str, Any]:
        values = as_input_dict(data)
        values.setdefault("maxPoints", 100)
        return assignment_to_payload(values)

    async def get_by_course(self, course_id: int) -> ApiResult:
        return await self._fetch_many(where=[equals("course_id_c", int(course_id))])

    async def get_by_type(self, assignment_type: str) -> ApiResult:
        if is_unfiltered(assignment_type):
            return await self.get_all()
        return await self._fetch_many(where=[equals("type_c", assignment_type)])
