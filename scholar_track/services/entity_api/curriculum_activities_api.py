# /scholar_track/services/entity_api/curriculum_activities_api.py

from typing import Any, Dict, Optional

from ...models.activity_model import ActivityFilters, ActivityStatus, CurriculumActivity
from ...models.common_model import ApiResult
from ..mapping_helpers.activity_mappers import activity_to_payload, activity_to_view
from ..mapping_helpers.coercion import as_input_dict
from ..platform_schema import ACTIVITY_TABLE
from .base_api import BaseEntityApi, contains_any, equals, is_unfiltered

SEARCH_FIELDS = ["title_c", "description_c", "subject_c", "instructor_c"]


class CurriculumActivitiesApi(BaseEntityApi):
    table_name = ACTIVITY_TABLE
    entity_label = "curriculum activity"
    entity_plural = "curriculum activities"

    def to_view(self, record: Dict[str, Any]) -> CurriculumActivity:
        return activity_to_view(record)

    def to_payload(self, data: Any) -> Dict[str, Any]:
        return activity_to_payload(data)

    def prepare_create(self, data: Any) -> Dict[str, Any]:
        values = as_input_dict(data)
        values.setdefault("status", ActivityStatus.PLANNING.value)
        values.setdefault("participants", 0)
        return activity_to_payload(values)

    async def search(self, query: str = "", filters: Optional[ActivityFilters] = None) -> ApiResult:
        """Text search over title, description, subject and instructor, narrowed by filters."""
        filters = filters or ActivityFilters()
        where = [
            equals(field_name, value)
            for field_name, value in (
                ("status_c", filters.status),
                ("subject_c", filters.subject),
                ("type_c", filters.type),
            )
            if not is_unfiltered(value)
        ]
        text = (query or "").strip()
        where_groups = [contains_any(SEARCH_FIELDS, text)] if text else None
        return await self._fetch_many(where=where or None, where_groups=where_groups)
