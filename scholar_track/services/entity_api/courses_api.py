# /scholar_track/services/entity_api/courses_api.py

"""
Course records, including roster membership.

Enrolling and removing a student is a read-modify-write of the whole
`enrolledStudents` field. The course's `version` travels with the write, so
when two requests race on the same course the platform rejects the later
one and this module returns a `conflict` result instead of silently dropping
the earlier change. Retrying is left to the caller.
"""

from typing import Any, Dict, List

from ...models.common_model import ApiResult
from ...models.course_model import Course
from ..mapping_helpers.coercion import as_input_dict
from ..mapping_helpers.roster_mappers import course_to_payload, course_to_view
from ..platform_schema import COURSE_TABLE
from .base_api import BaseEntityApi


class CoursesApi(BaseEntityApi):
    table_name = COURSE_TABLE
    entity_label = "course"
    entity_plural = "courses"

    def to_view(self, record: Dict[str, Any]) -> Course:
        return course_to_view(record)

    def to_payload(self, data: Any) -> Dict[str, Any]:
        return course_to_payload(data)

    def prepare_create(self, data: Any) -> Dict[str, Any]:
        values = as_input_dict(data)
        values.setdefault("enrolledStudents", [])
        # The platform issues the first version itself.
        values.pop("version", None)
        return course_to_payload(values)

    async def _write_membership(self, course: Course, members: List[int]) -> ApiResult:
        data = course.model_dump()
        data["enrolledStudents"] = members
        return await self.update(course.Id, data)

    async def enroll_student(self, course_id: int, student_id: int) -> ApiResult:
        current = await self.get_by_id(course_id)
        if not current.ok:
            return current

        course: Course = current.value
        if int(student_id) in course.enrolledStudents:
            return ApiResult.success(course)
        return await self._write_membership(course, course.enrolledStudents + [int(student_id)])

    async def remove_student(self, course_id: int, student_id: int) -> ApiResult:
        current = await self.get_by_id(course_id)
        if not current.ok:
            return current

        course: Course = current.value
        if int(student_id) not in course.enrolledStudents:
            return ApiResult.success(course)
        return await self._write_membership(
            course, [member for member in course.enrolledStudents if member != int(student_id)]
        )
