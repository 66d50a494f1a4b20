# /scholar_track/services/resource_helpers/entity_resources.py

from functools import partial
from typing import Any, List, Optional

from ... import config
from ...app_logger import get_logger
from ...models.common_model import ApiResult, ErrorKind
from ..entity_api.assignments_api import AssignmentsApi
from ..entity_api.courses_api import CoursesApi
from ..entity_api.curriculum_activities_api import CurriculumActivitiesApi
from ..entity_api.files_api import FilesApi
from ..entity_api.grades_api import GradesApi
from ..entity_api.students_api import StudentsApi
from .base_resource import BaseResource

logger = get_logger("resources")


class StudentsResource(BaseResource):
    api: StudentsApi

    async def search(self, query: str) -> List[Any]:
        """Reloads the cache with the students matching `query`."""
        return await self._reload(partial(self.api.search, query), "Failed to search students")


class CoursesResource(BaseResource):
    """
    Roster changes are retried on a version conflict: each attempt re-reads
    the course, so a lost race is replayed on top of the winner's write.
    """

    api: CoursesApi

    def __init__(self, api: CoursesApi, max_retries: Optional[int] = None):
        super().__init__(api)
        self.max_retries = config.ENROLLMENT_MAX_RETRIES if max_retries is None else max_retries

    async def _change_roster(self, operation, course_id: int, student_id: int, failure_message: str):
        attempts = max(self.max_retries, 0) + 1
        result: Optional[ApiResult] = None

        for attempt in range(1, attempts + 1):
            result = await operation(course_id, student_id)
            if result.ok:
                if not self._disposed:
                    self._replace(int(course_id), result.value)
                return result.value
            if result.kind != ErrorKind.CONFLICT:
                break
            logger.warning(
                "Course %s changed concurrently (attempt %d/%d), retrying", course_id, attempt, attempts
            )

        raise self._fail(failure_message, result)

    async def enroll_student(self, course_id: int, student_id: int):
        return await self._change_roster(
            self.api.enroll_student, course_id, student_id, "Failed to enroll student"
        )

    async def remove_student(self, course_id: int, student_id: int):
        return await self._change_roster(
            self.api.remove_student, course_id, student_id, "Failed to remove student"
        )


class AssignmentsResource(BaseResource):
    api: AssignmentsApi


class GradesResource(BaseResource):
    api: GradesApi

    async def get_by_student(self, student_id: int) -> List[Any]:
        """The student's grades. The cached list is left as it is."""
        result = await self.api.get_by_student(student_id)
        if not result.ok:
            raise self._fail("Failed to load student grades", result)
        return result.value


class CurriculumActivitiesResource(BaseResource):
    api: CurriculumActivitiesApi


class FilesResource(BaseResource):
    api: FilesApi
