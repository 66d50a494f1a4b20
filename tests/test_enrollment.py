# /tests/test_enrollment.py

import asyncio

import pytest

from scholar_track.models.common_model import ApiResult, ErrorKind
from scholar_track.services.entity_api.courses_api import CoursesApi
from scholar_track.services.local_platform import LocalPlatformClient
from scholar_track.services.platform_schema import COURSE_TABLE
from scholar_track.services.resource_helpers.base_resource import ResourceError
from scholar_track.services.resource_helpers.entity_resources import CoursesResource


@pytest.fixture
def slow_platform(session_factory):
    """A local platform whose calls yield to the event loop, so concurrent requests interleave."""
    platform = LocalPlatformClient(session_factory=session_factory, latency=0.01)
    platform.seed(COURSE_TABLE, [{"Id": 10, "Name": "Algebra I", "name_c": "Algebra I", "enrolled_students_c": ""}])
    return platform


@pytest.fixture
def course_platform(local_platform):
    local_platform.seed(COURSE_TABLE, [{"Id": 10, "Name": "Algebra I", "name_c": "Algebra I", "enrolled_students_c": "1"}])
    return local_platform


@pytest.mark.asyncio
async def test_enroll_is_idempotent(course_platform, notifier):
    api = CoursesApi(course_platform, notifier)

    first = await api.enroll_student(10, 2)
    second = await api.enroll_student(10, 2)

    assert first.value.enrolledStudents == [1, 2]
    assert second.value.enrolledStudents == [1, 2]
    # The repeated enroll did not write, so the version only moved once.
    assert second.value.version == first.value.version == 2


@pytest.mark.asyncio
async def test_remove_of_non_member_is_a_no_op(course_platform, notifier):
    api = CoursesApi(course_platform, notifier)

    unchanged = await api.remove_student(10, 99)
    assert unchanged.ok
    assert unchanged.value.enrolledStudents == [1]
    assert unchanged.value.version == 1

    removed = await api.remove_student(10, 1)
    assert removed.value.enrolledStudents == []


@pytest.mark.asyncio
async def test_enroll_into_missing_course_is_not_found(local_platform, notifier):
    result = await CoursesApi(local_platform, notifier).enroll_student(404, 1)
    assert result.kind == ErrorKind.NOT_FOUND
    assert result.value is None


@pytest.mark.asyncio
async def test_concurrent_enrolls_are_detected_as_a_conflict(slow_platform, notifier):
    """Two racing read-modify-writes: one wins, the other is told it lost instead of overwriting."""
    api = CoursesApi(slow_platform, notifier)

    results = await asyncio.gather(api.enroll_student(10, 1), api.enroll_student(10, 2))

    assert sorted(r.ok for r in results) == [False, True]
    loser = next(r for r in results if not r.ok)
    assert loser.kind == ErrorKind.CONFLICT
    assert loser.value is None

    course = (await api.get_by_id(10)).value
    assert len(course.enrolledStudents) == 1


@pytest.mark.asyncio
async def test_course_resource_retries_the_losing_enroll(slow_platform, notifier):
    resource = CoursesResource(CoursesApi(slow_platform, notifier), max_retries=3)
    await resource.mount()

    await asyncio.gather(resource.enroll_student(10, 1), resource.enroll_student(10, 2))

    course = (await resource.api.get_by_id(10)).value
    assert sorted(course.enrolledStudents) == [1, 2]
    assert course.version == 3
    assert resource.error == ""


@pytest.mark.asyncio
async def test_course_resource_gives_up_after_max_retries(course_platform, notifier, mocker):
    api = CoursesApi(course_platform, notifier)
    conflict = ApiResult.failure(ErrorKind.CONFLICT, "Record was modified by another request")
    enroll = mocker.patch.object(api, "enroll_student", return_value=conflict)

    resource = CoursesResource(api, max_retries=2)
    with pytest.raises(ResourceError) as excinfo:
        await resource.enroll_student(10, 2)

    assert excinfo.value.kind == ErrorKind.CONFLICT
    assert enroll.call_count == 3
    assert resource.error == "Failed to enroll student"


@pytest.mark.asyncio
async def test_negative_retry_budget_still_makes_one_attempt(course_platform, notifier, mocker):
    api = CoursesApi(course_platform, notifier)
    conflict = ApiResult.failure(ErrorKind.CONFLICT, "Record was modified by another request")
    enroll = mocker.patch.object(api, "enroll_student", return_value=conflict)

    resource = CoursesResource(api, max_retries=-2)
    with pytest.raises(ResourceError) as excinfo:
        await resource.enroll_student(10, 2)

    assert excinfo.value.kind == ErrorKind.CONFLICT
    assert enroll.call_count == 1
