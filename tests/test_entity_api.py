# /tests/test_entity_api.py

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from scholar_track.models.activity_model import ActivityFilters
from scholar_track.models.common_model import ErrorKind
from scholar_track.models.platform_model import (
    FetchResponse, FieldError, MutationResponse, RecordResponse, RecordResult,
)
from scholar_track.services import report_service
from scholar_track.services.entity_api.assignments_api import AssignmentsApi
from scholar_track.services.entity_api.courses_api import CoursesApi
from scholar_track.services.entity_api.curriculum_activities_api import CurriculumActivitiesApi
from scholar_track.services.entity_api.files_api import FilesApi
from scholar_track.services.entity_api.grades_api import GradesApi
from scholar_track.services.entity_api.students_api import StudentsApi
from scholar_track.services.outbox import FILE_UPLOADED, STUDENT_CREATED
from scholar_track.services.platform_client import PlatformClient, PlatformError
from scholar_track.services.platform_schema import (
    ACTIVITY_TABLE, ASSIGNMENT_TABLE, COURSE_TABLE, GRADE_TABLE, STUDENT_TABLE,
)

# --- Fixtures ---

@pytest.fixture
def failing_client():
    """A platform client whose every call fails at the transport level."""
    client = MagicMock(spec=PlatformClient)
    error = PlatformError("connection refused")
    for name in ("fetch_records", "get_record_by_id", "create_record", "update_record", "delete_record"):
        setattr(client, name, AsyncMock(side_effect=error))
    return client


@pytest.fixture
def seeded_platform(local_platform):
    local_platform.seed(STUDENT_TABLE, [
        {"Id": 1, "Name": "Ana Ruiz", "first_name_c": "Ana", "last_name_c": "Ruiz", "email_c": "ana@school.edu",
         "status_c": "active", "grade_level_c": "10th Grade", "gpa_c": 3.8},
        {"Id": 2, "Name": "Ben Okafor", "first_name_c": "Ben", "last_name_c": "Okafor", "email_c": "ben@school.edu",
         "status_c": "inactive", "grade_level_c": "11th Grade", "gpa_c": 2.9},
    ])
    local_platform.seed(COURSE_TABLE, [{"Id": 10, "Name": "Algebra I", "name_c": "Algebra I"}])
    local_platform.seed(ASSIGNMENT_TABLE, [
        {"Id": 20, "Name": "Quiz 1", "title_c": "Quiz 1", "type_c": "quiz", "course_id_c": 10},
        {"Id": 21, "Name": "Essay", "title_c": "Essay", "type_c": "homework", "course_id_c": 10},
    ])
    local_platform.seed(GRADE_TABLE, [
        {"Id": 30, "score_c": 95, "status_c": "graded", "student_id_c": 1, "assignment_id_c": 20},
        {"Id": 31, "score_c": 71, "status_c": "submitted", "student_id_c": 2, "assignment_id_c": 20},
    ])
    local_platform.seed(ACTIVITY_TABLE, [
        {"Id": 40, "title_c": "Photosynthesis Lab", "subject_c": "Biology", "type_c": "Lab",
         "status_c": "Active", "instructor_c": "Dr. Green"},
        {"Id": 41, "title_c": "Debate Club", "subject_c": "English", "type_c": "Discussion",
         "status_c": "Planning", "instructor_c": "Ms. Reyes"},
    ])
    return local_platform

# --- Reads ---

@pytest.mark.asyncio
async def test_get_all_maps_every_record(seeded_platform, notifier):
    result = await StudentsApi(seeded_platform, notifier).get_all()
    assert result.ok
    assert [s.firstName for s in result.value] == ["Ana", "Ben"]
    assert result.value[0].studentId == "STU001"


@pytest.mark.asyncio
async def test_get_by_id_of_missing_record_is_not_found(seeded_platform, notifier):
    result = await StudentsApi(seeded_platform, notifier).get_by_id(999)
    assert result.ok is False
    assert result.kind == ErrorKind.NOT_FOUND
    assert result.value is None
    assert notifier.messages() == ["Student 999 not found"]


@pytest.mark.asyncio
async def test_student_search_and_filters(seeded_platform, notifier):
    api = StudentsApi(seeded_platform, notifier)
    assert [s.Id for s in (await api.search("okaf")).value] == [2]
    assert [s.Id for s in (await api.search("   ")).value] == [1, 2]
    assert [s.Id for s in (await api.filter_by_status("active")).value] == [1]
    assert [s.Id for s in (await api.filter_by_grade_level("11th Grade")).value] == [2]
    assert [s.Id for s in (await api.filter_by_grade_level("")).value] == [1, 2]


@pytest.mark.asyncio
async def test_assignment_and_grade_queries(seeded_platform, notifier):
    assignments = AssignmentsApi(seeded_platform, notifier)
    assert [a.Id for a in (await assignments.get_by_course(10)).value] == [20, 21]
    assert [a.Id for a in (await assignments.get_by_type("quiz")).value] == [20]

    grades = GradesApi(seeded_platform, notifier)
    assert [g.Id for g in (await grades.get_by_student(2)).value] == [31]
    assert [g.Id for g in (await grades.get_by_assignment(20)).value] == [30, 31]
    assert [g.Id for g in (await grades.get_by_status("graded")).value] == [30]


@pytest.mark.asyncio
async def test_activity_search_combines_text_and_filters(seeded_platform, notifier):
    api = CurriculumActivitiesApi(seeded_platform, notifier)
    assert [a.Id for a in (await api.search("green")).value] == [40]
    assert [a.Id for a in (await api.search("", ActivityFilters(status="Planning"))).value] == [41]
    assert [a.Id for a in (await api.search("lab", ActivityFilters(subject="English"))).value] == []
    assert [a.Id for a in (await api.search("", ActivityFilters())).value] == [40, 41]


@pytest.mark.asyncio
async def test_query_parameters_carry_fields_ordering_and_paging(notifier):
    client = MagicMock(spec=PlatformClient)
    client.fetch_records = AsyncMock(return_value=FetchResponse(success=True, data=[]))

    await StudentsApi(client, notifier).filter_by_status("active")
    table_name, params = client.fetch_records.call_args.args
    assert table_name == STUDENT_TABLE
    assert {"field": {"Name": "first_name_c"}} in params["fields"]
    assert params["orderBy"] == [{"fieldName": "Id", "sorttype": "ASC"}]
    assert params["pagingInfo"] == {"limit": 100, "offset": 0}
    assert params["where"] == [{"FieldName": "status_c", "Operator": "EqualTo", "Values": ["active"]}]

    await FilesApi(client, notifier).get_by_entity("curriculum_activity", 40)
    _, params = client.fetch_records.call_args.args
    assert params["orderBy"] == [{"fieldName": "upload_date_c", "sorttype": "DESC"}]
    assert params["pagingInfo"]["limit"] == 50


@pytest.mark.asyncio
async def test_get_all_follows_pages_past_the_page_size(local_platform, notifier):
    local_platform.seed(STUDENT_TABLE, [
        {"first_name_c": f"Student{n}", "status_c": "active", "grade_level_c": "9th Grade", "gpa_c": 3.0}
        for n in range(150)
    ])
    api = StudentsApi(local_platform, notifier)

    everyone = await api.get_all()
    active = await api.filter_by_status("active")

    assert everyone.ok
    assert len(everyone.value) == 150
    assert len({s.Id for s in everyone.value}) == 150
    assert len(active.value) == 150
    assert report_service.build_overview(everyone.value, [], []).totalStudents == 150


@pytest.mark.asyncio
async def test_paging_requests_successive_offsets(notifier):
    full_page = [{"Id": n} for n in range(1, 101)]
    client = MagicMock(spec=PlatformClient)
    client.fetch_records = AsyncMock(side_effect=[
        FetchResponse(success=True, data=full_page, total=130),
        FetchResponse(success=True, data=[{"Id": n} for n in range(101, 131)], total=130),
    ])

    result = await GradesApi(client, notifier).get_all()

    assert [g.Id for g in result.value] == list(range(1, 131))
    offsets = [call.args[1]["pagingInfo"]["offset"] for call in client.fetch_records.call_args_list]
    assert offsets == [0, 100]


@pytest.mark.asyncio
async def test_file_listing_stays_capped_at_one_page(notifier):
    client = MagicMock(spec=PlatformClient)
    client.fetch_records = AsyncMock(return_value=FetchResponse(
        success=True, data=[{"Id": n} for n in range(1, 51)], total=80,
    ))

    result = await FilesApi(client, notifier).get_by_entity("curriculum_activity", 40)

    assert len(result.value) == 50
    client.fetch_records.assert_awaited_once()

# --- Failure sentinels ---

@pytest.mark.asyncio
async def test_transport_failure_returns_sentinels_and_notifies(failing_client, notifier):
    api = StudentsApi(failing_client, notifier)

    listed = await api.get_all()
    single = await api.get_by_id(1)
    created = await api.create({"firstName": "Ana", "lastName": "Ruiz"})
    deleted = await api.delete(1)

    assert (listed.ok, listed.value, listed.kind) == (False, [], ErrorKind.TRANSPORT)
    assert (single.ok, single.value) == (False, None)
    assert (created.ok, created.value) == (False, None)
    assert (deleted.ok, deleted.value) == (False, False)
    assert "Failed to fetch students" in notifier.messages()


@pytest.mark.asyncio
async def test_platform_success_false_returns_empty_list(notifier):
    client = MagicMock(spec=PlatformClient)
    client.fetch_records = AsyncMock(return_value=FetchResponse(success=False, message="Quota exceeded"))

    result = await GradesApi(client, notifier).get_all()
    assert result.value == []
    assert result.kind == ErrorKind.PLATFORM
    assert notifier.messages() == ["Quota exceeded"]


@pytest.fixture
def rejecting_client():
    """A platform client that answers every call with success: false."""
    client = MagicMock(spec=PlatformClient)
    client.fetch_records = AsyncMock(return_value=FetchResponse(success=False, message="Quota exceeded"))
    client.get_record_by_id = AsyncMock(return_value=RecordResponse(success=False, message="Quota exceeded"))
    for name in ("create_record", "update_record", "delete_record"):
        setattr(client, name, AsyncMock(return_value=MutationResponse(success=False, message="Quota exceeded")))
    return client


@pytest.mark.asyncio
@pytest.mark.parametrize("call, sentinel", [
    (lambda api: api.get_all(), []),
    (lambda api: api.get_by_id(10), None),
    (lambda api: api.create({"name": "Geometry", "code": "MATH201"}), None),
    (lambda api: api.update(10, {"name": "Geometry"}), None),
    (lambda api: api.delete(10), False),
    (lambda api: api.enroll_student(10, 1), None),
    (lambda api: api.remove_student(10, 1), None),
])
async def test_rejected_calls_return_sentinels_without_raising(rejecting_client, notifier, call, sentinel):
    result = await call(CoursesApi(rejecting_client, notifier))

    assert result.ok is False
    assert result.value == sentinel
    assert result.kind == ErrorKind.PLATFORM
    assert notifier.messages() == ["Quota exceeded"]


@pytest.mark.asyncio
async def test_rejected_record_reports_each_field_error(notifier):
    client = MagicMock(spec=PlatformClient)
    client.create_record = AsyncMock(return_value=MutationResponse(success=True, results=[
        RecordResult(
            success=False,
            message="Record has invalid fields",
            errors=[FieldError(fieldLabel="Email", message="must be unique")],
        ),
    ]))

    result = await StudentsApi(client, notifier).create({"firstName": "Ana", "lastName": "Ruiz"})
    assert result.ok is False
    assert result.kind == ErrorKind.VALIDATION
    assert result.value is None
    assert notifier.messages() == ["Email: must be unique", "Record has invalid fields"]

# --- Writes ---

@pytest.mark.asyncio
async def test_student_create_defaults_and_welcome_email_event(local_platform, notifier, outbox):
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    result = await StudentsApi(local_platform, notifier, outbox).create({
        "firstName": "Ana", "lastName": "Ruiz", "email": "ana@school.edu", "gradeLevel": "9th Grade", "gpa": 4.0,
    })

    student = result.value
    assert result.ok
    assert student.gpa == 0.0
    assert student.status == "active"
    assert datetime.fromisoformat(student.enrollmentDate) >= before
    assert [e.name for e in outbox.pending] == [STUDENT_CREATED]
    assert outbox.pending[0].payload["email"] == "ana@school.edu"


@pytest.mark.asyncio
async def test_student_without_email_publishes_nothing(local_platform, notifier, outbox):
    result = await StudentsApi(local_platform, notifier, outbox).create({"firstName": "Ana", "lastName": "Ruiz"})
    assert result.ok
    assert outbox.pending == []


@pytest.mark.asyncio
async def test_update_and_delete(seeded_platform, notifier):
    api = GradesApi(seeded_platform, notifier)

    updated = await api.update(31, {"score": 78, "status": "graded", "feedback": "Better"})
    assert updated.ok
    assert (updated.value.score, updated.value.status, updated.value.feedback) == (78.0, "graded", "Better")
    assert updated.value.studentId == 2

    deleted = await api.delete(31)
    assert deleted.ok and deleted.value is True
    assert [g.Id for g in (await api.get_all()).value] == [30]

    missing = await api.delete(31)
    assert missing.value is False
    assert missing.kind == ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_defaults_on_create_for_coursework(seeded_platform, notifier):
    assignment = await AssignmentsApi(seeded_platform, notifier).create({"title": "Project", "courseId": 10})
    assert assignment.value.maxPoints == 100
    assert assignment.value.courseId == 10

    grade = await GradesApi(seeded_platform, notifier).create({"score": 88, "studentId": 1, "assignmentId": 21})
    assert grade.value.status == "pending"

    activity = await CurriculumActivitiesApi(seeded_platform, notifier).create({
        "title": "Field Trip", "type": "Trip", "subject": "History",
    })
    assert activity.value.status == "Planning"


@pytest.mark.asyncio
async def test_image_upload_publishes_caption_event_without_storing_image(local_platform, notifier, outbox):
    api = FilesApi(local_platform, notifier, outbox)
    result = await api.upload_with_description(
        {"fileName": "cell.png", "fileType": "image/png", "fileSize": 1024, "imageData": "aGVsbG8="},
        entity_type="curriculum_activity",
        entity_id=40,
    )

    uploaded = result.value
    assert result.ok
    assert uploaded.name == "cell.png"
    assert uploaded.entityId == 40
    assert uploaded.uploadDate
    assert uploaded.openaiDescription is None
    assert outbox.pending[0].name == FILE_UPLOADED
    assert outbox.pending[0].payload == {"fileId": uploaded.Id, "mimeType": "image/png", "imageData": "aGVsbG8="}

    files = await api.get_by_entity("curriculum_activity", 40)
    assert [f.Id for f in files.value] == [uploaded.Id]


@pytest.mark.asyncio
async def test_non_image_upload_publishes_nothing(local_platform, notifier, outbox):
    result = await FilesApi(local_platform, notifier, outbox).create({"fileName": "syllabus.pdf", "fileType": "application/pdf"})
    assert result.ok
    assert outbox.pending == []
