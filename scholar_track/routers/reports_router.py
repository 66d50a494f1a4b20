# /scholar_track/routers/reports_router.py

import asyncio
from enum import Enum

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from .. import config
from ..models import report_model
from ..services import report_service
from ..services.entity_api.courses_api import CoursesApi
from ..services.entity_api.grades_api import GradesApi
from ..services.entity_api.students_api import StudentsApi
from ..services.notifier import Notifier
from ..services.platform_service import get_courses_api, get_grades_api, get_notifier, get_students_api
from .router_helpers import unwrap_or_raise

router = APIRouter()


class ExportType(str, Enum):
    STUDENTS = "students"
    GRADES = "grades"
    OVERVIEW = "overview"


def _download(content: str, file_name: str, media_type: str = "text/csv") -> StreamingResponse:
    return StreamingResponse(
        iter([content]), media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={file_name}"},
    )


async def _overview(students_api: StudentsApi, courses_api: CoursesApi, grades_api: GradesApi, notifier: Notifier):
    students, courses, grades = await asyncio.gather(
        students_api.get_all(), courses_api.get_all(), grades_api.get_all()
    )
    return report_service.build_overview(
        unwrap_or_raise(students, notifier),
        unwrap_or_raise(courses, notifier),
        unwrap_or_raise(grades, notifier),
        config.get_grading_scale(),
    )


@router.get("/overview", response_model=report_model.OverviewReport, summary="Get the Academic Overview")
async def get_overview(
    students_api: StudentsApi = Depends(get_students_api),
    courses_api: CoursesApi = Depends(get_courses_api),
    grades_api: GradesApi = Depends(get_grades_api),
    notifier: Notifier = Depends(get_notifier),
):
    return await _overview(students_api, courses_api, grades_api, notifier)


@router.get("/export/{export_type}", response_class=StreamingResponse, summary="Export a Report")
async def export_report(
    export_type: ExportType,
    students_api: StudentsApi = Depends(get_students_api),
    courses_api: CoursesApi = Depends(get_courses_api),
    grades_api: GradesApi = Depends(get_grades_api),
    notifier: Notifier = Depends(get_notifier),
):
    if export_type == ExportType.STUDENTS:
        students = unwrap_or_raise(await students_api.get_all(), notifier)
        return _download(report_service.export_students_csv(students), "students_report.csv")

    if export_type == ExportType.GRADES:
        grades = unwrap_or_raise(await grades_api.get_all(), notifier)
        return _download(report_service.export_grades_csv(grades), "grades_report.csv")

    report = await _overview(students_api, courses_api, grades_api, notifier)
    text = report_service.export_overview_text(report, config.get_grading_scale())
    return _download(text, "academic_overview_report.txt", media_type="text/plain")


@router.get("/courses/{course_id}/roster", response_class=StreamingResponse, summary="Export a Course Roster as CSV")
async def export_course_roster(
    course_id: int,
    students_api: StudentsApi = Depends(get_students_api),
    courses_api: CoursesApi = Depends(get_courses_api),
    notifier: Notifier = Depends(get_notifier),
):
    course = unwrap_or_raise(await courses_api.get_by_id(course_id), notifier)
    students = unwrap_or_raise(await students_api.get_all(), notifier)
    file_name = f"roster_{(course.code or course.name or str(course.Id)).replace(' ', '_').lower()}.csv"
    return _download(report_service.export_roster_csv(course, students), file_name)
