# /scholar_track/routers/students_router.py

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, status

from ..models import student_model
from ..services.entity_api.students_api import StudentsApi
from ..services.notifier import Notifier
from ..services.outbox import Outbox
from ..services.platform_service import get_notifier, get_outbox, get_students_api
from .router_helpers import unwrap_or_raise

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="List or Search Students")
async def list_students(
    search: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    grade_level: Optional[str] = Query(None, alias="gradeLevel"),
    api: StudentsApi = Depends(get_students_api),
    notifier: Notifier = Depends(get_notifier),
):
    """
    The first filter given is run on the platform (search, then status, then
    grade level); the others narrow that result.
    """
    if search:
        students = unwrap_or_raise(await api.search(search), notifier)
    elif status_filter:
        students = unwrap_or_raise(await api.filter_by_status(status_filter), notifier)
    else:
        students = unwrap_or_raise(await api.filter_by_grade_level(grade_level or ""), notifier)

    if status_filter:
        students = [s for s in students if s.status == status_filter]
    if grade_level:
        students = [s for s in students if s.gradeLevel == grade_level]
    return students


@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Create a Student")
async def create_student(
    student_create: student_model.StudentCreate,
    background_tasks: BackgroundTasks,
    api: StudentsApi = Depends(get_students_api),
    notifier: Notifier = Depends(get_notifier),
    outbox: Outbox = Depends(get_outbox),
):
    student = unwrap_or_raise(await api.create(student_create), notifier)
    background_tasks.add_task(outbox.dispatch_pending)
    return student

# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Student")
async def get_student(
    student_id: int,
    api: StudentsApi = Depends(get_students_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.get_by_id(student_id), notifier)


@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student")
async def update_student(
    student_id: int,
    student_update: student_model.StudentUpdate,
    api: StudentsApi = Depends(get_students_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.update(student_id, student_update), notifier)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student")
async def delete_student(
    student_id: int,
    api: StudentsApi = Depends(get_students_api),
    notifier: Notifier = Depends(get_notifier),
):
    unwrap_or_raise(await api.delete(student_id), notifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
