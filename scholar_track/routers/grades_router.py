# /scholar_track/routers/grades_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..models import grade_model
from ..services.entity_api.grades_api import GradesApi
from ..services.notifier import Notifier
from ..services.platform_service import get_grades_api, get_notifier
from .router_helpers import unwrap_or_raise

router = APIRouter()


@router.get("", response_model=List[grade_model.Grade], summary="List Grades")
async def list_grades(
    student_id: Optional[int] = Query(None, alias="studentId"),
    assignment_id: Optional[int] = Query(None, alias="assignmentId"),
    status_filter: Optional[str] = Query(None, alias="status"),
    api: GradesApi = Depends(get_grades_api),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Filters by student, then assignment, then status on the platform; any
    further filters narrow the returned list.
    """
    if student_id is not None:
        grades = unwrap_or_raise(await api.get_by_student(student_id), notifier)
    elif assignment_id is not None:
        grades = unwrap_or_raise(await api.get_by_assignment(assignment_id), notifier)
    else:
        grades = unwrap_or_raise(await api.get_by_status(status_filter or ""), notifier)

    if assignment_id is not None:
        grades = [g for g in grades if g.assignmentId == assignment_id]
    if status_filter:
        grades = [g for g in grades if g.status == status_filter]
    return grades


@router.post("", response_model=grade_model.Grade, status_code=status.HTTP_201_CREATED, summary="Record a Grade")
async def create_grade(
    grade_create: grade_model.GradeCreate,
    api: GradesApi = Depends(get_grades_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.create(grade_create), notifier)


@router.get("/{grade_id}", response_model=grade_model.Grade, summary="Get a Grade")
async def get_grade(grade_id: int, api: GradesApi = Depends(get_grades_api), notifier: Notifier = Depends(get_notifier)):
    return unwrap_or_raise(await api.get_by_id(grade_id), notifier)


@router.put("/{grade_id}", response_model=grade_model.Grade, summary="Update a Grade")
async def update_grade(
    grade_id: int,
    grade_update: grade_model.GradeUpdate,
    api: GradesApi = Depends(get_grades_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.update(grade_id, grade_update), notifier)


@router.delete("/{grade_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Grade")
async def delete_grade(grade_id: int, api: GradesApi = Depends(get_grades_api), notifier: Notifier = Depends(get_notifier)):
    unwrap_or_raise(await api.delete(grade_id), notifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
