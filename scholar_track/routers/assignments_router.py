# /scholar_track/routers/assignments_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..models import assignment_model
from ..services.entity_api.assignments_api import AssignmentsApi
from ..services.notifier import Notifier
from ..services.platform_service import get_assignments_api, get_notifier
from .router_helpers import unwrap_or_raise

router = APIRouter()


@router.get("", response_model=List[assignment_model.Assignment], summary="List Assignments")
async def list_assignments(
    course_id: Optional[int] = Query(None, alias="courseId"),
    assignment_type: Optional[str] = Query(None, alias="type"),
    api: AssignmentsApi = Depends(get_assignments_api),
    notifier: Notifier = Depends(get_notifier),
):
    if course_id is not None:
        assignments = unwrap_or_raise(await api.get_by_course(course_id), notifier)
        if assignment_type:
            assignments = [a for a in assignments if a.type == assignment_type]
        return assignments
    return unwrap_or_raise(await api.get_by_type(assignment_type or ""), notifier)


@router.post("", response_model=assignment_model.Assignment, status_code=status.HTTP_201_CREATED, summary="Create an Assignment")
async def create_assignment(
    assignment_create: assignment_model.AssignmentCreate,
    api: AssignmentsApi = Depends(get_assignments_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.create(assignment_create), notifier)


@router.get("/{assignment_id}", response_model=assignment_model.Assignment, summary="Get an Assignment")
async def get_assignment(
    assignment_id: int,
    api: AssignmentsApi = Depends(get_assignments_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.get_by_id(assignment_id), notifier)


@router.put("/{assignment_id}", response_model=assignment_model.Assignment, summary="Update an Assignment")
async def update_assignment(
    assignment_id: int,
    assignment_update: assignment_model.AssignmentUpdate,
    api: AssignmentsApi = Depends(get_assignments_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.update(assignment_id, assignment_update), notifier)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Assignment")
async def delete_assignment(
    assignment_id: int,
    api: AssignmentsApi = Depends(get_assignments_api),
    notifier: Notifier = Depends(get_notifier),
):
    unwrap_or_raise(await api.delete(assignment_id), notifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
