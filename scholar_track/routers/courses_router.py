# /scholar_track/routers/courses_router.py

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..models import course_model
from ..services.entity_api.courses_api import CoursesApi
from ..services.notifier import Notifier
from ..services.platform_service import get_courses_api, get_notifier
from ..services.resource_helpers.base_resource import ResourceError
from ..services.resource_helpers.entity_resources import CoursesResource
from .router_helpers import resource_error_response, unwrap_or_raise

router = APIRouter()

# --- COURSE COLLECTION ENDPOINTS (/api/courses) ---

@router.get("", response_model=List[course_model.Course], summary="Get All Courses")
async def list_courses(api: CoursesApi = Depends(get_courses_api), notifier: Notifier = Depends(get_notifier)):
    return unwrap_or_raise(await api.get_all(), notifier)


@router.post("", response_model=course_model.Course, status_code=status.HTTP_201_CREATED, summary="Create a Course")
async def create_course(
    course_create: course_model.CourseCreate,
    api: CoursesApi = Depends(get_courses_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.create(course_create), notifier)

# --- INDIVIDUAL COURSE ENDPOINTS (/api/courses/{course_id}) ---

@router.get("/{course_id}", response_model=course_model.Course, summary="Get a Course")
async def get_course(course_id: int, api: CoursesApi = Depends(get_courses_api), notifier: Notifier = Depends(get_notifier)):
    return unwrap_or_raise(await api.get_by_id(course_id), notifier)


@router.put("/{course_id}", response_model=course_model.Course, summary="Update a Course")
async def update_course(
    course_id: int,
    course_update: course_model.CourseUpdate,
    api: CoursesApi = Depends(get_courses_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.update(course_id, course_update), notifier)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Course")
async def delete_course(course_id: int, api: CoursesApi = Depends(get_courses_api), notifier: Notifier = Depends(get_notifier)):
    unwrap_or_raise(await api.delete(course_id), notifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- ROSTER SUB-RESOURCE ENDPOINTS ---
# Roster changes go through the course resource so version conflicts are retried.

@router.post("/{course_id}/students/{student_id}", response_model=course_model.Course, summary="Enroll a Student")
async def enroll_student(
    course_id: int,
    student_id: int,
    api: CoursesApi = Depends(get_courses_api),
    notifier: Notifier = Depends(get_notifier),
):
    try:
        return await CoursesResource(api).enroll_student(course_id, student_id)
    except ResourceError as e:
        raise resource_error_response(e, notifier)


@router.delete("/{course_id}/students/{student_id}", response_model=course_model.Course, summary="Remove a Student from a Course")
async def remove_student(
    course_id: int,
    student_id: int,
    api: CoursesApi = Depends(get_courses_api),
    notifier: Notifier = Depends(get_notifier),
):
    try:
        return await CoursesResource(api).remove_student(course_id, student_id)
    except ResourceError as e:
        raise resource_error_response(e, notifier)
