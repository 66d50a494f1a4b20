# /scholar_track/routers/activities_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..models import activity_model
from ..services.entity_api.curriculum_activities_api import CurriculumActivitiesApi
from ..services.notifier import Notifier
from ..services.platform_service import get_activities_api, get_notifier
from .router_helpers import unwrap_or_raise

router = APIRouter()


@router.get("", response_model=List[activity_model.CurriculumActivity], summary="Search Curriculum Activities")
async def list_activities(
    search: Optional[str] = None,
    status_filter: str = Query("all", alias="status"),
    subject: str = "all",
    activity_type: str = Query("all", alias="type"),
    api: CurriculumActivitiesApi = Depends(get_activities_api),
    notifier: Notifier = Depends(get_notifier),
):
    filters = activity_model.ActivityFilters(status=status_filter, subject=subject, type=activity_type)
    return unwrap_or_raise(await api.search(search or "", filters), notifier)


@router.post("", response_model=activity_model.CurriculumActivity, status_code=status.HTTP_201_CREATED, summary="Create a Curriculum Activity")
async def create_activity(
    activity_create: activity_model.ActivityCreate,
    api: CurriculumActivitiesApi = Depends(get_activities_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.create(activity_create), notifier)


@router.get("/{activity_id}", response_model=activity_model.CurriculumActivity, summary="Get a Curriculum Activity")
async def get_activity(
    activity_id: int,
    api: CurriculumActivitiesApi = Depends(get_activities_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.get_by_id(activity_id), notifier)


@router.put("/{activity_id}", response_model=activity_model.CurriculumActivity, summary="Update a Curriculum Activity")
async def update_activity(
    activity_id: int,
    activity_update: activity_model.ActivityUpdate,
    api: CurriculumActivitiesApi = Depends(get_activities_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.update(activity_id, activity_update), notifier)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Curriculum Activity")
async def delete_activity(
    activity_id: int,
    api: CurriculumActivitiesApi = Depends(get_activities_api),
    notifier: Notifier = Depends(get_notifier),
):
    unwrap_or_raise(await api.delete(activity_id), notifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
