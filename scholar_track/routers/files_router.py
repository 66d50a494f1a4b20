# /scholar_track/routers/files_router.py

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, status

from ..models import file_model
from ..services.entity_api.files_api import FilesApi
from ..services.notifier import Notifier
from ..services.outbox import Outbox
from ..services.platform_service import get_files_api, get_notifier, get_outbox
from .router_helpers import unwrap_or_raise

router = APIRouter()


@router.get("", response_model=List[file_model.FileRecord], summary="List Files Attached to a Record")
async def list_files(
    entity_type: str = Query(..., alias="entityType"),
    entity_id: int = Query(..., alias="entityId"),
    api: FilesApi = Depends(get_files_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.get_by_entity(entity_type, entity_id), notifier)


@router.post("", response_model=file_model.FileRecord, status_code=status.HTTP_201_CREATED, summary="Upload a File")
async def upload_file(
    file_upload: file_model.FileUpload,
    background_tasks: BackgroundTasks,
    api: FilesApi = Depends(get_files_api),
    notifier: Notifier = Depends(get_notifier),
    outbox: Outbox = Depends(get_outbox),
):
    """
    Creates the file record right away. For images, the caption is generated
    in the background and written to `openaiDescription` afterwards.
    """
    uploaded = unwrap_or_raise(
        await api.upload_with_description(file_upload, file_upload.entityType, file_upload.entityId), notifier
    )
    background_tasks.add_task(outbox.dispatch_pending)
    return uploaded


@router.get("/{file_id}", response_model=file_model.FileRecord, summary="Get a File Record")
async def get_file(file_id: int, api: FilesApi = Depends(get_files_api), notifier: Notifier = Depends(get_notifier)):
    return unwrap_or_raise(await api.get_by_id(file_id), notifier)


@router.put("/{file_id}", response_model=file_model.FileRecord, summary="Update a File Record")
async def update_file(
    file_id: int,
    file_update: file_model.FileUpdate,
    api: FilesApi = Depends(get_files_api),
    notifier: Notifier = Depends(get_notifier),
):
    return unwrap_or_raise(await api.update(file_id, file_update), notifier)


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a File Record")
async def delete_file(file_id: int, api: FilesApi = Depends(get_files_api), notifier: Notifier = Depends(get_notifier)):
    unwrap_or_raise(await api.delete(file_id), notifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
