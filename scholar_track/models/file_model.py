# /scholar_track/models/file_model.py

from typing import Optional

from pydantic import BaseModel, Field


class FileRecord(BaseModel):
    """
    Metadata of an uploaded attachment. `entityType`/`entityId` point back at
    whatever record the file is attached to (e.g. a curriculum activity).
    """
    Id: int
    name: str = ""
    tags: str = ""
    fileName: str = ""
    fileType: str = ""
    fileSize: int = 0
    uploadDate: str = ""
    openaiDescription: Optional[str] = None
    entityType: str = ""
    entityId: Optional[int] = None


class FileUpload(BaseModel):
    """
    An upload request. `imageData` (base64) is only forwarded to the
    captioning function and is never stored on the record.
    """
    name: str = ""
    tags: str = ""
    fileName: str = Field(..., min_length=1)
    fileType: str = Field(..., min_length=1)
    fileSize: int = Field(default=0, ge=0)
    imageData: Optional[str] = None
    entityType: Optional[str] = None
    entityId: Optional[int] = None


class FileUpdate(BaseModel):
    name: Optional[str] = None
    tags: Optional[str] = None
    fileName: Optional[str] = None
    openaiDescription: Optional[str] = None
    entityType: Optional[str] = None
    entityId: Optional[int] = None
