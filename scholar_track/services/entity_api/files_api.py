# /scholar_track/services/entity_api/files_api.py

"""
File attachment records. Uploading creates the metadata record only; image
captioning is published to the outbox and fills `openaiDescription` later,
so a failed caption never fails the upload.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ...models.common_model import ApiResult
from ...models.file_model import FileRecord
from ..mapping_helpers.activity_mappers import file_to_payload, file_to_view
from ..mapping_helpers.coercion import as_input_dict
from ..outbox import FILE_UPLOADED
from ..platform_schema import FILES_TABLE
from .base_api import BaseEntityApi, equals


class FilesApi(BaseEntityApi):
    table_name = FILES_TABLE
    entity_label = "file"
    entity_plural = "files"
    order_by = [{"fieldName": "upload_date_c", "sorttype": "DESC"}]
    page_size = 50
    fetch_all_pages = False

    def to_view(self, record: Dict[str, Any]) -> FileRecord:
        return file_to_view(record)

    def to_payload(self, data: Any) -> Dict[str, Any]:
        return file_to_payload(data)

    async def get_by_entity(self, entity_type: str, entity_id: int) -> ApiResult:
        return await self._fetch_many(where=[
            equals("entity_type_c", entity_type),
            equals("entity_id_c", int(entity_id)),
        ])

    async def upload_with_description(
        self,
        file_data: Any,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
    ) -> ApiResult:
        values = as_input_dict(file_data)
        image_data = values.pop("imageData", None)
        values["uploadDate"] = datetime.now(timezone.utc).isoformat()
        values["openaiDescription"] = ""
        values["entityType"] = entity_type or values.get("entityType") or ""
        values["entityId"] = entity_id if entity_id is not None else values.get("entityId")

        result = await self._mutate("create", [file_to_payload(values)])

        if result.ok and self.outbox is not None and result.value.fileType.startswith("image/"):
            uploaded: FileRecord = result.value
            self.outbox.publish(FILE_UPLOADED, {
                "fileId": uploaded.Id,
                "mimeType": uploaded.fileType,
                "imageData": image_data,
            })
        return result

    async def create(self, data: Any) -> ApiResult:
        return await self.upload_with_description(data)
