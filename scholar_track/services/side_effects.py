# /scholar_track/services/side_effects.py

"""
Outbox handlers for the two best-effort side effects: the welcome email sent
when a student is created, and the AI caption attached to uploaded images.
Both are serverless functions on the platform.
"""

from .. import config
from ..app_logger import get_logger
from .outbox import FILE_UPLOADED, STUDENT_CREATED, Outbox, OutboxEvent, SideEffectError
from .platform_client import PlatformClient
from .platform_schema import FILES_TABLE

logger = get_logger("side_effects")

_JSON_HEADERS = {"Content-Type": "application/json"}


def build_welcome_email_handler(client: PlatformClient, function_name: str = config.SEND_WELCOME_EMAIL_FUNCTION):
    async def send_welcome_email(event: OutboxEvent) -> None:
        response = await client.invoke_function(function_name, body=event.payload, headers=_JSON_HEADERS)
        if not response.success:
            raise SideEffectError(response.message or "Welcome email could not be sent")
        logger.info("Welcome email sent to %s", event.payload.get("email"))

    return send_welcome_email


def build_image_caption_handler(client: PlatformClient, function_name: str = config.ANALYZE_IMAGE_FUNCTION):
    async def caption_image(event: OutboxEvent) -> None:
        body = {"imageData": event.payload.get("imageData"), "mimeType": event.payload.get("mimeType")}
        response = await client.invoke_function(function_name, body=body, headers=_JSON_HEADERS)
        description = (response.data or {}).get("description") if response.success else None
        if not description:
            raise SideEffectError(response.message or "Image analysis returned no description")

        update = await client.update_record(FILES_TABLE, {
            "records": [{"Id": event.payload["fileId"], "openai_description_c": description}],
        })
        if not update.success or not any(r.success for r in update.results or []):
            raise SideEffectError(f"Could not store the description of file {event.payload['fileId']}")

    return caption_image


def register_default_handlers(outbox: Outbox, client: PlatformClient) -> Outbox:
    outbox.register_handler(STUDENT_CREATED, build_welcome_email_handler(client))
    outbox.register_handler(FILE_UPLOADED, build_image_caption_handler(client))
    return outbox
