# /scholar_track/services/platform_service.py

"""
Builds the platform client for the running app and exposes the FastAPI
dependency providers that hand each request its entity API modules.

The client and the outbox live for the whole app (on `app.state`); the
notifier is created per request so a failed request can report exactly the
notifications it raised.
"""

from typing import Any, Dict

from fastapi import Depends, Request

from .. import config
from ..app_logger import get_logger
from .entity_api.assignments_api import AssignmentsApi
from .entity_api.courses_api import CoursesApi
from .entity_api.curriculum_activities_api import CurriculumActivitiesApi
from .entity_api.files_api import FilesApi
from .entity_api.grades_api import GradesApi
from .entity_api.students_api import StudentsApi
from .local_platform import LocalPlatformClient
from .notifier import Notifier
from .outbox import Outbox
from .platform_client import HttpPlatformClient, PlatformClient

logger = get_logger("platform")


async def _local_welcome_email(body: Dict[str, Any]) -> Dict[str, Any]:
    logger.info("Local platform: welcome email to %s", body.get("email"))
    return {"success": True, "data": {"sent": True}}


def build_platform_client() -> PlatformClient:
    """Local SQLAlchemy platform or the hosted one, depending on USE_LOCAL_PLATFORM."""
    if config.USE_LOCAL_PLATFORM:
        logger.info("Using the local platform at %s", config.DATABASE_URL)
        client = LocalPlatformClient()
        client.register_function(config.SEND_WELCOME_EMAIL_FUNCTION, _local_welcome_email)
        return client

    logger.info("Using the hosted platform at %s", config.PLATFORM_BASE_URL)
    return HttpPlatformClient(
        base_url=config.PLATFORM_BASE_URL,
        project_id=config.APPER_PROJECT_ID,
        public_key=config.APPER_PUBLIC_KEY,
        timeout=config.PLATFORM_TIMEOUT_SECONDS,
    )


# --- Dependency providers ---

def get_platform_client(request: Request) -> PlatformClient:
    return request.app.state.platform_client


def get_outbox(request: Request) -> Outbox:
    return request.app.state.outbox


def get_notifier() -> Notifier:
    return Notifier()


def get_students_api(
    client: PlatformClient = Depends(get_platform_client),
    notifier: Notifier = Depends(get_notifier),
    outbox: Outbox = Depends(get_outbox),
) -> StudentsApi:
    return StudentsApi(client, notifier, outbox)


def get_courses_api(
    client: PlatformClient = Depends(get_platform_client),
    notifier: Notifier = Depends(get_notifier),
) -> CoursesApi:
    return CoursesApi(client, notifier)


def get_assignments_api(
    client: PlatformClient = Depends(get_platform_client),
    notifier: Notifier = Depends(get_notifier),
) -> AssignmentsApi:
    return AssignmentsApi(client, notifier)


def get_grades_api(
    client: PlatformClient = Depends(get_platform_client),
    notifier: Notifier = Depends(get_notifier),
) -> GradesApi:
    return GradesApi(client, notifier)


def get_activities_api(
    client: PlatformClient = Depends(get_platform_client),
    notifier: Notifier = Depends(get_notifier),
) -> CurriculumActivitiesApi:
    return CurriculumActivitiesApi(client, notifier)


def get_files_api(
    client: PlatformClient = Depends(get_platform_client),
    notifier: Notifier = Depends(get_notifier),
    outbox: Outbox = Depends(get_outbox),
) -> FilesApi:
    return FilesApi(client, notifier, outbox)
