# /scholar_track/main.py

# --- Core FastAPI Imports ---
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

# --- Application-specific Router Imports ---
from .routers import (
    students_router,
    courses_router,
    assignments_router,
    grades_router,
    activities_router,
    files_router,
    reports_router,
)

# --- Service Imports for Startup Logic ---
from . import config
from .app_logger import get_logger
from .db.database import init_db
from .services.notifier import Notifier
from .services.outbox import Outbox
from .services.platform_service import build_platform_client
from .services.side_effects import register_default_handlers

logger = get_logger("main")


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once on startup.
    if config.USE_LOCAL_PLATFORM:
        init_db()
    client = build_platform_client()
    outbox = Outbox(Notifier(), max_attempts=config.OUTBOX_MAX_ATTEMPTS)
    register_default_handlers(outbox, client)

    app.state.platform_client = client
    app.state.outbox = outbox
    logger.info("Scholar Track API started")
    yield
    # Runs once on shutdown.
    if outbox.pending:
        logger.warning("Shutting down with %d undelivered side effect(s)", len(outbox.pending))
    await client.aclose()


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Scholar Track API",
    description="Student records: students, courses, assignments, grades, curriculum activities and files.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(courses_router.router, prefix="/api/courses", tags=["Courses"])
app.include_router(assignments_router.router, prefix="/api/assignments", tags=["Assignments"])
app.include_router(grades_router.router, prefix="/api/grades", tags=["Grades"])
app.include_router(activities_router.router, prefix="/api/activities", tags=["Curriculum Activities"])
app.include_router(files_router.router, prefix="/api/files", tags=["Files"])
app.include_router(reports_router.router, prefix="/api/reports", tags=["Reports"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Scholar Track API is running!", "version": app.version}
