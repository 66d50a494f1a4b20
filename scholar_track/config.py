# /scholar_track/config.py

import os
from dotenv import load_dotenv

from .models.settings_model import GradingScale

# --- ENVIRONMENT ---
load_dotenv()

# Local SQLAlchemy platform for development, hosted platform otherwise.
USE_LOCAL_PLATFORM = os.getenv("USE_LOCAL_PLATFORM", "true").lower() == "true"
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./scholar_track.db")

# --- HOSTED PLATFORM ---
PLATFORM_BASE_URL = os.getenv("PLATFORM_BASE_URL", "")
APPER_PROJECT_ID = os.getenv("APPER_PROJECT_ID", "")
APPER_PUBLIC_KEY = os.getenv("APPER_PUBLIC_KEY", "")
PLATFORM_TIMEOUT_SECONDS = float(os.getenv("PLATFORM_TIMEOUT_SECONDS", "15"))

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "100"))

# --- SERVERLESS FUNCTIONS ---
SEND_WELCOME_EMAIL_FUNCTION = os.getenv("SEND_WELCOME_EMAIL_FUNCTION", "send-welcome-email")
ANALYZE_IMAGE_FUNCTION = os.getenv("ANALYZE_IMAGE_FUNCTION", "analyze-image-with-openai")

# --- RETRIES ---
OUTBOX_MAX_ATTEMPTS = int(os.getenv("OUTBOX_MAX_ATTEMPTS", "3"))
ENROLLMENT_MAX_RETRIES = int(os.getenv("ENROLLMENT_MAX_RETRIES", "3"))


def get_grading_scale() -> GradingScale:
    """Builds the grading scale, letting the environment override each threshold."""
    return GradingScale(
        aMin=int(os.getenv("GRADE_A_MIN", "90")),
        bMin=int(os.getenv("GRADE_B_MIN", "80")),
        cMin=int(os.getenv("GRADE_C_MIN", "70")),
        dMin=int(os.getenv("GRADE_D_MIN", "60")),
    )
