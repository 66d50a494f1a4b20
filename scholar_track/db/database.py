# /scholar_track/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ..config import DATABASE_URL

# The 'check_same_thread' argument is only needed for SQLite.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)

# Each instance of this class is a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# All ORM models inherit from this.
Base = declarative_base()


def init_db(bind=None) -> None:
    """Creates the local platform's tables if they do not exist yet."""
    # Importing the models registers them on Base.metadata.
    from .models import record_models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
