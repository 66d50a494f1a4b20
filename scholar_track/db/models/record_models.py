# /scholar_track/db/models/record_models.py

"""
SQLAlchemy model backing the local platform. Every platform table
(`student_c`, `course_c`, ...) is stored in the same physical table,
distinguished by `table_name`, with the record's columns kept as JSON.
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from ..database import Base


class PlatformRecord(Base):
    __tablename__ = "platform_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    table_name = Column(String, index=True, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_on = Column(DateTime(timezone=True), server_default=func.now())
    modified_on = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
