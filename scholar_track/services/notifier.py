# /scholar_track/services/notifier.py

"""
The notification side channel. Every failure the data layer swallows is
reported here; the notifier keeps a bounded history that callers (the HTTP
layer, tests) can drain, and logs each notification as it arrives.
"""

import logging
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..app_logger import get_logger

logger = get_logger("notifier")


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


class Notification(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    level: NotificationLevel
    message: str
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class Notifier:
    def __init__(self, max_history: int = 100):
        self._history = deque(maxlen=max_history)

    def notify(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self._history.append(notification)
        logger.log(_LOG_LEVELS[level], message)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message)

    def warning(self, message: str) -> Notification:
        return self.notify(NotificationLevel.WARNING, message)

    def error(self, message: str) -> Notification:
        return self.notify(NotificationLevel.ERROR, message)

    @property
    def history(self) -> List[Notification]:
        return list(self._history)

    def messages(self, level: NotificationLevel = None) -> List[str]:
        return [n.message for n in self._history if level is None or n.level == level]
