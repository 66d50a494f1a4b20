# /scholar_track/services/outbox.py

"""
Outbox for best-effort side effects.

Entity API modules publish an event only after their primary write has
committed; handlers run later, when `dispatch_pending()` is awaited (the HTTP
layer schedules it as a background task). A failing handler never affects
the write that published the event: the failure is downgraded to a warning,
the event stays pending for another attempt, and after `max_attempts` it is
moved to the dead letters.
"""

import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from ..app_logger import get_logger
from .notifier import Notifier
from .platform_client import PlatformError

logger = get_logger("outbox")

# --- Event names ---
STUDENT_CREATED = "student.created"
FILE_UPLOADED = "file.uploaded"


class SideEffectError(Exception):
    """Raised by a handler when its side effect did not happen."""


class OutboxEvent(BaseModel):
    id: str = Field(default_factory=lambda: f"evt_{uuid.uuid4().hex[:12]}")
    name: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    attempts: int = 0
    last_error: Optional[str] = None


EventHandler = Callable[[OutboxEvent], Awaitable[None]]


class Outbox:
    def __init__(self, notifier: Notifier, max_attempts: int = 3):
        self.notifier = notifier
        self.max_attempts = max_attempts
        self._handlers: Dict[str, EventHandler] = {}
        self._pending: List[OutboxEvent] = []
        self.dead_letters: List[OutboxEvent] = []

    def register_handler(self, name: str, handler: EventHandler) -> None:
        self._handlers[name] = handler

    def publish(self, name: str, payload: Dict[str, Any]) -> OutboxEvent:
        event = OutboxEvent(name=name, payload=payload)
        self._pending.append(event)
        logger.info("Published %s (%s)", name, event.id)
        return event

    @property
    def pending(self) -> List[OutboxEvent]:
        return list(self._pending)

    def _record_failure(self, event: OutboxEvent, error: Exception) -> None:
        event.attempts += 1
        event.last_error = str(error) or type(error).__name__
        self.notifier.warning(f"Background task {event.name} failed: {event.last_error}")
        if event.attempts >= self.max_attempts:
            logger.warning("Giving up on %s after %d attempts", event.id, event.attempts)
            self.dead_letters.append(event)
        else:
            self._pending.append(event)

    async def dispatch_pending(self) -> int:
        """
        Runs the handler of every pending event once. Returns how many events
        were delivered. Events without a handler are dropped with a warning.
        A failing handler only affects its own event.
        """
        batch, self._pending = self._pending, []
        delivered = 0

        for event in batch:
            handler = self._handlers.get(event.name)
            if handler is None:
                logger.warning("No handler registered for %s, dropping %s", event.name, event.id)
                continue

            try:
                await handler(event)
                delivered += 1
            except (SideEffectError, PlatformError) as e:
                self._record_failure(event, e)
            except Exception as e:
                logger.exception("Handler for %s crashed on %s", event.name, event.id)
                self._record_failure(event, e)

        return delivered
