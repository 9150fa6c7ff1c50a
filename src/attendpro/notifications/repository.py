from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ..core.enums import NotificationType


class NotificationSink(Protocol):
    """Fire-and-forget queue; delivery and read tracking happen elsewhere."""

    def enqueue(self, *, recipient_id: int, message: str, type: NotificationType, timestamp: datetime) -> int:
        raise NotImplementedError
