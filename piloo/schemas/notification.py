# piloo/schemas/notification.py
"""Envelopes exchanged over the /ws notification channel."""

import uuid
from pydantic import Field
from datetime import datetime
from typing import Any, Literal, Optional
from piloo.schemas.base import ApiModel

NotificationCategory = Literal["alert", "system", "employee", "camera"]
NotificationPriority = Literal["low", "medium", "high", "critical"]

# Priorities that raise a toast on the client; the rest only bump the badge
TOAST_PRIORITIES = frozenset({"high", "critical"})


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


class Notification(ApiModel):
    id: str = Field(default_factory=_new_id)
    type: NotificationCategory = "system"
    priority: NotificationPriority = "medium"
    title: str
    message: str
    timestamp: str = Field(default_factory=_now)
    data: Optional[Any] = None


class NotificationRequest(ApiModel):
    type: NotificationCategory = "system"
    priority: NotificationPriority = "medium"
    title: str = "Test Notification"
    message: str = "This is a test notification"


class SimulatedCameraEvent(ApiModel):
    camera_id: int
    event_type: Literal["intrusion", "motion", "loitering", "vehicle"] = "motion"
