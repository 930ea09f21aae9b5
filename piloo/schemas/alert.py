# piloo/schemas/alert.py
from pydantic import Field
from datetime import datetime
from typing import Literal, Optional
from piloo.schemas.base import ApiModel, PatchModel

AlertType = Literal["intrusion", "motion", "loitering", "vehicle"]
AlertPriority = Literal["critical", "high", "medium", "low"]
AlertStatus = Literal["pending", "resolved", "dismissed"]


class AlertCreate(ApiModel):
    type: AlertType
    description: str = Field(min_length=1)
    camera_id: Optional[int] = None
    priority: AlertPriority
    status: AlertStatus = "pending"


class AlertUpdate(PatchModel):
    """timestamp is not patchable; it is fixed when the alert is raised."""
    required_fields = ("type", "description", "priority", "status")

    type: Optional[AlertType] = None
    description: Optional[str] = None
    camera_id: Optional[int] = None
    priority: Optional[AlertPriority] = None
    status: Optional[AlertStatus] = None


class AlertOut(ApiModel):
    id: int
    type: str
    description: str
    camera_id: Optional[int]
    priority: str
    status: str
    timestamp: Optional[datetime]
