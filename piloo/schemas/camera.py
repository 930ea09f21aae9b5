# piloo/schemas/camera.py
from pydantic import Field
from typing import Literal, Optional
from piloo.schemas.base import ApiModel, PatchModel

CameraStatus = Literal["active", "maintenance", "offline"]


class CameraCreate(ApiModel):
    name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    ip: str = Field(min_length=1)
    rtsp_url: Optional[str] = None
    status: CameraStatus = "active"
    assigned_zone: Optional[str] = None
    sensitivity: int = Field(default=7, ge=1, le=10)
    recording_enabled: bool = True
    retention_days: int = Field(default=15, ge=0)


class CameraUpdate(PatchModel):
    required_fields = ("name", "location", "ip", "status", "sensitivity",
                       "recording_enabled", "retention_days")

    name: Optional[str] = None
    location: Optional[str] = None
    ip: Optional[str] = None
    rtsp_url: Optional[str] = None
    status: Optional[CameraStatus] = None
    assigned_zone: Optional[str] = None
    sensitivity: Optional[int] = Field(default=None, ge=1, le=10)
    recording_enabled: Optional[bool] = None
    retention_days: Optional[int] = Field(default=None, ge=0)


class CameraOut(ApiModel):
    id: int
    name: str
    location: str
    ip: str
    rtsp_url: Optional[str]
    status: str
    assigned_zone: Optional[str]
    sensitivity: int
    recording_enabled: bool
    retention_days: int
