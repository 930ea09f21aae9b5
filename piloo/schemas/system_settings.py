# piloo/schemas/system_settings.py
from pydantic import Field
from typing import Optional
from piloo.schemas.base import ApiModel, PatchModel


class SystemSettingsUpdate(PatchModel):
    alerts_intrusion: Optional[bool] = None
    alerts_motion: Optional[bool] = None
    alerts_loitering: Optional[bool] = None
    alerts_vehicle: Optional[bool] = None
    global_sensitivity: Optional[int] = Field(default=None, ge=1, le=10)
    notifications_email: Optional[bool] = None
    notifications_sms: Optional[bool] = None
    notifications_push: Optional[bool] = None
    data_retention: Optional[int] = Field(default=None, ge=1)
    max_login_attempts: Optional[int] = Field(default=None, ge=1)


class SystemSettingsOut(ApiModel):
    id: int
    alerts_intrusion: Optional[bool] = True
    alerts_motion: Optional[bool] = True
    alerts_loitering: Optional[bool] = False
    alerts_vehicle: Optional[bool] = True
    global_sensitivity: Optional[int] = 6
    notifications_email: Optional[bool] = True
    notifications_sms: Optional[bool] = False
    notifications_push: Optional[bool] = True
    data_retention: Optional[int] = 90
    max_login_attempts: Optional[int] = 5
