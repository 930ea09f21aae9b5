# piloo/schemas/subscription.py
from pydantic import Field
from typing import Optional
from piloo.schemas.base import ApiModel


class ChangePlanRequest(ApiModel):
    user_id: int
    plan_id: int


class ClientCreate(ApiModel):
    """Admin-created client account; always gets the security role."""
    username: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    max_cameras: int = Field(default=5, ge=1)
    subscription_plan: Optional[str] = None


class ClientSubscriptionUpdate(ApiModel):
    """A null plan name cancels the client's subscription."""
    plan_name: Optional[str] = None
