# piloo/schemas/user.py
from pydantic import Field
from typing import Literal, Optional
from piloo.schemas.base import ApiModel, PatchModel, UtcDateTime

Role = Literal["admin", "security", "hr"]


class UserCreate(ApiModel):
    username: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    role: Role = "security"
    subscription_plan: Optional[str] = "trial"
    subscription_status: Optional[str] = "active"
    max_cameras: Optional[int] = 5
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    subscription_ends_at: Optional[UtcDateTime] = None


class UserUpdate(PatchModel):
    required_fields = ("username", "email", "password", "role")

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None
    subscription_plan: Optional[str] = None
    subscription_status: Optional[str] = None
    max_cameras: Optional[int] = None
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    subscription_ends_at: Optional[UtcDateTime] = None


class UserOut(ApiModel):
    """Account as returned by the API. Never carries the password."""
    id: int
    username: str
    email: str
    role: str
    subscription_plan: Optional[str]
    subscription_status: Optional[str]
    max_cameras: Optional[int]
    stripe_customer_id: Optional[str]
    stripe_subscription_id: Optional[str]
    subscription_ends_at: Optional[UtcDateTime]
    created_at: Optional[UtcDateTime]


class UserRecord(ApiModel):
    """Account as held by the store, password included. Never return this from a route."""
    id: int
    username: str
    email: str
    password: str
    role: str
    subscription_plan: Optional[str]
    subscription_status: Optional[str]
    max_cameras: Optional[int]
    stripe_customer_id: Optional[str]
    stripe_subscription_id: Optional[str]
    subscription_ends_at: Optional[UtcDateTime]
    created_at: Optional[UtcDateTime]

    def public(self) -> UserOut:
        return UserOut.model_validate(self.model_dump(exclude={"password"}))


class LoginRequest(ApiModel):
    email: Optional[str] = None
    password: Optional[str] = None
