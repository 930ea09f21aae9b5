# piloo/schemas/demo_request.py
from pydantic import Field
from datetime import datetime
from typing import Optional
from piloo.schemas.base import ApiModel, PatchModel


class DemoRequestCreate(ApiModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    company: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    status: Optional[str] = "pending"


class DemoRequestUpdate(PatchModel):
    required_fields = ("name", "email")

    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    status: Optional[str] = None


class DemoRequestOut(ApiModel):
    id: int
    name: str
    email: str
    company: Optional[str]
    phone: Optional[str]
    message: Optional[str]
    status: Optional[str]
    created_at: Optional[datetime]
