# piloo/schemas/zone.py
from pydantic import Field
from typing import Literal, Optional
from piloo.schemas.base import ApiModel, PatchModel

ZoneType = Literal["entrance", "office", "restricted", "common"]


class ZoneCreate(ApiModel):
    name: str = Field(min_length=1)
    type: ZoneType
    description: Optional[str] = None


class ZoneUpdate(PatchModel):
    required_fields = ("name", "type")

    name: Optional[str] = None
    type: Optional[ZoneType] = None
    description: Optional[str] = None


class ZoneOut(ApiModel):
    id: int
    name: str
    type: str
    description: Optional[str]
