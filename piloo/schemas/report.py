# piloo/schemas/report.py
from pydantic import Field
from typing import Optional
from piloo.schemas.base import ApiModel


class ReportRequest(ApiModel):
    type: str = Field(default="security", min_length=1)
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    zone_filter: Optional[str] = "all"
    format: str = "json"


class ChatRequest(ApiModel):
    query: str = Field(min_length=1)
    user_id: Optional[int] = None
