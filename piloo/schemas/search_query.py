# piloo/schemas/search_query.py
from pydantic import Field
from datetime import datetime
from typing import Any, List, Literal, Optional
from piloo.schemas.base import ApiModel, PatchModel

QueryType = Literal["text", "image", "video", "audio"]


class SearchQueryCreate(ApiModel):
    user_id: Optional[int] = None
    query: str = Field(min_length=1)
    query_type: QueryType = "text"
    filters: Optional[Any] = None
    results: Optional[Any] = None
    execution_time: Optional[int] = None


class SearchQueryUpdate(PatchModel):
    required_fields = ("query", "query_type")

    user_id: Optional[int] = None
    query: Optional[str] = None
    query_type: Optional[QueryType] = None
    filters: Optional[Any] = None
    results: Optional[Any] = None
    execution_time: Optional[int] = None


class SearchQueryOut(ApiModel):
    id: int
    user_id: Optional[int]
    query: str
    query_type: str
    filters: Optional[Any]
    results: Optional[Any]
    execution_time: Optional[int]
    created_at: Optional[datetime]


class SearchFilters(ApiModel):
    """Narrows a footage search; dates are inclusive calendar days."""
    camera_ids: List[int] = Field(default_factory=list)
    date_from: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    date_to: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")


class SearchRequest(ApiModel):
    """Body of POST /api/search; persisted as a SearchQuery with its results."""
    query: str = Field(min_length=1)
    query_type: QueryType = "text"
    filters: Optional[SearchFilters] = None
    user_id: Optional[int] = None
