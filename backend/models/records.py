"""Pydantic schemas for generic record listing and the response envelope."""
from typing import Any, Optional
from pydantic import BaseModel, Field

SEARCH_KEY = "_search"


class SearchFilter(BaseModel):
    """Free-text search over a set of columns (OR of LIKE clauses)."""
    columns: list[str]
    query: str


class ListQuery(BaseModel):
    """Canonical list request after all query-string dialects are folded in."""
    page: int = 1
    limit: int = 30
    filters: dict[str, Any] = Field(default_factory=dict)
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


class ListResult(BaseModel):
    data: list[dict[str, Any]]
    total: int
