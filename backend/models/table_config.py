"""Pydantic schemas for per-table configuration."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class TableConfigurationRequest(BaseModel):
    """Body of POST /api/table_configurations."""
    table_name: Optional[str] = None
    column_order: Optional[list[str]] = None
    unique_constraints: Optional[list[str]] = None
    sortable_columns: Optional[list[str]] = None
    searchable_columns: Optional[list[str]] = None
    filterable_columns: Optional[list[str]] = None


class TableConfiguration(BaseModel):
    id: int
    table_name: str
    column_order: Optional[list[str]] = None
    unique_constraints: Optional[list[str]] = None
    sortable_columns: Optional[list[str]] = None
    searchable_columns: Optional[list[str]] = None
    filterable_columns: Optional[list[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = Field(None, exclude=True)
