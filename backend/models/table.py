"""Pydantic schemas for introspected table and column metadata."""
from typing import Literal, Optional
from pydantic import BaseModel, Field

Widget = Literal["switch", "number", "textarea", "date", "text"]


class UIHint(BaseModel):
    widget: Widget
    label: str


class ColumnDescriptor(BaseModel):
    name: str
    type: str                               # raw database type, e.g. "VARCHAR(100)"
    nullable: bool = True
    max_length: Optional[int] = None
    is_primary_key: bool = False
    is_auto_increment: bool = False
    has_default: bool = False
    ui: UIHint


class TableMetadata(BaseModel):
    table: str
    label: str
    primary_key: str = "id"
    columns: list[ColumnDescriptor]
    relations: list[dict] = Field(default_factory=list)

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]
