"""
Table configuration store — per-table column order, unique, sortable,
searchable and filterable column lists. Rows are soft-deleted.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import (
    Column, DateTime, Integer, MetaData, String, Table, Text, func, insert, select, update,
)
from sqlalchemy.engine import Engine

from core.errors import ValidationError
from models.table_config import TableConfiguration

logger = logging.getLogger(__name__)

ARRAY_FIELDS = (
    "column_order",
    "unique_constraints",
    "sortable_columns",
    "searchable_columns",
    "filterable_columns",
)


def build_config_table(name: str, metadata: MetaData) -> Table:
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("table_name", String(255), nullable=False, unique=True),
        *(Column(field, Text, nullable=True) for field in ARRAY_FIELDS),
        Column("created_at", DateTime(timezone=True), server_default=func.now()),
        Column("updated_at", DateTime(timezone=True), server_default=func.now()),
        Column("deleted_at", DateTime(timezone=True), nullable=True),
    )


def parse_array(value: Any) -> Optional[list]:
    """Accept a list as-is, or decode its JSON string form. Empty → None."""
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        return list(value)
    parsed = json.loads(value)
    if parsed is None:
        return None
    if not isinstance(parsed, list):
        raise ValueError(f"Expected a JSON array, got {type(parsed).__name__}")
    return parsed


def serialize_array(value: Optional[list]) -> Optional[str]:
    return None if value is None else json.dumps(list(value))


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TableConfigStore:
    def __init__(self, engine: Engine, table_name: str = "table_configurations"):
        self.engine = engine
        self.metadata = MetaData()
        self.table = build_config_table(table_name, self.metadata)

    def ensure_schema(self) -> None:
        """Create the configuration table if it does not exist yet."""
        self.metadata.create_all(self.engine, checkfirst=True)

    def list_configured_tables(self) -> list[str]:
        t = self.table
        stmt = select(t.c.table_name).where(t.c.deleted_at.is_(None)).order_by(t.c.table_name)
        with self.engine.connect() as conn:
            return [row[0] for row in conn.execute(stmt)]

    def get_configuration(self, table_name: str) -> Optional[TableConfiguration]:
        t = self.table
        stmt = select(t).where(t.c.table_name == table_name, t.c.deleted_at.is_(None))
        with self.engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            return None
        data = dict(row)
        for field in ARRAY_FIELDS:
            data[field] = parse_array(data.get(field))
        return TableConfiguration(**data)

    def save_configuration(
        self,
        table_name: Optional[str],
        column_order: Optional[list[str]] = None,
        unique_constraints: Optional[list[str]] = None,
        sortable_columns: Optional[list[str]] = None,
        searchable_columns: Optional[list[str]] = None,
        filterable_columns: Optional[list[str]] = None,
    ) -> None:
        if not table_name:
            raise ValidationError("table_name is required")

        values = {
            "column_order": serialize_array(column_order),
            "unique_constraints": serialize_array(unique_constraints),
            "sortable_columns": serialize_array(sortable_columns),
            "searchable_columns": serialize_array(searchable_columns),
            "filterable_columns": serialize_array(filterable_columns),
        }
        t = self.table
        with self.engine.begin() as conn:
            existing = conn.execute(select(t.c.id).where(t.c.table_name == table_name)).first()
            if existing:
                # Saving over a soft-deleted row brings it back
                conn.execute(
                    update(t)
                    .where(t.c.table_name == table_name)
                    .values(**values, updated_at=_now(), deleted_at=None)
                )
                logger.info("Updated configuration for %s", table_name)
            else:
                conn.execute(insert(t).values(table_name=table_name, **values))
                logger.info("Created configuration for %s", table_name)

    def delete_configuration(self, table_name: str) -> None:
        t = self.table
        with self.engine.begin() as conn:
            result = conn.execute(
                update(t)
                .where(t.c.table_name == table_name, t.c.deleted_at.is_(None))
                .values(deleted_at=_now())
            )
        if result.rowcount:
            logger.info("Soft-deleted configuration for %s", table_name)
