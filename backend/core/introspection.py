"""
Schema introspection — table listing, existence checks and column reflection.
Results of describe_table() are cached per table name until invalidate_cache().
"""
import logging
from threading import Lock
from typing import Optional

from sqlalchemy import inspect, Integer
from sqlalchemy.engine import Engine
from sqlalchemy.exc import CompileError

from core.errors import TableNotFoundError
from models.table import ColumnDescriptor, TableMetadata, UIHint

logger = logging.getLogger(__name__)


class MetadataCache:
    """Thread-safe table_name → TableMetadata map with explicit clear()."""

    def __init__(self):
        self._entries: dict[str, TableMetadata] = {}
        self._lock = Lock()

    def get(self, table_name: str) -> Optional[TableMetadata]:
        with self._lock:
            return self._entries.get(table_name)

    def set(self, table_name: str, metadata: TableMetadata) -> None:
        with self._lock:
            self._entries[table_name] = metadata

    def clear(self) -> None:
        with self._lock:
            self._entries = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# ── Column classification ─────────────────────────────────────────────────────

def map_type_to_widget(data_type: str) -> str:
    t = data_type.lower()
    if "tinyint" in t or "bool" in t:
        return "switch"
    if any(k in t for k in ("int", "decimal", "numeric", "float", "double", "real")):
        return "number"
    if "text" in t or "json" in t:
        return "textarea"
    if "date" in t or "timestamp" in t or "time" in t:
        return "date"
    return "text"


def format_label(name: str) -> str:
    """customer_email → Customer Email"""
    return " ".join(w[:1].upper() + w[1:] for w in name.split("_"))


def _type_name(col_type, dialect) -> str:
    try:
        return col_type.compile(dialect=dialect)
    except CompileError:
        return type(col_type).__name__.upper()


def _max_length(col_type) -> Optional[int]:
    length = getattr(col_type, "length", None)
    return length if isinstance(length, int) and length > 0 else None


def _is_auto_increment(col: dict, pk_cols: list[str]) -> bool:
    flag = col.get("autoincrement")
    if flag is True:
        return True
    if flag is False:
        return False
    # SQLite reports nothing; a lone INTEGER primary key aliases the rowid
    return pk_cols == [col["name"]] and isinstance(col["type"], Integer)


# ── Introspector ──────────────────────────────────────────────────────────────

class SchemaIntrospector:
    def __init__(self, engine: Engine, cache: MetadataCache, schema: Optional[str] = None):
        self.engine = engine
        self.cache = cache
        self.schema = schema

    def list_tables(self) -> list[str]:
        return inspect(self.engine).get_table_names(schema=self.schema)

    def table_exists(self, table_name: str) -> bool:
        if not table_name:
            return False
        return inspect(self.engine).has_table(table_name, schema=self.schema)

    def describe_table(self, table_name: str) -> TableMetadata:
        cached = self.cache.get(table_name)
        if cached is not None:
            return cached

        if not self.table_exists(table_name):
            raise TableNotFoundError(table_name)

        # A fresh Inspector per read: Inspector keeps its own reflection cache
        insp = inspect(self.engine)
        raw_cols = insp.get_columns(table_name, schema=self.schema)
        pk_constraint = insp.get_pk_constraint(table_name, schema=self.schema) or {}
        pk_cols = list(pk_constraint.get("constrained_columns") or [])

        columns = []
        for col in raw_cols:
            data_type = _type_name(col["type"], self.engine.dialect)
            columns.append(ColumnDescriptor(
                name=col["name"],
                type=data_type,
                nullable=bool(col.get("nullable", True)),
                max_length=_max_length(col["type"]),
                is_primary_key=col["name"] in pk_cols,
                is_auto_increment=_is_auto_increment(col, pk_cols),
                has_default=col.get("default") is not None,
                ui=UIHint(widget=map_type_to_widget(data_type), label=format_label(col["name"])),
            ))

        primary_key = next((c.name for c in columns if c.is_primary_key), "id")
        metadata = TableMetadata(
            table=table_name,
            label=format_label(table_name),
            primary_key=primary_key,
            columns=columns,
        )
        logger.info("Introspected %s: %d columns, primary key %s", table_name, len(columns), primary_key)
        self.cache.set(table_name, metadata)
        return metadata

    def invalidate_cache(self) -> None:
        logger.info("Clearing metadata cache (%d entries)", len(self.cache))
        self.cache.clear()
