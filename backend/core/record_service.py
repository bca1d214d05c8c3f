"""
Generic record service — list/get/create/update/delete against any table.

Statements are built from SQLAlchemy Core Table constructs over the
introspected column list, so identifiers are quoted by the dialect and every
value is bound as a parameter. Column names coming from the caller are checked
against the table's columns before they reach a statement.
"""
import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Column, Integer, MetaData, Table, delete, func, insert, or_, select, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from core.errors import ConflictError, InvalidColumnError, InvalidTableError, ValidationError
from core.introspection import SchemaIntrospector
from core.table_config import TableConfigStore
from models.records import ListResult, SearchFilter, SEARCH_KEY
from models.table import TableMetadata

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class RecordService:
    def __init__(self, engine: Engine, introspector: SchemaIntrospector, config_store: TableConfigStore):
        self.engine = engine
        self.introspector = introspector
        self.config_store = config_store

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _metadata(self, table_name: str) -> TableMetadata:
        if not self.introspector.table_exists(table_name):
            raise InvalidTableError(table_name)
        return self.introspector.describe_table(table_name)

    def _table(self, meta: TableMetadata) -> Table:
        """Untyped Table over the introspected columns; values pass through as given.

        Only an auto-increment key is typed, so inserts report the generated id.
        """
        cols = []
        for col in meta.columns:
            if col.is_primary_key and col.is_auto_increment:
                cols.append(Column(col.name, Integer, primary_key=True, autoincrement=True))
            else:
                cols.append(Column(col.name, primary_key=col.is_primary_key))
        return Table(meta.table, MetaData(), *cols, schema=self.introspector.schema)

    @staticmethod
    def _key(meta: TableMetadata, t: Table) -> Column:
        if meta.primary_key not in t.c:
            raise ValidationError(f"Table '{meta.table}' has no primary key column '{meta.primary_key}'")
        return t.c[meta.primary_key]

    @staticmethod
    def _check_columns(meta: TableMetadata, names) -> None:
        known = set(meta.column_names)
        for name in names:
            if name not in known:
                raise InvalidColumnError(meta.table, name)

    @staticmethod
    def _coerce_key(meta: TableMetadata, record_id: Any) -> Any:
        """Path ids arrive as strings; match the key column's numeric type."""
        pk = meta.column(meta.primary_key)
        if pk is not None and pk.ui.widget == "number" and isinstance(record_id, str):
            try:
                return int(record_id)
            except ValueError:
                return record_id
        return record_id

    def _unique_columns(self, table_name: str) -> list[str]:
        config = self.config_store.get_configuration(table_name)
        if config is None or not config.unique_constraints:
            return []
        return config.unique_constraints

    def _check_unique(
        self,
        conn: Connection,
        meta: TableMetadata,
        t: Table,
        data: Record,
        exclude_id: Any = None,
    ) -> None:
        for col in self._unique_columns(meta.table):
            value = data.get(col)
            if value is None:
                continue
            if col not in t.c:
                logger.warning("Unique column %s.%s no longer exists; skipped", meta.table, col)
                continue
            stmt = select(func.count()).select_from(t).where(t.c[col] == value)
            if exclude_id is not None:
                stmt = stmt.where(self._key(meta, t) != exclude_id)
            if conn.execute(stmt).scalar():
                raise ConflictError(f"Record with {col}: '{value}' already exists")

    @staticmethod
    def _search_filter(value: Any) -> SearchFilter:
        if isinstance(value, SearchFilter):
            return value
        if not isinstance(value, dict):
            raise ValidationError(f"'{SEARCH_KEY}' filter must have columns and query")
        try:
            return SearchFilter(**value)
        except PydanticValidationError as e:
            raise ValidationError(f"'{SEARCH_KEY}' filter must have columns and query") from e

    @staticmethod
    def _validate_for_create(meta: TableMetadata, data: Record) -> None:
        for col in meta.columns:
            value = data.get(col.name)
            # A server default fills an omitted column, not an explicit null
            omitted_ok = col.has_default and col.name not in data
            if not col.nullable and not col.is_auto_increment and not omitted_ok and value is None:
                raise ValidationError(f"Column '{col.name}' is required")
            if col.max_length and value is not None and len(str(value)) > col.max_length:
                raise ValidationError(f"Column '{col.name}' exceeds max length of {col.max_length}")

    @staticmethod
    def _validate_for_update(meta: TableMetadata, data: Record) -> None:
        for name, value in data.items():
            col = meta.column(name)
            if value is None and not col.nullable and not col.is_primary_key:
                raise ValidationError(f"Column '{name}' cannot be null")
            if col.max_length and value is not None and len(str(value)) > col.max_length:
                raise ValidationError(f"Column '{name}' exceeds max length of {col.max_length}")

    # ── Operations ───────────────────────────────────────────────────────────

    def list(
        self,
        table_name: str,
        page: int = 1,
        limit: int = 30,
        filters: Optional[dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> ListResult:
        meta = self._metadata(table_name)
        t = self._table(meta)
        page = max(int(page), 1)
        limit = max(int(limit), 1)
        offset = (page - 1) * limit

        where = []
        for key, value in (filters or {}).items():
            if value is None or value == "":
                continue
            if key == SEARCH_KEY:
                search = self._search_filter(value)
                cols = [c for c in search.columns if c in t.c]
                skipped = set(search.columns) - set(cols)
                if skipped:
                    logger.warning("Ignoring unknown searchable columns on %s: %s", table_name, sorted(skipped))
                if cols and search.query:
                    pattern = f"%{search.query}%"
                    where.append(or_(*(t.c[c].like(pattern) for c in cols)))
                continue
            if isinstance(value, (dict, list)):
                raise ValidationError(f"Filter value for '{key}' must be a scalar")
            self._check_columns(meta, [key])
            where.append(t.c[key] == value)

        stmt = select(t).where(*where)
        if sort_by and sort_order:
            self._check_columns(meta, [sort_by])
            sort_col = t.c[sort_by]
            stmt = stmt.order_by(sort_col.desc() if sort_order.lower() == "desc" else sort_col.asc())
        stmt = stmt.limit(limit).offset(offset)

        count_stmt = select(func.count()).select_from(t).where(*where)

        with self.engine.connect() as conn:
            rows = [dict(r) for r in conn.execute(stmt).mappings()]
            total = conn.execute(count_stmt).scalar() or 0
        return ListResult(data=rows, total=int(total))

    def get(self, table_name: str, record_id: Any) -> Optional[Record]:
        meta = self._metadata(table_name)
        t = self._table(meta)
        stmt = select(t).where(self._key(meta, t) == self._coerce_key(meta, record_id))
        with self.engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def create(self, table_name: str, data: Record) -> Optional[Record]:
        meta = self._metadata(table_name)
        self._check_columns(meta, data.keys())
        self._validate_for_create(meta, data)
        t = self._table(meta)

        try:
            with self.engine.begin() as conn:
                self._check_unique(conn, meta, t, data)
                result = conn.execute(insert(t).values(**data))
        except IntegrityError as e:
            raise ConflictError(f"Write rejected by database constraint: {e.orig}") from e

        new_id = data.get(meta.primary_key)
        if new_id is None and meta.primary_key in t.c and t.c[meta.primary_key].primary_key:
            new_id = result.inserted_primary_key[0]
        logger.info("Inserted into %s (%s=%s)", table_name, meta.primary_key, new_id)
        if new_id is None:
            return dict(data)
        return self.get(table_name, new_id)

    def update(self, table_name: str, record_id: Any, data: Record) -> Optional[Record]:
        meta = self._metadata(table_name)
        if not data:
            raise ValidationError("No fields to update")
        self._check_columns(meta, data.keys())
        self._validate_for_update(meta, data)
        t = self._table(meta)
        key = self._coerce_key(meta, record_id)

        try:
            with self.engine.begin() as conn:
                self._check_unique(conn, meta, t, data, exclude_id=key)
                conn.execute(update(t).where(self._key(meta, t) == key).values(**data))
        except IntegrityError as e:
            raise ConflictError(f"Write rejected by database constraint: {e.orig}") from e

        logger.info("Updated %s (%s=%s)", table_name, meta.primary_key, record_id)
        return self.get(table_name, data.get(meta.primary_key, key))

    def delete(self, table_name: str, record_id: Any) -> None:
        meta = self._metadata(table_name)
        t = self._table(meta)
        key = self._coerce_key(meta, record_id)
        with self.engine.begin() as conn:
            result = conn.execute(delete(t).where(self._key(meta, t) == key))
        logger.info("Deleted from %s (%s=%s, rows=%d)", table_name, meta.primary_key, record_id, result.rowcount)
