"""/api/{table} — generic CRUD over any introspected table."""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from api.deps import get_config_store, get_record_service
from config import settings
from core.errors import RecordNotFoundError
from core.query_params import normalize_list_query
from core.record_service import RecordService
from core.table_config import TableConfigStore
from models.records import SearchFilter, SEARCH_KEY

router = APIRouter(prefix="/api", tags=["Records"])
logger = logging.getLogger(__name__)


@router.get("/{table}")
def list_records(
    table: str,
    request: Request,
    service: RecordService = Depends(get_record_service),
    store: TableConfigStore = Depends(get_config_store),
):
    query = normalize_list_query(request.query_params, default_limit=settings.DEFAULT_PAGE_SIZE)
    filters: dict[str, Any] = dict(query.filters)

    if query.search:
        config = store.get_configuration(table)
        if config and config.searchable_columns:
            filters[SEARCH_KEY] = SearchFilter(columns=config.searchable_columns, query=query.search)
        else:
            logger.debug("No searchable columns configured for %s; ignoring search", table)

    result = service.list(table, query.page, query.limit, filters, query.sort_by, query.sort_order)
    return {"success": True, "data": result.data, "total": result.total}


@router.get("/{table}/{record_id}")
def get_record(table: str, record_id: str, service: RecordService = Depends(get_record_service)):
    record = service.get(table, record_id)
    if record is None:
        raise RecordNotFoundError(table, record_id)
    return {"success": True, "data": record}


@router.post("/{table}", status_code=status.HTTP_201_CREATED)
def create_record(
    table: str,
    data: dict[str, Any] = Body(...),
    service: RecordService = Depends(get_record_service),
):
    return {"success": True, "data": service.create(table, data)}


@router.put("/{table}/{record_id}")
def update_record(
    table: str,
    record_id: str,
    data: dict[str, Any] = Body(...),
    service: RecordService = Depends(get_record_service),
):
    return {"success": True, "data": service.update(table, record_id, data)}


@router.delete("/{table}/{record_id}")
def delete_record(table: str, record_id: str, service: RecordService = Depends(get_record_service)):
    service.delete(table, record_id)
    return {"success": True, "message": "Deleted successfully"}
