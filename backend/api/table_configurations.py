"""/api/table_configurations — per-table UI and constraint configuration."""
from fastapi import APIRouter, Depends

from api.deps import get_config_store
from core.table_config import TableConfigStore
from models.table_config import TableConfigurationRequest

router = APIRouter(prefix="/api/table_configurations", tags=["Table configuration"])


@router.get("")
def list_configured_tables(store: TableConfigStore = Depends(get_config_store)):
    return {"success": True, "data": store.list_configured_tables()}


@router.get("/{table}")
def get_configuration(table: str, store: TableConfigStore = Depends(get_config_store)):
    config = store.get_configuration(table)
    return {"success": True, "data": config.model_dump() if config else None}


@router.post("")
def save_configuration(req: TableConfigurationRequest, store: TableConfigStore = Depends(get_config_store)):
    store.save_configuration(
        req.table_name,
        column_order=req.column_order,
        unique_constraints=req.unique_constraints,
        sortable_columns=req.sortable_columns,
        searchable_columns=req.searchable_columns,
        filterable_columns=req.filterable_columns,
    )
    return {"success": True, "message": "Configuration saved successfully"}


@router.delete("/{table}")
def delete_configuration(table: str, store: TableConfigStore = Depends(get_config_store)):
    store.delete_configuration(table)
    return {"success": True, "message": "Configuration deleted successfully"}
