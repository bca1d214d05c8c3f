"""/meta — schema introspection endpoints."""
import logging
from fastapi import APIRouter, Depends

from api.deps import get_introspector
from core.introspection import SchemaIntrospector

router = APIRouter(prefix="/meta", tags=["Metadata"])
logger = logging.getLogger(__name__)


@router.get("/tables")
def list_tables(introspector: SchemaIntrospector = Depends(get_introspector)):
    return {"success": True, "data": introspector.list_tables()}


@router.get("/table/{table}")
def describe_table(table: str, introspector: SchemaIntrospector = Depends(get_introspector)):
    metadata = introspector.describe_table(table)
    return {"success": True, "data": metadata.model_dump()}


@router.post("/refresh")
def refresh_metadata(introspector: SchemaIntrospector = Depends(get_introspector)):
    introspector.invalidate_cache()
    logger.info("Metadata cache cleared on request")
    return {"success": True, "message": "Metadata cache cleared"}
