"""FastAPI dependencies — hand out the services wired up in main.create_app()."""
from fastapi import Request

from core.introspection import SchemaIntrospector
from core.record_service import RecordService
from core.table_config import TableConfigStore


def get_introspector(request: Request) -> SchemaIntrospector:
    return request.app.state.introspector


def get_config_store(request: Request) -> TableConfigStore:
    return request.app.state.config_store


def get_record_service(request: Request) -> RecordService:
    return request.app.state.record_service
