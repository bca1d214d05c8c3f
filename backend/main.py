"""
AutoCRUD — schema-driven admin backend.
FastAPI application entry point.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api import health, meta, records, table_configurations
from config import settings
from core.db import check_connection, create_engine_from_url
from core.errors import AppError
from core.introspection import MetadataCache, SchemaIntrospector
from core.record_service import RecordService
from core.table_config import TableConfigStore

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("autocrud")


def _error(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "code": code},
    )


def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        messages = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()))
            messages.append(f"Field '{loc}': {err.get('msg')}")
        return _error(400, "Validation Error: " + "; ".join(messages), "validation_error")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, str(getattr(exc, "orig", None) or exc), "database_error")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, "An unexpected internal server error occurred.", "internal_error")


def create_app(database_url: Optional[str] = None) -> FastAPI:
    engine = create_engine_from_url(database_url or settings.DATABASE_URL, echo=settings.DB_ECHO)
    introspector = SchemaIntrospector(engine, MetadataCache(), schema=settings.DATABASE_SCHEMA or None)
    config_store = TableConfigStore(engine, table_name=settings.CONFIG_TABLE_NAME)
    record_service = RecordService(engine, introspector, config_store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("AutoCRUD starting up…")
        if check_connection(engine):
            config_store.ensure_schema()
        yield
        engine.dispose()
        logger.info("AutoCRUD shutting down.")

    # ── App ───────────────────────────────────────────────────────────────────
    app = FastAPI(
        title="AutoCRUD",
        description="Generic CRUD and schema introspection over any relational database.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.introspector = introspector
    app.state.config_store = config_store
    app.state.record_service = record_service

    # ── CORS ──────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request log ───────────────────────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        t0 = time.time()
        response = await call_next(request)
        logger.info("%s %s → %d (%.1f ms)", request.method, request.url.path,
                    response.status_code, (time.time() - t0) * 1000)
        return response

    _register_error_handlers(app)

    # ── Routers ───────────────────────────────────────────────────────────────
    # table_configurations must be mounted before the catch-all /api/{table}
    app.include_router(health.router)
    app.include_router(meta.router)
    app.include_router(table_configurations.router)
    app.include_router(records.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
