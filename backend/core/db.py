"""
Database engine factory.
Works with any SQLAlchemy URL; SQLite and PostgreSQL are the tested targets.
"""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)


def create_engine_from_url(url: str, echo: bool = False) -> Engine:
    """Build a pooled engine. Nothing is connected until first use."""
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI serves sync endpoints from a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


def check_connection(engine: Engine) -> bool:
    """Run ``SELECT 1``; log instead of raising so the API can still boot."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except OperationalError as e:
        logger.error("Unable to connect to the database: %s", e)
        return False
    logger.info("Database connected (%s)", engine.url.get_backend_name())
    return True
