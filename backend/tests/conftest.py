import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import sqlite3
import tempfile
from fastapi.testclient import TestClient

from core.db import create_engine_from_url
from core.introspection import MetadataCache, SchemaIntrospector
from core.record_service import RecordService
from core.table_config import TableConfigStore
from main import create_app

DDL = [
    """CREATE TABLE students (
        id          INTEGER PRIMARY KEY AUTOINCREMENT,
        name        VARCHAR(100) NOT NULL,
        reg_no      VARCHAR(10)  NOT NULL,
        department  TEXT,
        enrolled_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """CREATE TABLE codes (
        code   VARCHAR(5) PRIMARY KEY,
        label  TEXT
    )""",
    """CREATE TABLE notes (
        title      TEXT,
        is_pinned  BOOLEAN
    )""",
]


@pytest.fixture
def temp_sqlite_db():
    fd, path = tempfile.mkstemp(suffix=".db")
    try:
        conn = sqlite3.connect(path)
        cur = conn.cursor()
        for stmt in DDL:
            cur.execute(stmt)
        conn.commit()
        conn.close()
        yield path
    finally:
        os.close(fd)
        os.remove(path)


@pytest.fixture
def db_url(temp_sqlite_db):
    return f"sqlite:///{temp_sqlite_db}"


@pytest.fixture
def engine(db_url):
    eng = create_engine_from_url(db_url)
    yield eng
    eng.dispose()


@pytest.fixture
def introspector(engine):
    return SchemaIntrospector(engine, MetadataCache())


@pytest.fixture
def config_store(engine):
    store = TableConfigStore(engine)
    store.ensure_schema()
    return store


@pytest.fixture
def service(engine, introspector, config_store):
    return RecordService(engine, introspector, config_store)


@pytest.fixture
def client(db_url):
    app = create_app(db_url)
    with TestClient(app) as test_client:
        yield test_client
    app.state.engine.dispose()
