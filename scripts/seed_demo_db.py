#!/usr/bin/env python3
"""
Seed a local SQLite database with demo data for AutoCRUD development.
Usage (from the repository root):
    python scripts/seed_demo_db.py
Creates: scripts/demo.db  — point DATABASE_URL at sqlite:///scripts/demo.db
"""
import json
import sqlite3
from pathlib import Path

DB_PATH = Path(__file__).parent / "demo.db"

DDL = [
    """
    CREATE TABLE IF NOT EXISTS countries (
        id          INTEGER PRIMARY KEY AUTOINCREMENT,
        name        VARCHAR(100) NOT NULL,
        code        VARCHAR(3)   NOT NULL,
        created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """
    CREATE TABLE IF NOT EXISTS zipcode_formats (
        id            INTEGER PRIMARY KEY AUTOINCREMENT,
        country_code  VARCHAR(3)   NOT NULL,
        format        VARCHAR(50)  NOT NULL,
        regex         VARCHAR(100),
        created_at    TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at    TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """
    CREATE TABLE IF NOT EXISTS efp_languages (
        id          INTEGER PRIMARY KEY AUTOINCREMENT,
        name        VARCHAR(50) NOT NULL,
        iso_code    VARCHAR(5)  NOT NULL,
        is_active   BOOLEAN DEFAULT 1,
        created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """
    CREATE TABLE IF NOT EXISTS table_configurations (
        id                  INTEGER PRIMARY KEY AUTOINCREMENT,
        table_name          VARCHAR(255) NOT NULL UNIQUE,
        column_order        TEXT,
        unique_constraints  TEXT,
        sortable_columns    TEXT,
        searchable_columns  TEXT,
        filterable_columns  TEXT,
        created_at          TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at          TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        deleted_at          TIMESTAMP
    )""",
]

COUNTRIES = [("United States", "USA"), ("India", "IND"), ("Germany", "DEU")]
ZIPCODES = [("USA", "99999", r"^\d{5}$"), ("IND", "999999", r"^\d{6}$")]
LANGUAGES = [("English", "en", 1), ("Spanish", "es", 1), ("French", "fr", 1)]

CONFIGS = {
    "countries": {
        "column_order": ["id", "name", "code"],
        "unique_constraints": ["code"],
        "sortable_columns": ["name", "code"],
        "searchable_columns": ["name", "code"],
        "filterable_columns": ["code"],
    },
    "efp_languages": {
        "column_order": ["id", "name", "iso_code", "is_active"],
        "unique_constraints": ["iso_code"],
        "sortable_columns": ["name"],
        "searchable_columns": ["name"],
        "filterable_columns": ["is_active"],
    },
}


def seed():
    conn = sqlite3.connect(DB_PATH)
    cur  = conn.cursor()

    for stmt in DDL:
        cur.execute(stmt)

    cur.executemany("INSERT INTO countries(name, code) VALUES (?,?)", COUNTRIES)
    cur.executemany("INSERT INTO zipcode_formats(country_code, format, regex) VALUES (?,?,?)", ZIPCODES)
    cur.executemany("INSERT INTO efp_languages(name, iso_code, is_active) VALUES (?,?,?)", LANGUAGES)

    for table_name, cfg in CONFIGS.items():
        cur.execute(
            "INSERT OR IGNORE INTO table_configurations"
            "(table_name, column_order, unique_constraints, sortable_columns, searchable_columns, filterable_columns) "
            "VALUES (?,?,?,?,?,?)",
            (table_name, *(json.dumps(cfg[k]) for k in (
                "column_order", "unique_constraints", "sortable_columns",
                "searchable_columns", "filterable_columns",
            ))),
        )

    conn.commit()
    conn.close()
    print(f"Demo database seeded: {DB_PATH}")
    print("   Tables: countries, zipcode_formats, efp_languages, table_configurations")


if __name__ == "__main__":
    seed()
