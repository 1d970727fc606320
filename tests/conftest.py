"""Shared fixtures: a small SQLite catalog and a clean environment."""

import sqlite3
from pathlib import Path

import pytest
from sqlalchemy import create_engine

ENV_VARS = (
    "DATABASE_URL",
    "DATABASE_PATH",
    "DB_DIALECT",
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
    "DB_USER",
    "DB_PASSWORD",
    "DB_DRIVER",
    "DB_TRUST_SERVER_CERTIFICATE",
    "SCHEMA_DOC_OUTPUT",
)

SAMPLE_SCHEMA = """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT UNIQUE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE orders (
        id INTEGER PRIMARY KEY,
        user_id INTEGER REFERENCES users (id) ON DELETE CASCADE,
        total DECIMAL(10,2),
        status TEXT
    );

    CREATE INDEX idx_orders_status ON orders (status);

    CREATE TABLE order_lines (
        order_id INTEGER NOT NULL REFERENCES orders,
        line_no INTEGER NOT NULL,
        sku TEXT,
        PRIMARY KEY (order_id, line_no)
    );

    CREATE TABLE shipments (
        id INTEGER PRIMARY KEY,
        order_id INTEGER NOT NULL,
        line_no INTEGER NOT NULL,
        FOREIGN KEY (order_id, line_no) REFERENCES order_lines (order_id, line_no)
    );
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's database variables out of every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_db(tmp_path: Path) -> Path:
    """Create a SQLite file with single, composite, and implicit foreign keys."""
    db_path = tmp_path / "shop.db"
    conn = sqlite3.connect(db_path)
    try:
        conn.executescript(SAMPLE_SCHEMA)
        conn.execute("INSERT INTO users (name, email) VALUES (?, ?)", ("John Doe", "john@example.com"))
        conn.commit()
    finally:
        conn.close()
    return db_path


@pytest.fixture
def sqlite_conn(sample_db: Path):
    engine = create_engine(f"sqlite:///{sample_db}")
    try:
        with engine.connect() as conn:
            yield conn
    finally:
        engine.dispose()
