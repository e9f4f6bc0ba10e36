import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from intake.config.settings import Settings
from intake.database.connection import close_pool, get_connection, init_pool

SCHEMA = """
CREATE TABLE IF NOT EXISTS contracts (
    id SERIAL PRIMARY KEY,
    client_name TEXT NOT NULL,
    project_name TEXT NOT NULL,
    total_value NUMERIC(14, 2) NOT NULL CHECK (total_value > 0),
    signed_date DATE NOT NULL,
    category TEXT NOT NULL,
    description TEXT,
    status TEXT,
    notes TEXT
);
CREATE TABLE IF NOT EXISTS expenses (
    id SERIAL PRIMARY KEY,
    description TEXT NOT NULL,
    amount NUMERIC(14, 2) NOT NULL CHECK (amount > 0),
    category TEXT NOT NULL,
    due_date DATE,
    vendor TEXT,
    status TEXT,
    paid_date DATE,
    invoice_number TEXT,
    notes TEXT
);
CREATE TABLE IF NOT EXISTS receivables (
    id SERIAL PRIMARY KEY,
    client_name TEXT NOT NULL,
    amount NUMERIC(14, 2) NOT NULL CHECK (amount > 0),
    description TEXT NOT NULL,
    expected_date DATE,
    contract_id INTEGER REFERENCES contracts (id) ON DELETE SET NULL,
    status TEXT,
    received_date DATE,
    received_amount NUMERIC(14, 2),
    category TEXT
);
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "ledger_test")
    return Settings(entity_store="postgres")


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def run_tag(integration_pool: None) -> Generator[str, None, None]:
    """Unique marker for rows created by one test; they are deleted afterwards."""
    tag = f"it-{uuid.uuid4().hex[:12]}"
    yield tag
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM receivables WHERE client_name LIKE %s", (f"{tag}%",))
            cur.execute("DELETE FROM expenses WHERE description LIKE %s", (f"{tag}%",))
            cur.execute("DELETE FROM contracts WHERE client_name LIKE %s", (f"{tag}%",))
        conn.commit()
