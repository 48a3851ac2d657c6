import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg import sql

from certextract.config.settings import Settings
from certextract.database.connection import close_pool, get_connection, init_pool
from certextract.extraction.formats import FormatHandler
from certextract.extraction.models import ColumnType

_SQL_TYPES = {
    ColumnType.DATE: "DATE",
    ColumnType.INT: "INTEGER",
    ColumnType.FLOAT: "NUMERIC(10, 2)",
    ColumnType.BIT: "BOOLEAN",
    ColumnType.TEXT: "TEXT",
}


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "certificados_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def certificate_table(db_conn: psycopg.Connection[Any]):  # type: ignore[no-untyped-def]
    """Create the table of a format for the test and drop it afterwards."""
    created: list[str] = []

    def create(handler: FormatHandler) -> FormatHandler:
        columns = [
            sql.SQL("{} {}").format(sql.Identifier(c.column), sql.SQL(_SQL_TYPES[c.column_type]))
            for c in handler.columns
        ]
        columns.append(sql.SQL('"CreatedAt" TIMESTAMP NOT NULL'))
        db_conn.execute(
            sql.SQL("CREATE TABLE IF NOT EXISTS {} ({})").format(
                sql.Identifier(handler.table_name), sql.SQL(", ").join(columns)
            )
        )
        db_conn.commit()
        created.append(handler.table_name)
        return handler

    yield create

    for table in created:
        db_conn.execute(sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(table)))
    db_conn.commit()
