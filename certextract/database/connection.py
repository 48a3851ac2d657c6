from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from certextract.config.settings import Settings

_pool: ConnectionPool | None = None


def init_pool(settings: Settings) -> None:
    """Open the global connection pool for the certificates database."""
    global _pool  # noqa: PLW0603
    conninfo = make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
    )
    _pool = ConnectionPool(conninfo, min_size=1, max_size=settings.db_pool_max_size, open=True)


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a pooled connection. The caller commits."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
