from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from upload_vault.config.settings import Settings
from upload_vault.logging.logger import Log

POOL_NAME = "upload_vault"

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    """libpq connection string; values are quoted, so a password may contain spaces."""
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
    )


def init_pool(settings: Settings) -> None:
    """Open the shared pool; each ingest worker borrows its own connection per file."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        raise RuntimeError("Connection pool already initialized.")
    _pool = ConnectionPool(
        build_conninfo(settings),
        min_size=1,
        max_size=settings.db_pool_max_size,
        name=POOL_NAME,
        open=True,
    )
    Log.info(
        f"Database pool open: {settings.db_host}:{settings.db_port}/{settings.db_database} "
        f"(max {settings.db_pool_max_size} connections)"
    )


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None
        Log.info("Database pool closed")


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Borrow a pooled connection for one unit of work.

    Repositories commit explicitly; an exception inside the block rolls the
    transaction back when the connection returns to the pool.
    """
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
