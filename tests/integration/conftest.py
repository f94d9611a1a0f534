import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg import sql

from upload_vault.config.settings import Settings
from upload_vault.database.connection import close_pool, get_connection, init_pool
from upload_vault.database.schema import ensure_schema

CLEANUP_TABLES = ("structured_records", "audio_files", "video_files")


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "upload_vault_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        ensure_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(
    integration_pool: None,
) -> Generator[list[tuple[str, int]], None, None]:
    """Collect (table, id) pairs; rows are deleted after the test."""
    cleanup: list[tuple[str, int]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table in CLEANUP_TABLES:
                    cur.execute(
                        sql.SQL("DELETE FROM {} WHERE id = %s").format(
                            sql.Identifier(table)
                        ),
                        (row_id,),
                    )
        conn.commit()


@pytest.fixture
def source_file_cleanup(
    integration_pool: None,
) -> Generator[list[str], None, None]:
    """Collect structured_records.source_file values to delete after the test."""
    names: list[str] = []
    yield names
    if not names:
        return
    with get_connection() as conn:
        conn.execute(
            "DELETE FROM structured_records WHERE source_file = ANY(%s)",
            (names,),
        )
        conn.commit()
