from unittest.mock import patch

import pytest
from psycopg.conninfo import conninfo_to_dict

from upload_vault.config.settings import Settings
from upload_vault.database import connection
from upload_vault.database.connection import build_conninfo, close_pool, get_connection, init_pool


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "db_host": "db.local",
        "db_port": 5433,
        "db_database": "vault",
        "db_username": "ingest",
        "db_password": "s3cret",
        "db_pool_max_size": 7,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestBuildConninfo:
    def test_contains_every_setting(self) -> None:
        params = conninfo_to_dict(build_conninfo(_settings()))

        assert params == {
            "host": "db.local",
            "port": "5433",
            "dbname": "vault",
            "user": "ingest",
            "password": "s3cret",
        }

    def test_password_with_spaces_survives(self) -> None:
        params = conninfo_to_dict(build_conninfo(_settings(db_password="two words")))

        assert params["password"] == "two words"


class TestPoolLifecycle:
    def test_get_connection_requires_pool(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            with get_connection():
                pass

    def test_init_uses_configured_size_and_close_resets(self) -> None:
        with patch("upload_vault.database.connection.ConnectionPool") as pool_cls:
            init_pool(_settings())
            try:
                kwargs = pool_cls.call_args.kwargs
                assert kwargs["max_size"] == 7
                assert kwargs["name"] == "upload_vault"
                with pytest.raises(RuntimeError, match="already initialized"):
                    init_pool(_settings())
            finally:
                close_pool()

        pool_cls.return_value.close.assert_called_once()
        assert connection._pool is None
