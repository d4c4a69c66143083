import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from field_mapper.config.settings import Settings
from field_mapper.database.connection import close_pool, get_connection, init_pool


def _pg_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "field_mapper_test")
    return Settings(storage_backend="postgres")


def _probe(settings: Settings) -> None:
    """Fail fast when the database is unreachable; the pool would keep retrying."""
    with psycopg.connect(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        connect_timeout=3,
    ):
        pass


@pytest.fixture(scope="session")
def pg_settings() -> Settings:
    return _pg_settings()


@pytest.fixture(scope="session")
def integration_pool(pg_settings: Settings) -> Generator[None, None, None]:
    try:
        _probe(pg_settings)
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    init_pool(pg_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def snapshot_name(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """A fresh snapshot row name, deleted after the test."""
    name = f"test_{uuid.uuid4().hex}"
    yield name
    db_conn.execute("DELETE FROM field_mapper_snapshots WHERE name = %s", (name,))
    db_conn.commit()
