# tests/conftest.py
from __future__ import annotations
import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from serieshub.common.settings import get_settings
from serieshub.database.models import Base  # <-- registers every table on the metadata


@pytest.fixture(scope="session")
def _database_url():
    """
    Disposable Postgres when USE_TESTCONTAINERS is on, otherwise the
    in-memory SQLite URL from settings.
    """
    cfg = get_settings()
    if not cfg.use_testcontainers:
        yield cfg.test_database_url
        return

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer(cfg.test_db_image) as pg:
        # testcontainers defaults to psycopg2; we ship psycopg (v3)
        yield pg.get_connection_url().replace("psycopg2", "psycopg")


@pytest.fixture(scope="session")
def db_engine(_database_url) -> Engine:
    if _database_url.startswith("sqlite"):
        # one shared connection so every session sees the same in-memory db
        engine = create_engine(
            _database_url,
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(_database_url, future=True)

    # Skip Alembic here; just create tables from models
    Base.metadata.create_all(bind=engine)

    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
