# serieshub/database/alembic/env.py
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool, text
from sqlalchemy.engine import Connection

# Keep this import light: settings only, not the app graph.
from serieshub.common.settings import get_settings

cfg = get_settings()

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

database_url = os.getenv("DATABASE_URL", cfg.database_url)

from serieshub.database.models import Base  # noqa: E402  (registers every table)

target_metadata = Base.metadata

include_schemas = True
version_table_schema = cfg.alembic_version_table_schema
is_postgres = database_url.startswith("postgresql")


def include_object(object, name, type_, reflected, compare_to):
    """Limit autogenerate to our schema (but still allow version table in public)."""
    obj_schema = getattr(object, "schema", None)
    if type_ == "table":
        if obj_schema is None:
            return True
        return obj_schema in {cfg.db_schema, version_table_schema}
    return True


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (no DB connection)."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_schemas=include_schemas,
        include_object=include_object,
        version_table_schema=version_table_schema if is_postgres else None,
    )

    with context.begin_transaction():
        context.run_migrations()


def _prepare_connection(conn: Connection) -> None:
    """Ensure the app schema exists and comes first on the search_path (Postgres only)."""
    if not is_postgres:
        return
    conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{cfg.db_schema}"'))
    conn.execute(text(f'SET search_path TO "{cfg.db_schema}", public'))


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (with an Engine/Connection)."""
    connectable = create_engine(database_url, poolclass=pool.NullPool, future=True)

    with connectable.connect() as connection:
        _prepare_connection(connection)

        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_schemas=include_schemas,
            include_object=include_object,
            version_table_schema=version_table_schema if is_postgres else None,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=not is_postgres,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
