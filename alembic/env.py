from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from db.base import Base
from db.config import load_env_files, normalize_postgres_url, resolve_database_url
from db.models import MenuItem  # noqa: F401  imports trigger Base.metadata registration

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _resolve_database_url() -> str:
    """
    Resolve the menu store URL for migrations.

    `-x db_url=...` wins, then ALEMBIC_DATABASE_URL, then the application
    resolution order (DATABASE_URL, CLOUD_DATABASE_URL, LOCAL_DATABASE_URL).
    """

    load_env_files()

    x_args = context.get_x_argument(as_dictionary=True)
    override = x_args.get("db_url") or os.getenv("ALEMBIC_DATABASE_URL")
    url = normalize_postgres_url(override) if override else resolve_database_url()

    if not url.startswith("postgresql"):
        raise RuntimeError("Menu store migrations support PostgreSQL URLs only.")

    return url


def _configure_context(**options) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        **options,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    _configure_context(
        url=_resolve_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


def run_migrations_online() -> None:
    connectable = create_engine(_resolve_database_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure_context(connection=connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
