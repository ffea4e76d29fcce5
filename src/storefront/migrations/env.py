"""Alembic environment configuration for the storefront.

The database URL is taken from (highest first) the URL handed over by
``storefront.ops.database.alembic_config``, ``STOREFRONT_DATABASE_URL``,
``DATABASE_URL``, then ``sqlalchemy.url`` in ``alembic.ini``.
Imports the ORM models so autogenerate can detect schema changes.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

config = context.config

database_url = (
    config.attributes.get("database_url")
    or os.environ.get("STOREFRONT_DATABASE_URL")
    or os.environ.get("DATABASE_URL")
)
if database_url:
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))

# Python logging from .ini file (skipped when driven programmatically)
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from storefront.core.orm.base import StorefrontBase  # noqa: E402

import storefront.core.orm.tables  # noqa: E402, F401

target_metadata = StorefrontBase.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (SQL script output only)."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,  # SQLite ALTER TABLE support
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (live database connection)."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,  # SQLite ALTER TABLE support
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
