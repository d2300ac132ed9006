"""Alembic environment for the booking schema.

The URL comes from DATABASE_URL (or the POSTGRES_* parts) and falls back to
``sqlalchemy.url`` in alembic.ini. TEST_DATABASE_URL overrides both for
online runs against a throwaway database.
"""
import os
from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

from booking.config import database_url_from_env
from booking.db.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    return database_url_from_env() or config.get_main_option("sqlalchemy.url")


def run_migrations_offline() -> None:
    """Emit SQL to the script output without connecting."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = os.getenv("TEST_DATABASE_URL") or _database_url()
    connectable = create_engine(url, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
