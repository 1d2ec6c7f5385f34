"""Alembic migrations for the named-configuration store"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

# The async engine must not be built while migrating
os.environ.setdefault("ALEMBIC_MODE", "1")

from dividend_planner.config import settings
from dividend_planner.infrastructure.db import models  # noqa: F401
from dividend_planner.infrastructure.db.database import Base


def sync_database_url(url: str) -> str:
    """Map the app's async driver URL onto its blocking counterpart"""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url.replace("+asyncpg", "+psycopg2").replace("+aiosqlite", "")


config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

DATABASE_URL = sync_database_url(settings.DATABASE_URL)
target_metadata = Base.metadata


def run_offline() -> None:
    """Emit SQL to stdout without a connection."""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with engine.connect() as connection:
        # SQLite cannot ALTER most constraints in place
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
