"""Alembic environment for the compliance schema.

Revisions are hand-written SQL. The ORM metadata is attached only so that
``alembic check`` can report drift between the models and the database.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from config.settings import settings
from src.cp_common.database import Base

# Model modules register their tables on Base.metadata when imported.
import src.cp_audit.infrastructure.db_models  # noqa: E402,F401
import src.cp_coi.infrastructure.db_models  # noqa: E402,F401
import src.cp_contractors.infrastructure.db_models  # noqa: E402,F401
import src.cp_deficiencies.infrastructure.db_models  # noqa: E402,F401
import src.cp_gateway.session.db_models  # noqa: E402,F401
import src.cp_gateway.user.db_models  # noqa: E402,F401
import src.cp_hold_harmless.infrastructure.db_models  # noqa: E402,F401
import src.cp_notifications.infrastructure.db_models  # noqa: E402,F401
import src.cp_programs.infrastructure.db_models  # noqa: E402,F401
import src.cp_projects.infrastructure.db_models  # noqa: E402,F401
import src.cp_reminders.infrastructure.db_models  # noqa: E402,F401
import src.cp_review.infrastructure.db_models  # noqa: E402,F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    # Migrations run once per invocation; no pooling needed.
    connectable = create_async_engine(settings.DATABASE_URL, poolclass=pool.NullPool)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
