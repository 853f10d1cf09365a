"""Migration runner for the flowforge schema (users, workflows, task_templates)."""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

# Migrations run from a shell without the deployed env; default to the dev profile.
os.environ.setdefault("APP_ENV", "dev")
from app.core.config import settings
from app.models import Base

# Registers the three flowforge tables on Base.metadata for autogenerate.
from app.models import TaskTemplate, User, Workflow  # noqa: F401

config = context.config
# alembic.ini ships without logging sections; fall back to app logging then.
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass

target_metadata = Base.metadata


def flowforge_database_url() -> str:
    """DATABASE_URL as the API sees it (PostgreSQL, or SQLite for local runs)."""
    return settings.DATABASE_URL


def run_migrations_offline() -> None:
    """Emit the users/workflows/task_templates DDL as SQL without connecting."""
    context.configure(
        url=flowforge_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # SQLite cannot ALTER most constraints in place, so it migrates in batch mode.
    engine = create_engine(flowforge_database_url(), poolclass=NullPool)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
