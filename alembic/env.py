"""Alembic environment for the fieldplan schema."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from fieldplan.config import get_settings
from fieldplan.db.base import Base
from fieldplan.db import models  # noqa: F401 - registers users, schedules, schedule_days

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    """
    Sync database URL for migrations.

    `alembic -x url=...` wins, then `sqlalchemy.url` from alembic.ini, then
    the application settings (psycopg2 form of the runtime URL).
    """
    url = context.get_x_argument(as_dictionary=True).get("url")
    if url:
        return url
    return config.get_main_option("sqlalchemy.url") or get_settings().database_url_sync


def _configure(**kwargs) -> None:
    url = get_url()
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER constraints in place
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL to the script output without connecting."""
    _configure(url=get_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations over a short-lived sync connection."""
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        _configure(connection=connection)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
