"""
Alembic environment for the credential database (login and session tables).
"""

from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

from config import Config
from db.engine import Base
from db.models import AuthAccount, AuthSession  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit migration SQL for Config.DATABASE_URL without connecting."""
    context.configure(
        url=Config.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations against Config.DATABASE_URL."""
    # URL is not routed through alembic.ini, whose parser treats % as interpolation
    connectable = create_engine(Config.DATABASE_URL, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
