"""
SQLAlchemy engine and session factory for PostgreSQL.

The engine is created on first use so that processes running with the
memory or SQLite store never need a PostgreSQL driver.

Usage:
    from db.engine import get_session_factory

    SessionLocal = get_session_factory()
    with SessionLocal() as db:
        account = db.query(AuthAccount).first()
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config import Config

# Base class for all models
Base = declarative_base()


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Get the SQLAlchemy engine, creating it with connection pooling."""
    return create_engine(
        Config.DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before use
        pool_size=Config.DB_POOL_SIZE,
        max_overflow=20,
        echo=Config.DB_ECHO,
    )


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    return sessionmaker(
        autoflush=False,
        bind=get_engine(),
    )

