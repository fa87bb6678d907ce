"""
Database module for the session credential service.

Provides SQLAlchemy models and the engine/session factory for PostgreSQL persistence.
"""

from db.engine import Base, get_engine, get_session_factory

__all__ = ["Base", "get_engine", "get_session_factory"]
