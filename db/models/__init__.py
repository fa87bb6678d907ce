"""
SQLAlchemy models for the credential database.

All models inherit from db.engine.Base for Alembic migrations.
"""

from db.models.auth import AuthAccount, AuthSession

__all__ = [
    "AuthAccount",
    "AuthSession",
]
