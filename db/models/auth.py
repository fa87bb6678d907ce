"""
Auth models for credential and session persistence.

AuthAccount: Login credentials and the live refresh token
AuthSession: Issued session tokens with their expiry
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from db.engine import Base


class AuthAccount(Base):
    """
    Account credentials.

    Holds exactly one live refresh token, overwritten on every login or refresh.
    """
    __tablename__ = "login"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    salt = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    refresh_token = Column(String(255), unique=True, nullable=True)

    # Relationship
    sessions = relationship("AuthSession", back_populates="account", passive_deletes=True)

    def __repr__(self):
        return f"<AuthAccount(id={self.id}, username={self.username})>"


class AuthSession(Base):
    """
    Issued session token. Valid while now <= expire_at.
    """
    __tablename__ = "session"

    session_token = Column(String(255), primary_key=True)
    account_id = Column(Integer, ForeignKey("login.id", ondelete="CASCADE"), nullable=False, index=True)
    expire_at = Column(Integer, nullable=False)  # Unix timestamp

    account = relationship("AuthAccount", back_populates="sessions")

    def __repr__(self):
        return f"<AuthSession(token={self.session_token[:8]}..., account_id={self.account_id})>"
