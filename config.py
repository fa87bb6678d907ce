"""
Configuration management for the application.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).parent / ".env"
if env_path.exists():
    load_dotenv(env_path, override=True)
else:
    # Try loading from current directory as fallback
    load_dotenv(override=True)


class Config:
    """Application configuration."""

    # Database configuration (used when AUTH_STORE=postgres)
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL", "postgresql+psycopg2://postgres@localhost:5432/auth"
    )
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_ECHO: bool = os.getenv("DB_ECHO", "false").strip().lower() in {"1", "true", "yes", "on"}

    # API configuration
    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        if not cls.DATABASE_URL:
            raise ValueError(
                "DATABASE_URL not set. Please set it in .env file or environment variable."
            )
