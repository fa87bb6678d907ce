"""
FastAPI application for the session credential service.
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.auth import router as auth_router
from api.handlers import (
    auth_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from auth.config import AuthConfig
from auth.dependencies import get_auth_service, get_credential_store
from auth.exceptions import AuthException
from auth.schemas import ApiResponse
from config import Config

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Validate configuration on startup
Config.validate()


async def purge_expired_sessions_periodically(interval_seconds: int) -> None:
    """Delete expired sessions of every account on a fixed interval."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await get_auth_service(get_credential_store()).purge_expired_sessions()
        except AuthException as e:
            logger.warning(f"Expired session purge failed: {e.message}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown."""
    logger.info("Starting up application...")
    purge_task = None
    if AuthConfig.SESSION_PURGE_INTERVAL_SECONDS > 0:
        purge_task = asyncio.create_task(
            purge_expired_sessions_periodically(AuthConfig.SESSION_PURGE_INTERVAL_SECONDS)
        )

    yield

    logger.info("Shutting down application...")
    if purge_task is not None:
        purge_task.cancel()
        with suppress(asyncio.CancelledError):
            await purge_task


app = FastAPI(
    title="Session Credential API",
    description="Issues and rotates session and refresh tokens",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Errors become HTTP responses here and nowhere else
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(AuthException, auth_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(auth_router, prefix="/auth", tags=["auth"])


@app.get("/")
def health_check():
    """Root health check endpoint."""
    return ApiResponse(
        success=True,
        message="System operational",
        data={"status": "ok"}
    )
