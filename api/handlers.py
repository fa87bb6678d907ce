"""Maps exceptions to JSON error responses at the HTTP boundary."""

import logging

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from auth.exceptions import AuthException, StorageFailure

logger = logging.getLogger(__name__)


def create_error_response(status_code: int, message: str, data: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": data},
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return create_error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies, e.g. a login without ``pw``."""
    fields = [
        {"field": error["loc"][-1] if error.get("loc") else "unknown", "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    return create_error_response(
        status_code=422,
        message="Validation error",
        data={"validation_errors": fields},
    )


async def auth_exception_handler(request: Request, exc: AuthException) -> JSONResponse:
    """Storage details never reach the client."""
    if isinstance(exc, StorageFailure):
        logger.error(
            "Storage failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return create_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
    return create_error_response(exc.status_code, exc.message)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return create_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
