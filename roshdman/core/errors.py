"""Error taxonomy and FastAPI handlers.

Every error body is ``{"message": ...}``; there is no machine-readable code
field and 5xx responses never carry the underlying cause.
"""

import logging
from typing import Optional
from uuid import uuid4

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

from roshdman.core.logging import get_request_id

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code:
            self.status_code = status_code


class ValidationError(AppError, ValueError):
    """Required field missing or unusable."""
    status_code = 400


class ConflictError(AppError):
    """Unique value already taken (duplicate email)."""
    status_code = 400


class AuthError(AppError):
    """Credentials did not match."""
    status_code = 401


class AuthorizationError(AppError):
    """Caller is known but not allowed to act on the record."""
    status_code = 403


class NotFoundError(AppError, LookupError):
    status_code = 404


class StoreError(AppError):
    """Backing file could not be written."""
    status_code = 500


def _extract_request_id(request: Request) -> str:
    return (
        getattr(request.state, "request_id", None)
        or get_request_id()
        or str(uuid4())
    )


def _error_response(status_code: int, message: str, rid: str) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content={"message": message})
    response.headers["x-request-id"] = rid
    return response


async def app_error_handler(request: Request, exc: AppError):
    rid = _extract_request_id(request)
    logger = logging.getLogger("roshdman")
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        "app.error",
        extra={
            "request_id": rid,
            "error_message": exc.message,
            "status": exc.status_code,
            "method": request.method,
            "path": request.url.path,
        },
    )
    message = INTERNAL_ERROR_MESSAGE if exc.status_code >= 500 else exc.message
    return _error_response(exc.status_code, message, rid)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed or absent JSON bodies count as missing fields."""
    rid = _extract_request_id(request)
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    logger = logging.getLogger("roshdman")
    logger.warning(
        "request.invalid",
        extra={
            "request_id": rid,
            "error_message": ", ".join(fields) or "body",
            "status": 400,
            "method": request.method,
            "path": request.url.path,
        },
    )
    return _error_response(400, "Required fields are missing or invalid", rid)


async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = _extract_request_id(request)
    logger = logging.getLogger("roshdman")
    logger.error(
        "unhandled.exception",
        exc_info=exc,
        extra={"request_id": rid, "status": 500, "method": request.method, "path": request.url.path},
    )
    return _error_response(500, INTERNAL_ERROR_MESSAGE, rid)
