"""
Domain errors and global exception handlers — prevents stack-trace leakage to clients.

Services raise :class:`TaskboardError` subclasses; the handlers below turn
them into ``{"error": ..., "success": false}`` JSON bodies.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


# ── Domain errors ───────────────────────────────────────────────────
class TaskboardError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidCredentials(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid PIN"


class AccountInactive(TaskboardError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Account is inactive"


class Unauthenticated(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not logged in"


class Unauthorized(TaskboardError):
    # Wrong role answers 401 as well, never 403.
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class DuplicatePin(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "PIN already in use"


class InternalError(TaskboardError):
    pass


# ── Handlers ────────────────────────────────────────────────────────
def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "success": False},
    )


async def _taskboard_error_handler(_request: Request, exc: TaskboardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Internal error: %s", exc.message)
    return _error_response(exc.status_code, exc.message)


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Rejected request body: %s", exc.errors())
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return _error_response(InternalError.status_code, InternalError.default_message)


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _error_response(InternalError.status_code, InternalError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(TaskboardError, _taskboard_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
