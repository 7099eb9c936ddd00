"""Error kinds and the exception handlers that turn them into envelopes."""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from core.responses import api_response

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_field = "error"

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field or self.default_field
        super().__init__(message)

    @property
    def errors(self) -> Dict[str, str]:
        return {self.field: self.message}


class ValidationError(AppError):
    """Malformed input: bad email, bad unit, bad body."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_field = "binding"


class AuthError(AppError):
    """Missing, invalid, expired or reused token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_field = "token"


class NotFoundError(AppError):
    """Unknown inventory item, recipe or id."""

    status_code = status.HTTP_404_NOT_FOUND
    default_field = "db"


class PersistenceError(AppError):
    """Store-layer failure."""

    default_field = "db"


class DeliveryError(AppError):
    """Email dispatch failure."""

    default_field = "send_email"


def _field_from_loc(loc) -> str:
    # Drop the leading "body"/"query" marker pydantic puts on request errors
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts)


def setup_exception_handlers(app: FastAPI):
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        return api_response(
            request,
            status_code=exc.status_code,
            message=exc.message,
            errors=exc.errors,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = {}
        for error in exc.errors():
            errors[_field_from_loc(error["loc"]) or "binding"] = error["msg"]

        logger.warning(f"Validation Error: {errors}")
        return api_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Invalid input",
            errors=errors,
        )

    @app.exception_handler(SQLAlchemyError)
    async def persistence_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception(f"Database error: {exc}")
        error = PersistenceError("Database operation failed")
        return api_response(
            request,
            status_code=error.status_code,
            message=error.message,
            errors=error.errors,
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unexpected error: {str(exc)}")
        return api_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            errors={"server": type(exc).__name__},
        )
