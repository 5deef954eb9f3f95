"""
Error taxonomy shared by the services and the HTTP layer.

Services raise subclasses of :class:`CatalogError`; each carries the
HTTP status code and a stable, user-presentable message.  The handlers
installed by :func:`register_exception_handlers` turn them into JSON
responses of the form ``{"detail": "..."}`` so endpoints never build
``HTTPException`` objects for domain failures themselves.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for all domain errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(CatalogError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input"


class InvalidYearError(ValidationError):
    """Song year outside of the accepted range."""

    message = "Invalid year"


class ConflictError(CatalogError):
    status_code = status.HTTP_409_CONFLICT
    message = "User with this email already exists"


class InvalidCredentialsError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class UnauthenticatedError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class ForbiddenError(CatalogError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "You do not have permission to access this song"


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Song not found"


class InternalError(CatalogError):
    """A store-level invariant was violated after all checks passed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"


class DeleteFailedError(InternalError):
    message = "Failed to delete song"


class DuplicateIdError(InternalError):
    message = "Record id already exists"


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Translate a :class:`CatalogError` into a JSON response.

    Internal errors are logged with their traceback and reported to the
    caller with the generic class message only.
    """
    if isinstance(exc, InternalError):
        logger.error(
            "Internal error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        detail = type(exc).message
    else:
        detail = exc.message
    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as plain validation errors."""
    errors = exc.errors()
    logger.debug("Rejected request body on %s: %s", request.url.path, errors)
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = ValidationError.message
    return JSONResponse(status_code=ValidationError.status_code, content={"detail": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain and request validation handlers on ``app``."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
