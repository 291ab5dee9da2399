"""Portal error taxonomy and exception handlers with request_id in responses.

Components raise a PortalError subclass; the HTTP boundary maps the
error kind to a status code through STATUS_BY_KIND.
"""

from enum import Enum

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.portal.core.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Closed set of failure classes surfaced by portal components."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class PortalError(Exception):
    """Base class for classified portal failures."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class UnauthorizedError(PortalError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Not authenticated"


class ForbiddenError(PortalError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Access denied"


class NotFoundError(PortalError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class PortalValidationError(PortalError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid request"


class ConflictError(PortalError):
    kind = ErrorKind.CONFLICT
    default_message = "Conflict"


class InternalError(PortalError):
    kind = ErrorKind.INTERNAL


class PersistenceError(InternalError):
    """A record store write failed."""

    default_message = "Failed to persist record"


def _error_response(status_code: int, detail: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
        if exc.kind is ErrorKind.INTERNAL:
            logger.error(
                "Portal request failed",
                path=request.url.path,
                error_kind=exc.kind.value,
                error=exc.message,
            )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        return _error_response(STATUS_BY_KIND[ErrorKind.VALIDATION], errors)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
        )
