"""Global exception handlers that map domain exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.errors import (
    CRYPTO_UNAVAILABLE,
    DUPLICATE_RESOURCE,
    INTERNAL_ERROR,
    NOT_FOUND,
    STORAGE_ERROR,
    UNAUTHORIZED,
    VALIDATION_ERROR,
    CryptoUnavailableError,
    DomainError,
    DomainValidationError,
    DuplicateResourceError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
)
from app.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

# Client errors and auth rejections are 400. A lookup miss stays 500, as sibling
# services already expect.
ERROR_STATUS: dict[type[DomainError], tuple[int, str]] = {
    DomainValidationError: (status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR),
    DuplicateResourceError: (status.HTTP_400_BAD_REQUEST, DUPLICATE_RESOURCE),
    UnauthorizedError: (status.HTTP_400_BAD_REQUEST, UNAUTHORIZED),
    NotFoundError: (status.HTTP_500_INTERNAL_SERVER_ERROR, NOT_FOUND),
    StorageError: (status.HTTP_500_INTERNAL_SERVER_ERROR, STORAGE_ERROR),
    CryptoUnavailableError: (status.HTTP_500_INTERNAL_SERVER_ERROR, CRYPTO_UNAVAILABLE),
}


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    """Return a standardized error response with message and machine-readable code."""
    body = ErrorResponse(message=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code, code = ERROR_STATUS.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
    )
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        cause = exc.__cause__ if exc.__cause__ is not None else exc
        logger.error(
            '"%s %s" %d: %s', request.method, request.url.path, status_code, cause
        )
    return _error_response(status_code, str(exc), code)


def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        '"%s %s" %d: %s',
        request.method,
        request.url.path,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        exc,
        exc_info=exc,
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", INTERNAL_ERROR
    )


def register_exception_handlers(app):
    """Register domain exception handlers on the FastAPI app."""
    for exc_class in ERROR_STATUS:
        app.add_exception_handler(exc_class, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
