"""Interface layer error mapping.

Domain errors propagate out of use cases unchanged; this module turns them
into HTTP responses with a ``{"detail": message}`` body.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from kopiena.domain.error import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    QuotaExceededError,
    StorageError,
    UnknownMergeTargetError,
    ValidationError,
)

# Checked in order, so subclasses must come before their bases
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (UnknownMergeTargetError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidStateError, status.HTTP_400_BAD_REQUEST),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (QuotaExceededError, status.HTTP_429_TOO_MANY_REQUESTS),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: DomainError) -> int:
    """Pick the HTTP status code for a domain error."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as JSON."""
    status_code = status_for(exc)

    if status_code >= 500:
        logfire.error(
            "Storage failure", path=request.url.path, error=str(exc)
        )
        # Store internals stay out of the response
        detail = "Internal server error"
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            error_type=type(exc).__name__,
            status_code=status_code,
            error=str(exc),
        )
        detail = str(exc)

    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_error_handlers(app: FastAPI) -> None:
    """Register domain error handlers on the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)
