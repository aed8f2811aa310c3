"""
Domain error to HTTP response mapping.

Routers that catch a ``LaunchPathError`` and the application-level handler
both go through ``http_error`` so a given error always produces the same
status code and body.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from launchpath.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BusinessLogicError,
    ConflictError,
    InfrastructureError,
    LaunchPathError,
    NotFoundError,
    PhaseLockedError,
    ValidationError,
)

UNAVAILABLE_DETAIL = "Service temporarily unavailable, please try again"

# Most specific first
_ERROR_STATUS: list[tuple[type[LaunchPathError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ConflictError, status.HTTP_409_CONFLICT),
    (PhaseLockedError, status.HTTP_423_LOCKED),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (InfrastructureError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (BusinessLogicError, status.HTTP_400_BAD_REQUEST),
]


def status_for_error(exc: LaunchPathError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_detail(exc: LaunchPathError) -> Any:
    """Response detail for an error.

    Infrastructure failures never leak their message. Errors carrying a
    details dict (version conflicts, locked phases, wizard errors) return it
    alongside the message.
    """
    if isinstance(exc, InfrastructureError):
        return UNAVAILABLE_DETAIL
    if isinstance(exc.details, dict):
        return {"message": exc.message, **exc.details}
    return exc.message


def http_error(exc: LaunchPathError) -> HTTPException:
    return HTTPException(status_code=status_for_error(exc), detail=error_detail(exc))
