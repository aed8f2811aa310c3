"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class LaunchPathError(Exception):
    """Base exception for launchpath."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(LaunchPathError):
    """Resource not found."""

    pass


class ValidationError(LaunchPathError):
    """Validation error."""

    pass


class ConflictError(LaunchPathError):
    """Write rejected because the row changed since it was read."""

    def __init__(self, message: str, expected_version: int, actual_version: Optional[int] = None):
        super().__init__(
            message,
            details={"expected_version": expected_version, "actual_version": actual_version},
        )
        self.expected_version = expected_version
        self.actual_version = actual_version


class AuthenticationError(LaunchPathError):
    """Authentication failed."""

    pass


class AuthorizationError(LaunchPathError):
    """Authorization failed."""

    pass


class ForbiddenError(AuthorizationError):
    """Forbidden operation (authorization denied)."""

    pass


class InfrastructureError(LaunchPathError):
    """Infrastructure-related error (DB, external services, etc.)."""

    pass


class BusinessLogicError(LaunchPathError):
    """Business logic constraint violation."""

    pass


class PhaseLockedError(BusinessLogicError):
    """The phase is not unlocked yet."""

    def __init__(self, phase_number: int, prior_completion: int):
        super().__init__(
            f"Phase {phase_number} is locked until Phase {phase_number - 1} is 100% complete",
            details={"phase": phase_number, "prior_completion": prior_completion},
        )
        self.phase_number = phase_number
        self.prior_completion = prior_completion
