"""
Service-level errors.

Each error carries the HTTP status the routing layer should answer with,
the same way ``AuthError`` did for authentication failures.
"""

from typing import Dict, List, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    error_type = "service_error"

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(ServiceError):
    """Client-supplied data violates field rules."""

    error_type = "validation_error"

    def __init__(
        self,
        errors: Dict[str, List[str]],
        message: str = "One or more validation errors occurred.",
    ):
        self.errors = errors
        super().__init__(message, status_code=400)


class NotFoundError(ServiceError):
    """Lookup key is absent from the store."""

    error_type = "not_found"

    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class UnauthenticatedError(ServiceError):
    """Credentials or token could not be verified."""

    error_type = "unauthenticated"

    def __init__(self, message: str = "User or password wrong", status_code: int = 400):
        super().__init__(message, status_code=status_code)


class PersistenceError(ServiceError):
    """Store-level failure (constraint violation, connectivity)."""

    error_type = "persistence_error"

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message, status_code=400)
