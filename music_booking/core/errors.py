"""
Typed service errors.

Services raise these instead of HTTP exceptions; the handlers registered in
``main.py`` render them into the response envelope with ``isSuccess=false``.
"""

from fastapi import status


class ServiceError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or missing input, or a violated business rule."""


class ConflictError(ServiceError):
    """Duplicate unique key, e.g. an email that is already registered."""


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""


class AuthError(ServiceError):
    """Bad credentials or a missing/invalid bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
