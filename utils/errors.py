"""
Application error taxonomy.

Every service and repository function raises one of these; the exception
handler in ``api.middleware`` is the only place they are turned into
response envelopes.  ``message`` is what the client sees, ``detail`` is
for the server log only.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base class carrying a business ``code`` and a client-facing message."""

    code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(detail or self.message)


class DatabaseError(AppError):
    code = 500
    default_message = "Database operation failed"


class UniqueViolationError(DatabaseError):
    """A unique constraint rejected an insert or update."""


class NotFoundError(AppError):
    code = 404
    default_message = "Resource not found"


class UnauthorizedError(AppError):
    code = 401
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    code = 403
    default_message = "Forbidden"


class ValidationError(AppError):
    code = 400
    default_message = "Validation failed"

    def __init__(self, message: str):
        super().__init__(message)


class InternalError(AppError):
    code = 500
    default_message = "Internal server error"


class JwtError(AppError):
    code = 401
    default_message = "JWT error"

    def __init__(self, message: str):
        super().__init__(f"JWT error: {message}")


class InvalidTokenError(JwtError):
    """Token signature, structure or expiry did not validate."""
