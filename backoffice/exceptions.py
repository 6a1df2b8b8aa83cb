"""
Domain exception types.

Services raise these; the HTTP layer maps each category to a status code in
``backoffice.main``. Messages are human readable and returned to the caller.
"""
from fastapi import status


class BackofficeError(Exception):
    """Base class for all domain failures."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BackofficeError):
    """A lookup key (affiliate, program, registration, payout) matched nothing."""
    status_code = status.HTTP_404_NOT_FOUND


class InvalidInputError(BackofficeError):
    """Input passed schema validation but is not acceptable (e.g. unknown program type)."""
    status_code = status.HTTP_400_BAD_REQUEST


class BusinessRuleError(BackofficeError):
    """Operation rejected by a domain rule (e.g. insufficient balance)."""
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(BackofficeError):
    """Uniqueness conflict (duplicate email, duplicate affiliate code)."""
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(BackofficeError):
    status_code = status.HTTP_401_UNAUTHORIZED


__all__ = [
    "BackofficeError",
    "NotFoundError",
    "InvalidInputError",
    "BusinessRuleError",
    "ConflictError",
    "AuthenticationError",
]
