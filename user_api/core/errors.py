# File: user_api/core/errors.py

"""
Error taxonomy for the API.

Services raise these; the application factory registers handlers that turn
them into the ``{"success": false, ...}`` response envelope.
"""

from typing import List, Optional

from fastapi import status


class UserApiError(Exception):
    """Base class for every failure the API reports to a caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(UserApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"

    def __init__(self, errors: List[str], message: Optional[str] = None) -> None:
        super().__init__(message)
        self.errors = list(errors)


class DuplicateEmail(UserApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User with this email already exists"


class InvalidParameter(UserApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid query parameter"


class InvalidIdentifier(UserApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid user ID format"


class NotFound(UserApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class StoreFailure(UserApiError):
    """The store could not complete an operation (connectivity, timeout, ...)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[str] = None) -> None:
        super().__init__(message)
        self.error = error
