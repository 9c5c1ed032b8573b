# File: app/core/exceptions.py
"""Domain errors raised by services and mapped to HTTP responses in app.main."""

from fastapi import status


class AppException(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(AppException):
    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedAccessError(AppException):
    """Ownership or role check failed for an authenticated user."""
    status_code = status.HTTP_403_FORBIDDEN


class BadRequestError(AppException):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidOperationError(AppException):
    """A domain rule forbids the operation (deadline passed, wrong status, ...)."""
    status_code = status.HTTP_400_BAD_REQUEST
