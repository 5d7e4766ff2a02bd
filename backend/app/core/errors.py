"""Domain errors raised by services; main.py renders them as `{"detail": message}` responses."""

from fastapi import status


class AppError(Exception):
    """Base class for user-facing failures; ``message`` is safe to return to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class BusinessRuleViolation(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT


class StorageError(AppError):
    """Storage or rendering failure; the message stays generic, details go to the log."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
