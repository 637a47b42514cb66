"""Application error types.

Each error carries the HTTP status it maps to and a message that is safe to
show to the client. The handlers registered in ``expense_tracker.main`` render
them as ``{"success": false, "message": ...}``.
"""

from fastapi import status


class ExpenseTrackerError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ExpenseTrackerError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(ExpenseTrackerError):
    """Bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ExpenseTrackerError):
    """Target row is absent or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreError(ExpenseTrackerError):
    """Any database failure, including lost connectivity."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StartupError(ExpenseTrackerError):
    """Initial connection or schema setup failed; logged, never sent to clients."""
