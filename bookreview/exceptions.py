"""
Application Errors

Operational errors raised by the service layer.

Each error carries the HTTP status code it maps to. Services raise these
instead of FastAPI's HTTPException so they stay usable outside a request
(scripts, tests). A single set of exception handlers in main.py turns them
into the error envelope:

    {"status": "error", "message": "..."}

Taxonomy:
- BadRequestError (400): input that passed schema validation but is still wrong
- UnauthorizedError (401): missing/invalid token, bad credentials
- ForbiddenError (403): authenticated but not allowed
- NotFoundError (404): referenced entity does not exist
- ConflictError (409): uniqueness or delete-safety violation
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors with a known HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
