"""
Custom exception hierarchy for consistent error responses.

Usage:
    from skillmatch.exceptions import NotFoundError, ConflictError, ValidationError

    raise NotFoundError("Project", project_id)
    raise ValidationError("Personnel already assigned to overlapping project dates")
    raise ConflictError("A skill with this name already exists")

These exceptions are caught by the handler registered in main.py and
converted to consistent JSON error responses with the shape:
    {"error": "<message>", "detail": "<optional extra info>"}
"""

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base application error with a default status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            status_code=self.__class__.status_code,
            detail=message,
        )
        self.message = message
        self.extra_detail = detail


class NotFoundError(AppError):
    """Resource not found (404)."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: int | str | None = None):
        if resource_id is not None:
            message = f"{resource} not found (id={resource_id})"
        else:
            message = f"{resource} not found"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(AppError):
    """Resource conflict (409)."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str):
        super().__init__(message)


class ValidationError(AppError):
    """Rejected input: date overlap, capacity or proficiency out of range (400)."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message, detail)


class StorageError(AppError):
    """Underlying store failed or raised an unexpected constraint error (503)."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Storage unavailable", detail: str | None = None):
        super().__init__(message, detail)


class StatusRecomputeError(StorageError):
    """
    Recomputing a person's status failed after the assignment change was
    written. The surrounding transaction is rolled back, so neither the
    assignment change nor the status is kept.
    """

    def __init__(self, person_id: int, detail: str | None = None):
        super().__init__(
            f"Status recompute failed for personnel {person_id}; assignment change rolled back",
            detail,
        )
        self.person_id = person_id
