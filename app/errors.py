"""Domain errors raised by services and dependencies.

Each error carries the HTTP status and error code it is rendered with by the
exception handler in ``app.main``.
"""

from fastapi import status


class DirectoryError(Exception):
    """Base class for errors with a client-facing error payload."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(DirectoryError):
    """No valid session accompanies the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class ForbiddenError(DirectoryError):
    """Authenticated, but the policy denies the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class NotFoundError(DirectoryError):
    """Resource is absent, or hidden from the acting identity."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class BadRequestError(DirectoryError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class ConflictError(DirectoryError):
    """Claim race, already-claimed profile, or duplicate unique key."""

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
