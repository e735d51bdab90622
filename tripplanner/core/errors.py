"""
Error kinds raised by the trip planning core.

Every failure belongs to one of a closed set of kinds. Validation and storage
raise the matching ``TripPlannerError`` subclass; the public service
operations catch them at their boundary and hand them back inside an
``OperationResult`` (see ``tripplanner.core.result``).

Usage:
    from tripplanner.core.errors import ConflictError

    raise ConflictError("Participant already invited to this trip")
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds exposed to callers."""

    # Client-caused
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Collaborator failures
    DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"


USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_INPUT: "Your request contains invalid information. Please check and try again.",
    ErrorKind.INVALID_DATE_RANGE: "The trip dates are invalid. The trip must start in the future and end after it starts.",
    ErrorKind.NOT_FOUND: "The requested trip or participant does not exist.",
    ErrorKind.CONFLICT: "This email has already been invited to the trip.",
    ErrorKind.DEPENDENCY_FAILURE: "The service is temporarily unavailable. Please try again later.",
}

CLIENT_ERROR_KINDS = frozenset(
    {
        ErrorKind.INVALID_INPUT,
        ErrorKind.INVALID_DATE_RANGE,
        ErrorKind.NOT_FOUND,
        ErrorKind.CONFLICT,
    }
)


class TripPlannerError(Exception):
    """Base exception for all trip planner errors."""

    kind: ErrorKind = ErrorKind.DEPENDENCY_FAILURE

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        self.message = message
        if kind is not None:
            self.kind = kind
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES[self.kind]

    @property
    def is_client_error(self) -> bool:
        return self.kind in CLIENT_ERROR_KINDS


class InvalidInputError(TripPlannerError):
    """A field is malformed (destination too short, bad email)."""

    kind = ErrorKind.INVALID_INPUT


class InvalidDateRangeError(TripPlannerError):
    """Trip start/end dates violate the ordering rule."""

    kind = ErrorKind.INVALID_DATE_RANGE


class NotFoundError(TripPlannerError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(TripPlannerError):
    """Duplicate invite for an existing (trip, email) pair."""

    kind = ErrorKind.CONFLICT


class DependencyFailureError(TripPlannerError):
    """Storage or notification collaborator failed unexpectedly."""

    kind = ErrorKind.DEPENDENCY_FAILURE
