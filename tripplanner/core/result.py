from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from tripplanner.core.errors import ErrorKind, TripPlannerError
from tripplanner.core.logger import logger

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a service operation: either a value or a tagged error."""

    value: Optional[T] = None
    error: Optional[TripPlannerError] = None

    @classmethod
    def success(cls, value: T) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: TripPlannerError) -> "OperationResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, re-raising the error for callers that prefer exceptions."""
        if self.error is not None:
            raise self.error
        return self.value


def failed(operation: str, error: TripPlannerError) -> OperationResult:
    """Log a failed operation at a level matching who caused it and wrap it in a result."""
    if error.is_client_error:
        logger.warning(f"{operation} rejected ({error.kind.value}): {error.message}")
    else:
        logger.error(f"{operation} failed ({error.kind.value}): {error.message}")
    return OperationResult.failure(error)
