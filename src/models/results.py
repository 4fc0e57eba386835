"""
Explicit outcome type for remote calls.

Every call to the embedding service or the vector store returns a Result
instead of raising. A successful search with no matches is
``Result.success([])``; a search that could not reach the store is
``Result.failure(ErrorKind.TRANSPORT, ...)``. Callers can tell the two apart.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class ErrorKind(str, Enum):
    """Reason a remote call produced no value."""

    # Network, authentication, rate limit or any provider-side error
    TRANSPORT = "transport"
    # The provider answered, but the answer is unusable (e.g. empty vector)
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success value or typed failure.

    Attributes:
        value: The payload on success, None on failure
        error: Failure kind, None on success
        message: Human-readable failure description
    """

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "Result[T]":
        return cls(error=error, message=message)
