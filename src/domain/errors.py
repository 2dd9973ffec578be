"""
Error model - Cause classification for failed operations.

An OperationError pairs an ErrorKind with the human-readable messages that
explain the failure. Errors are created through the named constructors so the
kind always agrees with the context that produced it.
"""

from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidOutcome


class ErrorKind(int, Enum):
    """
    Why an operation failed, at the cause level.

    Coarser than OutcomeStatus: NOT_FOUND, UNPROCESSABLE and FAILED outcomes
    all report UNEXPECTED.
    """

    UNSPECIFIED = 1
    VALIDATION = 2
    AUTHORIZATION = 3
    UNEXPECTED = 4


@dataclass(frozen=True)
class OperationError:
    """Immutable error details carried by a failed outcome."""

    kind: ErrorKind
    messages: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.messages:
            raise InvalidOutcome(f"{self.kind.name} error requires at least one message")
        object.__setattr__(self, "messages", tuple(self.messages))

    @classmethod
    def validation(cls, *messages: str) -> "OperationError":
        """Create a validation error from one or more messages."""
        return cls(ErrorKind.VALIDATION, tuple(messages))

    @classmethod
    def authorization(cls, message: str) -> "OperationError":
        """Create an authorization error."""
        return cls(ErrorKind.AUTHORIZATION, (message,))

    @classmethod
    def unexpected(cls, message: str) -> "OperationError":
        """Create an unexpected error."""
        return cls(ErrorKind.UNEXPECTED, (message,))
