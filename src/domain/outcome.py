"""
Outcome model - The result envelope returned by every operation.

Status lifecycle:
- COMPLETED: the operation did its work (value attached, or None when the
  operation has nothing to return)
- NO_OPERATION: nothing needed doing; never carries a value
- INVALID, NOT_FOUND, UNAUTHORIZED, UNPROCESSABLE, FAILED: expected failures,
  each carrying an OperationError and never a value

SUCCESS_STATUSES is the only definition of success used anywhere in the
package. Outcomes are immutable; combinators derive new outcomes instead of
changing existing ones.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from .errors import OperationError
from .exceptions import InvalidOutcome

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class OutcomeStatus(int, Enum):
    """Use-case level classification of an operation result."""

    COMPLETED = 1
    NO_OPERATION = 2
    INVALID = 3
    NOT_FOUND = 4
    UNAUTHORIZED = 5
    UNPROCESSABLE = 6
    FAILED = 7


SUCCESS_STATUSES = frozenset({OutcomeStatus.COMPLETED, OutcomeStatus.NO_OPERATION})
FAILURE_STATUSES = frozenset(OutcomeStatus) - SUCCESS_STATUSES


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Status, optional value, optional error and optional metadata of one
    operation invocation.

    Construction rejects contradictory states: a success status with an error,
    or a failure status with a value. Status values outside OutcomeStatus are
    treated as failures so that malformed outcomes surface in match_detailed().

    Outcomes are hashable when their value is; metadata is hashed by its items.
    """

    status: OutcomeStatus
    value: T | None = None
    error: OperationError | None = None
    metadata: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if self.metadata is not None:
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.status in SUCCESS_STATUSES:
            if self.error is not None:
                status_name = getattr(self.status, "name", self.status)
                raise InvalidOutcome(f"{status_name} outcome cannot carry an error")
        elif self.value is not None:
            raise InvalidOutcome(f"Failure status {self.status!r} cannot carry a value")

    def __hash__(self) -> int:
        metadata = tuple(sorted(self.metadata.items())) if self.metadata is not None else None
        return hash((self.status, self.value, self.error, metadata))

    @property
    def succeeded(self) -> bool:
        """True for COMPLETED and NO_OPERATION."""
        return self.status in SUCCESS_STATUSES

    @property
    def failed(self) -> bool:
        return not self.succeeded

    # Factories

    @classmethod
    def success(cls, value: T | None = None) -> "Outcome[T]":
        """
        Create a COMPLETED outcome.

        Called without a value for operations with nothing to return; the
        value is then None.
        """
        return cls(OutcomeStatus.COMPLETED, value)

    @classmethod
    def no_operation(cls, value: Any = None) -> "Outcome[T]":
        """
        Create a NO_OPERATION outcome.

        Any value passed is discarded: a no-op signals that nothing happened
        and never forwards a payload.
        """
        return cls(OutcomeStatus.NO_OPERATION)

    @classmethod
    def validation_failure(cls, *messages: str) -> "Outcome[T]":
        return cls(OutcomeStatus.INVALID, error=OperationError.validation(*messages))

    @classmethod
    def not_found_failure(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeStatus.NOT_FOUND, error=OperationError.unexpected(message))

    @classmethod
    def authorization_failure(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeStatus.UNAUTHORIZED, error=OperationError.authorization(message))

    @classmethod
    def unprocessable_failure(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeStatus.UNPROCESSABLE, error=OperationError.unexpected(message))

    @classmethod
    def failure(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeStatus.FAILED, error=OperationError.unexpected(message))

    def with_metadata(self, metadata: Mapping[str, str]) -> "Outcome[T]":
        """Return a copy whose metadata is merged with ``metadata``."""
        merged = dict(self.metadata or {})
        merged.update(metadata)
        return replace(self, metadata=merged)

    # Fluent access to the combinators

    def map(self, fn: Callable[[T], U]) -> "Outcome[U]":
        from .combinators import map_value

        return map_value(self, fn)

    def bind(self, fn: "Callable[[T], Outcome[U]]") -> "Outcome[U]":
        from .combinators import bind

        return bind(self, fn)

    async def bind_async(self, fn: "Callable[[T], Awaitable[Outcome[U]]]") -> "Outcome[U]":
        from .combinators import bind_async

        return await bind_async(self, fn)

    def match(
        self,
        on_success: Callable[[T | None], R],
        on_failure: Callable[[OutcomeStatus, OperationError | None], R],
    ) -> R:
        from .combinators import match

        return match(self, on_success, on_failure)

    def match_detailed(self, **handlers: Callable[..., R]) -> R:
        """Keyword form of combinators.match_detailed()."""
        from .combinators import match_detailed

        return match_detailed(self, **handlers)

    def on_success(self, action: Callable[[T | None], Any]) -> "Outcome[T]":
        from .combinators import on_success

        return on_success(self, action)

    def on_failure(
        self, action: Callable[[OutcomeStatus, OperationError | None], Any]
    ) -> "Outcome[T]":
        from .combinators import on_failure

        return on_failure(self, action)


success = Outcome.success
no_operation = Outcome.no_operation
validation_failure = Outcome.validation_failure
not_found_failure = Outcome.not_found_failure
authorization_failure = Outcome.authorization_failure
unprocessable_failure = Outcome.unprocessable_failure
failure = Outcome.failure
