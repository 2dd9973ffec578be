"""
Outcome combinators - Transform, chain and dispatch on outcomes.

Short-circuit rule shared by map_value(), bind() and bind_async():
an outcome that failed OR carries no value has nothing to transform. The
supplied function is not called and the result keeps the original status,
error and metadata with an absent value. This holds even for a COMPLETED
outcome without a value.

The combinators never raise on their own. The one exception is
match_detailed(), which rejects a status outside OutcomeStatus because that
can only come from a defect. Exceptions raised by the supplied functions
propagate unchanged.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from .errors import OperationError
from .exceptions import UnknownOutcomeStatus
from .outcome import Outcome, OutcomeStatus

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


def _has_nothing_to_transform(outcome: Outcome[Any]) -> bool:
    return outcome.failed or outcome.value is None


def _empty_like(outcome: Outcome[Any]) -> Outcome[Any]:
    return Outcome(outcome.status, None, outcome.error, outcome.metadata)


def map_value(outcome: Outcome[T], fn: Callable[[T], U]) -> Outcome[U]:
    """
    Transform the value of a successful outcome.

    Status, error and metadata are carried over unchanged.

    Args:
        outcome: Source outcome
        fn: Transformation applied to the value

    Returns:
        New outcome holding fn(value), or an empty outcome with the
        original status when there is nothing to transform
    """
    if _has_nothing_to_transform(outcome):
        return _empty_like(outcome)
    return Outcome(outcome.status, fn(outcome.value), outcome.error, outcome.metadata)


def bind(outcome: Outcome[T], fn: Callable[[T], Outcome[U]]) -> Outcome[U]:
    """
    Chain a step that itself returns an outcome.

    On the success path the outcome returned by fn replaces the original one
    entirely, metadata included.
    """
    if _has_nothing_to_transform(outcome):
        return _empty_like(outcome)
    return fn(outcome.value)


async def bind_async(
    outcome: Outcome[T], fn: Callable[[T], Awaitable[Outcome[U]]]
) -> Outcome[U]:
    """Coroutine variant of bind(); only fn may suspend."""
    if _has_nothing_to_transform(outcome):
        return _empty_like(outcome)
    return await fn(outcome.value)


def match(
    outcome: Outcome[T],
    on_success: Callable[[T | None], R],
    on_failure: Callable[[OutcomeStatus, OperationError | None], R],
) -> R:
    """Call exactly one handler depending on outcome.succeeded."""
    if outcome.succeeded:
        return on_success(outcome.value)
    return on_failure(outcome.status, outcome.error)


def match_detailed(
    outcome: Outcome[T],
    on_completed: Callable[[T | None], R],
    on_no_operation: Callable[[], R],
    on_invalid: Callable[[OperationError | None], R],
    on_not_found: Callable[[OperationError | None], R],
    on_unauthorized: Callable[[OperationError | None], R],
    on_unprocessable: Callable[[OperationError | None], R],
    on_failed: Callable[[OperationError | None], R],
) -> R:
    """
    Exhaustive dispatch with one handler per status.

    on_completed receives the value, on_no_operation receives nothing and
    every failure handler receives the error.

    Raises:
        UnknownOutcomeStatus: If the status is not an OutcomeStatus member
    """
    status = outcome.status
    if status == OutcomeStatus.COMPLETED:
        return on_completed(outcome.value)
    if status == OutcomeStatus.NO_OPERATION:
        return on_no_operation()

    failure_handlers = {
        OutcomeStatus.INVALID: on_invalid,
        OutcomeStatus.NOT_FOUND: on_not_found,
        OutcomeStatus.UNAUTHORIZED: on_unauthorized,
        OutcomeStatus.UNPROCESSABLE: on_unprocessable,
        OutcomeStatus.FAILED: on_failed,
    }
    handler = failure_handlers.get(status)
    if handler is None:
        raise UnknownOutcomeStatus(status)
    return handler(outcome.error)


def on_success(outcome: Outcome[T], action: Callable[[T | None], Any]) -> Outcome[T]:
    """Run action(value) if the outcome succeeded; return the same outcome."""
    if outcome.succeeded:
        action(outcome.value)
    return outcome


def on_failure(
    outcome: Outcome[T], action: Callable[[OutcomeStatus, OperationError | None], Any]
) -> Outcome[T]:
    """Run action(status, error) if the outcome failed; return the same outcome."""
    if outcome.failed:
        action(outcome.status, outcome.error)
    return outcome
