"""
Unit tests for outcome combinators.

Tests verify:
- map_value/bind/bind_async short-circuit on failed or value-less outcomes
  without calling the supplied function
- Status, error and metadata survive the short-circuit
- match/match_detailed call exactly one handler
- match_detailed rejects unknown statuses
- on_success/on_failure pass the identical outcome through
"""

import asyncio
from unittest.mock import Mock

import pytest

from src.domain.combinators import (
    bind,
    bind_async,
    map_value,
    match,
    match_detailed,
    on_failure,
    on_success,
)
from src.domain.errors import ErrorKind, OperationError
from src.domain.exceptions import UnknownOutcomeStatus
from src.domain.outcome import (
    FAILURE_STATUSES,
    Outcome,
    OutcomeStatus,
    failure,
    no_operation,
    not_found_failure,
    success,
    validation_failure,
)

FAILURE_OUTCOMES = [
    validation_failure("Error"),
    not_found_failure("Not found"),
    Outcome.authorization_failure("Denied"),
    Outcome.unprocessable_failure("Cannot process"),
    failure("Boom"),
]

NOTHING_TO_TRANSFORM = [
    *FAILURE_OUTCOMES,
    no_operation(5),
    success(),
    Outcome(OutcomeStatus.COMPLETED, None, metadata={"k": "v"}),
    Outcome(OutcomeStatus.INVALID, error=OperationError.validation("x"), metadata={"k": "v"}),
]


class TestMapValue:
    """Tests for map_value()."""

    def test_map_transforms_value(self) -> None:
        """success(42) mapped with str yields COMPLETED '42'."""
        mapped = map_value(success(42), str)

        assert mapped.succeeded
        assert mapped.status == OutcomeStatus.COMPLETED
        assert mapped.value == "42"

    def test_map_calls_function_once_with_value(self) -> None:
        """The mapper is called exactly once with the original value."""
        mapper = Mock(return_value="mapped")

        map_value(success(10), mapper)

        mapper.assert_called_once_with(10)

    def test_map_keeps_metadata(self) -> None:
        """Metadata is carried over on the success path."""
        mapped = map_value(success(1).with_metadata({"trace": "abc"}), lambda x: x + 1)

        assert mapped.value == 2
        assert mapped.metadata == {"trace": "abc"}

    def test_map_on_failure_returns_failure_without_mapping(self) -> None:
        """validation_failure('Error') mapped stays INVALID with no value."""
        mapper = Mock()

        mapped = map_value(validation_failure("Error"), mapper)

        assert not mapped.succeeded
        assert mapped.status == OutcomeStatus.INVALID
        assert mapped.value is None
        mapper.assert_not_called()

    @pytest.mark.parametrize("outcome", NOTHING_TO_TRANSFORM)
    def test_map_short_circuit_preserves_fields(self, outcome: Outcome[int]) -> None:
        """Short-circuit keeps status, error and metadata and never calls fn."""
        mapper = Mock()

        mapped = map_value(outcome, mapper)

        mapper.assert_not_called()
        assert mapped.status == outcome.status
        assert mapped.error == outcome.error
        assert mapped.metadata == outcome.metadata
        assert mapped.value is None

    def test_map_on_completed_without_value_does_not_call_mapper(self) -> None:
        """A COMPLETED outcome with no value has nothing to transform."""
        mapper = Mock()

        mapped = map_value(Outcome(OutcomeStatus.COMPLETED, None), mapper)

        mapper.assert_not_called()
        assert mapped.status == OutcomeStatus.COMPLETED
        assert mapped.value is None

    def test_map_returns_new_outcome(self) -> None:
        """Even a short-circuited map produces a new instance."""
        original = failure("Boom")

        assert map_value(original, str) is not original

    def test_map_propagates_mapper_exception(self) -> None:
        """Exceptions from the mapper are not swallowed."""

        def explode(value: int) -> int:
            raise RuntimeError("mapper defect")

        with pytest.raises(RuntimeError, match="mapper defect"):
            map_value(success(1), explode)


class TestBind:
    """Tests for bind()."""

    def test_bind_chains_operation(self) -> None:
        """success(10) bound to a formatting step yields 'Value: 10'."""
        bound = bind(success(10), lambda x: success(f"Value: {x}"))

        assert bound.succeeded
        assert bound.value == "Value: 10"

    def test_bind_on_failure_does_not_execute_binder(self) -> None:
        """not_found_failure bound stays NOT_FOUND and never calls the binder."""
        binder = Mock(return_value=success("Should not reach"))

        bound = bind(not_found_failure("Not found"), binder)

        binder.assert_not_called()
        assert not bound.succeeded
        assert bound.status == OutcomeStatus.NOT_FOUND
        assert bound.error == OperationError.unexpected("Not found")

    @pytest.mark.parametrize("outcome", NOTHING_TO_TRANSFORM)
    def test_bind_short_circuit_preserves_fields(self, outcome: Outcome[int]) -> None:
        """Short-circuit keeps status, error and metadata and never calls fn."""
        binder = Mock()

        bound = bind(outcome, binder)

        binder.assert_not_called()
        assert bound.status == outcome.status
        assert bound.error == outcome.error
        assert bound.metadata == outcome.metadata
        assert bound.value is None

    def test_bind_downstream_replaces_upstream(self) -> None:
        """On success the binder's outcome is returned as-is, metadata included."""
        downstream = validation_failure("Second step rejected")

        bound = bind(success(1).with_metadata({"step": "first"}), lambda _: downstream)

        assert bound is downstream
        assert bound.metadata is None

    def test_bind_calls_binder_once_with_value(self) -> None:
        """The binder is called exactly once with the original value."""
        binder = Mock(return_value=success("ok"))

        bind(success("input"), binder)

        binder.assert_called_once_with("input")


class TestBindAsync:
    """Tests for bind_async()."""

    def test_bind_async_chains_coroutine(self) -> None:
        """bind_async awaits the binder and returns its outcome."""

        async def lookup(value: int) -> Outcome[str]:
            await asyncio.sleep(0)
            return success(f"Value: {value}")

        bound = asyncio.run(bind_async(success(10), lookup))

        assert bound.status == OutcomeStatus.COMPLETED
        assert bound.value == "Value: 10"

    def test_bind_async_on_failure_does_not_execute_binder(self) -> None:
        """A failed outcome short-circuits without creating the binder coroutine."""
        calls: list[int] = []

        async def binder(value: int) -> Outcome[str]:
            calls.append(value)
            return success("Should not reach")

        bound = asyncio.run(bind_async(failure("Boom"), binder))

        assert calls == []
        assert bound.status == OutcomeStatus.FAILED
        assert bound.error == OperationError.unexpected("Boom")

    @pytest.mark.parametrize("outcome", NOTHING_TO_TRANSFORM)
    def test_bind_async_matches_bind(self, outcome: Outcome[int]) -> None:
        """bind_async resolves to what bind would produce."""

        async def binder(value: int) -> Outcome[int]:
            return success(value)

        assert asyncio.run(bind_async(outcome, binder)) == bind(outcome, lambda v: success(v))

    def test_bind_async_fluent_method(self) -> None:
        """Outcome.bind_async delegates to the combinator."""

        async def double(value: int) -> Outcome[int]:
            return success(value * 2)

        assert asyncio.run(success(21).bind_async(double)).value == 42


class TestMatch:
    """Tests for match()."""

    @pytest.mark.parametrize("outcome", [success(1), no_operation(), success()])
    def test_match_calls_success_branch(self, outcome: Outcome[int]) -> None:
        """Succeeded outcomes call on_success with the value only."""
        on_ok = Mock(return_value="ok")
        on_err = Mock()

        result = match(outcome, on_ok, on_err)

        assert result == "ok"
        on_ok.assert_called_once_with(outcome.value)
        on_err.assert_not_called()

    @pytest.mark.parametrize("outcome", FAILURE_OUTCOMES)
    def test_match_calls_failure_branch(self, outcome: Outcome[int]) -> None:
        """Failed outcomes call on_failure with status and error only."""
        on_ok = Mock()
        on_err = Mock(return_value="err")

        result = match(outcome, on_ok, on_err)

        assert result == "err"
        on_err.assert_called_once_with(outcome.status, outcome.error)
        on_ok.assert_not_called()


class TestMatchDetailed:
    """Tests for match_detailed()."""

    HANDLER_NAMES = [
        "on_completed",
        "on_no_operation",
        "on_invalid",
        "on_not_found",
        "on_unauthorized",
        "on_unprocessable",
        "on_failed",
    ]

    def _handlers(self) -> dict[str, Mock]:
        return {name: Mock(return_value=name) for name in self.HANDLER_NAMES}

    @pytest.mark.parametrize(
        ("outcome", "expected"),
        [
            (success(7), "on_completed"),
            (no_operation(7), "on_no_operation"),
            (validation_failure("x"), "on_invalid"),
            (not_found_failure("x"), "on_not_found"),
            (Outcome.authorization_failure("x"), "on_unauthorized"),
            (Outcome.unprocessable_failure("x"), "on_unprocessable"),
            (failure("x"), "on_failed"),
        ],
    )
    def test_exactly_one_handler_called(self, outcome: Outcome[int], expected: str) -> None:
        """Each status dispatches to its own handler and no other."""
        handlers = self._handlers()

        result = match_detailed(outcome, **handlers)

        assert result == expected
        for name, handler in handlers.items():
            assert handler.call_count == (1 if name == expected else 0)

    def test_completed_handler_receives_value(self) -> None:
        """on_completed receives the value."""
        handlers = self._handlers()

        match_detailed(success(7), **handlers)

        handlers["on_completed"].assert_called_once_with(7)

    def test_no_operation_handler_receives_nothing(self) -> None:
        """on_no_operation is called without arguments."""
        handlers = self._handlers()

        match_detailed(no_operation(), **handlers)

        handlers["on_no_operation"].assert_called_once_with()

    @pytest.mark.parametrize("status", sorted(FAILURE_STATUSES))
    def test_failure_handlers_receive_error(self, status: OutcomeStatus) -> None:
        """Failure handlers receive the error."""
        error = OperationError.validation("bad input")
        handlers = self._handlers()

        result = match_detailed(Outcome(status, error=error), **handlers)

        handlers[result].assert_called_once_with(error)

    def test_unknown_status_raises(self) -> None:
        """A status outside OutcomeStatus raises UnknownOutcomeStatus naming it."""
        handlers = self._handlers()

        with pytest.raises(UnknownOutcomeStatus, match="99") as exc_info:
            match_detailed(Outcome(99), **handlers)  # type: ignore[arg-type]

        assert exc_info.value.status == 99
        assert isinstance(exc_info.value, ValueError)
        for handler in handlers.values():
            handler.assert_not_called()

    def test_fluent_method_accepts_keywords(self) -> None:
        """Outcome.match_detailed forwards keyword handlers."""
        handlers = self._handlers()

        assert failure("x").match_detailed(**handlers) == "on_failed"


class TestSideEffects:
    """Tests for on_success() and on_failure()."""

    @pytest.mark.parametrize("outcome", [success(1), no_operation(), success()])
    def test_on_success_runs_action_for_success(self, outcome: Outcome[int]) -> None:
        """on_success calls the action with the value and returns the same instance."""
        action = Mock()

        returned = on_success(outcome, action)

        assert returned is outcome
        action.assert_called_once_with(outcome.value)

    @pytest.mark.parametrize("outcome", FAILURE_OUTCOMES)
    def test_on_success_skips_failure(self, outcome: Outcome[int]) -> None:
        """on_success does nothing for a failure but still returns it."""
        action = Mock()

        assert on_success(outcome, action) is outcome
        action.assert_not_called()

    @pytest.mark.parametrize("outcome", FAILURE_OUTCOMES)
    def test_on_failure_runs_action_for_failure(self, outcome: Outcome[int]) -> None:
        """on_failure calls the action with status and error."""
        action = Mock()

        returned = on_failure(outcome, action)

        assert returned is outcome
        action.assert_called_once_with(outcome.status, outcome.error)

    @pytest.mark.parametrize("outcome", [success(1), no_operation()])
    def test_on_failure_skips_success(self, outcome: Outcome[int]) -> None:
        """on_failure does nothing for a success but still returns it."""
        action = Mock()

        assert on_failure(outcome, action) is outcome
        action.assert_not_called()

    def test_chained_side_effects(self) -> None:
        """Fluent chaining runs exactly the matching hook."""
        succeeded = Mock()
        failed = Mock()

        outcome = validation_failure("bad")
        returned = outcome.on_success(succeeded).on_failure(failed)

        assert returned is outcome
        succeeded.assert_not_called()
        failed.assert_called_once_with(OutcomeStatus.INVALID, outcome.error)


class TestEndToEnd:
    """Pipelines combining factories and combinators."""

    def test_fluent_pipeline(self) -> None:
        """map then bind then map on a success."""
        result = (
            success(10)
            .map(lambda x: x * 2)
            .bind(lambda x: success(f"Value: {x}") if x > 5 else validation_failure("too small"))
            .map(str.upper)
        )

        assert result == success("VALUE: 20")

    def test_pipeline_stops_at_first_failure(self) -> None:
        """Steps after the first failure are never called."""
        later = Mock()

        result = (
            success(1)
            .bind(lambda x: validation_failure("Amount too small", "Currency missing"))
            .map(later)
            .bind(later)
        )

        later.assert_not_called()
        assert result.status == OutcomeStatus.INVALID
        assert result.error is not None
        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.messages == ("Amount too small", "Currency missing")
