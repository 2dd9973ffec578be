"""
Outcome to HTTP response mapping.

This is the adapter-side policy translating the seven outcome statuses to
HTTP status codes. The domain layer knows nothing about it.

    COMPLETED      -> 200 (JSON-encoded value)
    NO_OPERATION   -> 204 (empty body)
    INVALID        -> 400
    NOT_FOUND      -> 404
    UNAUTHORIZED   -> 403
    UNPROCESSABLE  -> 422
    FAILED         -> 500

Failure bodies follow ErrorResponse: {"status", "kind", "messages"}.
"""

from collections.abc import Callable
from typing import Any

from fastapi import Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from src.adapters.reporting import OutcomeLogger
from src.api.models import ErrorResponse
from src.domain.combinators import match_detailed
from src.domain.errors import OperationError
from src.domain.outcome import Outcome, OutcomeStatus
from src.domain.ports import CancellationSignal, Command, Operation

HTTP_STATUS_BY_OUTCOME: dict[OutcomeStatus, int] = {
    OutcomeStatus.COMPLETED: 200,
    OutcomeStatus.NO_OPERATION: 204,
    OutcomeStatus.INVALID: 400,
    OutcomeStatus.NOT_FOUND: 404,
    OutcomeStatus.UNAUTHORIZED: 403,
    OutcomeStatus.UNPROCESSABLE: 422,
    OutcomeStatus.FAILED: 500,
}


def _error_handler(outcome_status: OutcomeStatus) -> Callable[[OperationError | None], Response]:
    def handle(error: OperationError | None) -> Response:
        body = ErrorResponse.from_error(outcome_status, error)
        return JSONResponse(
            status_code=HTTP_STATUS_BY_OUTCOME[outcome_status],
            content=body.model_dump(),
        )

    return handle


def respond(outcome: Outcome[Any]) -> Response:
    """
    Convert an outcome to an HTTP response.

    Raises:
        UnknownOutcomeStatus: If the outcome carries a status outside
            OutcomeStatus (surfaces as a 500 through FastAPI)
    """
    return match_detailed(
        outcome,
        on_completed=lambda value: JSONResponse(
            status_code=HTTP_STATUS_BY_OUTCOME[OutcomeStatus.COMPLETED],
            content=jsonable_encoder(value),
        ),
        on_no_operation=lambda: Response(
            status_code=HTTP_STATUS_BY_OUTCOME[OutcomeStatus.NO_OPERATION]
        ),
        on_invalid=_error_handler(OutcomeStatus.INVALID),
        on_not_found=_error_handler(OutcomeStatus.NOT_FOUND),
        on_unauthorized=_error_handler(OutcomeStatus.UNAUTHORIZED),
        on_unprocessable=_error_handler(OutcomeStatus.UNPROCESSABLE),
        on_failed=_error_handler(OutcomeStatus.FAILED),
    )


async def execute_and_respond(
    operation: Operation[Any, Any],
    command: Command,
    cancellation: CancellationSignal | None = None,
) -> Response:
    """
    Run an operation, log its outcome and convert it to a response.

    Typical route body:

        return await execute_and_respond(operation, RenameProject(...))
    """
    reporter = OutcomeLogger(type(operation).__name__)
    outcome = await operation.execute(command, cancellation)
    outcome.on_success(reporter.log_success).on_failure(reporter.log_failure)
    return respond(outcome)
