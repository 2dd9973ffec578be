"""
Domain layer - Pure operation core with zero framework imports.

This package contains the outcome model returned by every use-case
operation, the combinators that transform and chain outcomes, the abstract
operation contract, and the registry binding concrete operations to their
contracts at startup.
"""

from .combinators import bind, bind_async, map_value, match, match_detailed, on_failure, on_success
from .errors import ErrorKind, OperationError
from .exceptions import (
    DuplicateOperationBinding,
    InvalidOperation,
    InvalidOutcome,
    OperationNotRegistered,
    OperationsError,
    RegistryError,
    RegistrySealed,
    UnknownOutcomeStatus,
)
from .outcome import (
    FAILURE_STATUSES,
    SUCCESS_STATUSES,
    Outcome,
    OutcomeStatus,
    authorization_failure,
    failure,
    no_operation,
    not_found_failure,
    success,
    unprocessable_failure,
    validation_failure,
)
from .ports import CancellationSignal, Command, Operation
from .registry import (
    OperationBinding,
    OperationProvider,
    OperationRegistry,
    contract_of,
    describe_contract,
    type_name,
)

__all__ = [
    "FAILURE_STATUSES",
    "SUCCESS_STATUSES",
    "CancellationSignal",
    "Command",
    "DuplicateOperationBinding",
    "ErrorKind",
    "InvalidOperation",
    "InvalidOutcome",
    "Operation",
    "OperationBinding",
    "OperationError",
    "OperationNotRegistered",
    "OperationProvider",
    "OperationRegistry",
    "OperationsError",
    "Outcome",
    "OutcomeStatus",
    "RegistryError",
    "RegistrySealed",
    "UnknownOutcomeStatus",
    "authorization_failure",
    "bind",
    "bind_async",
    "contract_of",
    "describe_contract",
    "failure",
    "map_value",
    "match",
    "match_detailed",
    "no_operation",
    "not_found_failure",
    "on_failure",
    "on_success",
    "success",
    "type_name",
    "unprocessable_failure",
    "validation_failure",
]
