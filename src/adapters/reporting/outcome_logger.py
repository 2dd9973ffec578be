"""
Outcome logger adapter - Logs operation outcomes as side-effect hooks.

This module provides actions shaped for Outcome.on_success() and
Outcome.on_failure(), so callers can record results without unwrapping them:

    outcome.on_success(reporter.log_success).on_failure(reporter.log_failure)
"""

import logging
from typing import Any

from src.domain.errors import OperationError
from src.domain.outcome import OutcomeStatus

logger = logging.getLogger(__name__)


class OutcomeLogger:
    """
    Logs outcomes of one named operation.

    Successes are logged at INFO, failures at WARNING together with the
    status, error kind and messages.
    """

    def __init__(self, operation_name: str) -> None:
        self.operation_name = operation_name

    def log_success(self, value: Any) -> None:
        """Action for on_success(): log that the operation succeeded."""
        logger.info(
            "[OPERATION] %s succeeded (value: %s)",
            self.operation_name,
            type(value).__name__ if value is not None else "none",
        )

    def log_failure(self, status: OutcomeStatus, error: OperationError | None) -> None:
        """Action for on_failure(): log status and error details."""
        status_name = getattr(status, "name", status)
        if error is None:
            logger.warning("[OPERATION] %s failed with %s", self.operation_name, status_name)
            return
        logger.warning(
            "[OPERATION] %s failed with %s (%s): %s",
            self.operation_name,
            status_name,
            error.kind.name,
            "; ".join(error.messages),
        )
