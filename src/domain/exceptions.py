"""
Domain exceptions - Defects in outcome handling and operation registration.

Expected business failures are never raised: they travel as failure outcomes.
The exceptions in this module signal programming or wiring defects only.
"""

from typing import Any


class OperationsError(Exception):
    """Base class for operation core errors."""

    pass


class InvalidOutcome(OperationsError, ValueError):
    """Outcome or error built in a contradictory or incomplete state."""

    pass


class UnknownOutcomeStatus(OperationsError, ValueError):
    """Status value outside the known OutcomeStatus members."""

    def __init__(self, status: Any) -> None:
        self.status = status
        super().__init__(f"Unknown outcome status: {status!r}")


class RegistryError(OperationsError):
    """Base class for operation registry errors."""

    pass


class InvalidOperation(RegistryError, TypeError):
    """Class is not a concrete implementation of a parameterized Operation."""

    pass


class DuplicateOperationBinding(RegistryError):
    """A different implementation is already bound to the same contract."""

    pass


class OperationNotRegistered(RegistryError, LookupError):
    """No implementation is bound to the requested contract."""

    pass


class RegistrySealed(RegistryError):
    """Registry was already built; bindings can no longer change."""

    pass
