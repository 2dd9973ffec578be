"""
API response models.

Pydantic models for FastAPI response serialization and OpenAPI schema generation.
"""

from pydantic import BaseModel, Field

from src.domain.errors import ErrorKind, OperationError
from src.domain.outcome import OutcomeStatus
from src.domain.registry import OperationBinding, describe_contract, type_name


class ErrorResponse(BaseModel):
    """Body returned for every failure outcome."""

    status: str = Field(..., description="Outcome status name, e.g. INVALID")
    kind: str = Field(..., description="Error kind name, e.g. VALIDATION")
    messages: list[str]

    @classmethod
    def from_error(cls, status: OutcomeStatus, error: OperationError | None) -> "ErrorResponse":
        """Build the body from a failed outcome's status and error."""
        if error is None:
            return cls(status=status.name, kind=ErrorKind.UNSPECIFIED.name, messages=[])
        return cls(status=status.name, kind=error.kind.name, messages=list(error.messages))


class OperationBindingResponse(BaseModel):
    """One registered operation."""

    contract: str
    command: str
    result: str
    implementation: str

    @classmethod
    def from_binding(cls, binding: OperationBinding) -> "OperationBindingResponse":
        implementation = binding.implementation
        return cls(
            contract=describe_contract(binding.contract),
            command=type_name(binding.command_type),
            result=type_name(binding.result_type),
            implementation=f"{implementation.__module__}.{implementation.__qualname__}",
        )


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    operations: int
