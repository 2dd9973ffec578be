"""
API v1 routes.

Defines REST endpoints exposing the operations bound at startup.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_operation_provider
from src.api.models import OperationBindingResponse
from src.domain.registry import OperationProvider

router = APIRouter(tags=["v1"])


@router.get(
    "/operations",
    response_model=list[OperationBindingResponse],
    summary="List registered operations",
    description="Return every operation contract bound at startup "
    "together with its command, result and implementation types.",
)
async def list_operations(
    provider: OperationProvider = Depends(get_operation_provider),
) -> list[OperationBindingResponse]:
    """
    List registered operations.

    Bindings are returned in registration order.
    """
    return [OperationBindingResponse.from_binding(binding) for binding in provider.bindings]
