"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories resolving registered operations
from the provider built at startup.
"""

import logging
from collections.abc import Callable
from typing import Any

from fastapi import Depends, HTTPException, Request, status

from src.domain.exceptions import OperationNotRegistered
from src.domain.ports import Operation
from src.domain.registry import OperationProvider, describe_contract

logger = logging.getLogger(__name__)


def get_operation_provider(request: Request) -> OperationProvider:
    """
    Get the operation provider from app state.

    The provider is built during app lifespan startup and stored in app.state.
    """
    provider = getattr(request.app.state, "operations", None)
    if provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Operations not initialized",
        )
    return provider


def operation_dependency(contract: Any) -> Callable[..., Operation[Any, Any]]:
    """
    Create a dependency yielding a fresh operation bound to ``contract``.

    Usage:
        operation: Operation[RenameProject, Project] = Depends(
            operation_dependency(Operation[RenameProject, Project])
        )
    """

    def resolve_operation(
        provider: OperationProvider = Depends(get_operation_provider),
    ) -> Operation[Any, Any]:
        try:
            return provider.require(contract)
        except OperationNotRegistered:
            logger.error("No operation bound to %s", describe_contract(contract))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Operation unavailable",
            ) from None

    return resolve_operation
