"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging, operation discovery, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from src.api.dependencies import get_operation_provider
from src.api.models import HealthResponse
from src.api.v1 import router as v1_router
from src.config.settings import get_settings
from src.domain.registry import OperationProvider, OperationRegistry

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Operation registry API v1 - Inspect the operations bound at startup",
    },
]


def create_app(registry: OperationRegistry | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        registry: Pre-populated registry. When omitted, operations are
            discovered at startup from settings.operation_modules.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        FastAPI lifespan context manager.

        Manages application startup and shutdown:
        - Applies the configured log level
        - Discovers operations (once) and builds the read-only provider
        """
        logging.getLogger("src").setLevel(settings.log_level.upper())

        logger.info("Starting application...")

        operations = registry
        if operations is None:
            logger.info("Discovering operations...")
            operations = OperationRegistry().add_operations(*settings.operation_modules)

        # Store provider in app state for dependency injection
        app.state.operations = operations.build()

        logger.info(
            "Application startup complete (%d operation(s) bound)", len(app.state.operations)
        )

        yield

        logger.info("Shutting down application...")

    app = FastAPI(
        title=settings.app_name,
        description="Typed operation outcomes - Use-case operations bound at startup",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    # Include v1 API routes
    app.include_router(v1_router, prefix="/v1")

    @app.get("/health", response_model=HealthResponse)
    async def health_check(
        provider: OperationProvider = Depends(get_operation_provider),
    ) -> HealthResponse:
        """
        Health check endpoint.

        Returns 200 OK once operations are bound.
        Returns 503 if startup has not completed.
        """
        return HealthResponse(status="healthy", operations=len(provider))

    return app


app = create_app()
