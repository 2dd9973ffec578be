"""
Shared test fixtures and configuration.

This module provides pytest fixtures for registries populated with the
sample operations in tests.fixtures.operations.
"""

import pytest

from src.domain.registry import OperationProvider, OperationRegistry

SAMPLE_OPERATIONS = "tests.fixtures.operations"


@pytest.fixture
def registry() -> OperationRegistry:
    """Registry populated with the sample operations (not yet built)."""
    return OperationRegistry().add_operations(SAMPLE_OPERATIONS)


@pytest.fixture
def provider(registry: OperationRegistry) -> OperationProvider:
    """Provider built from the sample registry."""
    return registry.build()
