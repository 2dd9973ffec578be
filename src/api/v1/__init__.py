"""
API v1 package.

Contains versioned API routes for inspecting registered operations.
"""

from src.api.v1.routes import router

__all__ = ["router"]
