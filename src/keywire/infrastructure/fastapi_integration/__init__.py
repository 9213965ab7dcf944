"""
FastAPI integration module.

Provides helpers for resolving keywire registrations from FastAPI endpoints.
"""

from .integration import ContextMiddleware, create_fastapi_dependency, create_request_dependency

__all__ = [
    "create_fastapi_dependency",
    "create_request_dependency",
    "ContextMiddleware",
]
