"""
FastAPI integration module.

Provides helpers and utilities for integrating illusion-di with FastAPI.
"""

from .integration import (
    ContainerMiddleware,
    create_fastapi_dependency,
    create_method_dependency,
    create_request_dependency,
)

__all__ = [
    "create_fastapi_dependency",
    "create_method_dependency",
    "create_request_dependency",
    "ContainerMiddleware",
]
