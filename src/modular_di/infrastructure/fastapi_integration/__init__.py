"""
FastAPI integration module.

Provides helpers and utilities for integrating modular-di with FastAPI.
"""

from .integration import container_lifespan, create_fastapi_dependency

__all__ = [
    "create_fastapi_dependency",
    "container_lifespan",
]
