"""
Testing utilities module.

Provides helpers and utilities for testing applications using modular-di.
"""

from .utilities import OverrideModule, TestContainer, create_mock_container

__all__ = [
    "TestContainer",
    "OverrideModule",
    "create_mock_container",
]
