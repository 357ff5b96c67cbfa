"""
Domain layer - Core business logic and models.

This layer contains the keys, bindings, errors and interfaces of the DI runtime.
It has no dependencies on other layers.
"""

from .enums import ContainerState, ModuleState, StrategyKind
from .exceptions import (
    CircularDependencyError,
    DIException,
    InvalidBindingError,
    InvalidKeyError,
    MissingDependencyError,
    MissingFieldError,
    ProductionError,
    UsageError,
)
from .interfaces import IContainer, IModule, IResolver
from .keys import CONTAINER_KEY, KeyKind, Token, describe_key, key_kind
from .models import Binding, InstanceDeclaration, Options, ProviderDeclaration

__all__ = [
    # Enums
    "StrategyKind",
    "ContainerState",
    "ModuleState",
    # Keys
    "CONTAINER_KEY",
    "KeyKind",
    "Token",
    "describe_key",
    "key_kind",
    # Exceptions
    "DIException",
    "MissingDependencyError",
    "ProductionError",
    "UsageError",
    "CircularDependencyError",
    "InvalidKeyError",
    "InvalidBindingError",
    "MissingFieldError",
    # Interfaces
    "IContainer",
    "IModule",
    "IResolver",
    # Models
    "Binding",
    "ProviderDeclaration",
    "InstanceDeclaration",
    "Options",
]
