"""
modular-di: Module-based asynchronous Dependency Injection container.

Public API exports for the modular-di package.
"""

import logging

# Application exports
from modular_di.application import (
    Container,
    MapModule,
    MetadataRegistry,
    Module,
    default_registry,
    injects,
    instance,
    must_exist,
    populate_fields,
    provider,
    provides,
    requires,
)
from modular_di.config import ContainerSettings

# Domain exports
from modular_di.domain import (
    CONTAINER_KEY,
    Binding,
    CircularDependencyError,
    ContainerState,
    DIException,
    InvalidBindingError,
    InvalidKeyError,
    MissingDependencyError,
    MissingFieldError,
    Options,
    ProductionError,
    StrategyKind,
    Token,
    UsageError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Container and modules
    "Container",
    "ContainerSettings",
    "Module",
    "MapModule",
    # Declarations
    "MetadataRegistry",
    "default_registry",
    "requires",
    "injects",
    "provides",
    "provider",
    "instance",
    "populate_fields",
    "must_exist",
    # Keys and models
    "CONTAINER_KEY",
    "Token",
    "Binding",
    "Options",
    # Enums
    "StrategyKind",
    "ContainerState",
    # Exceptions
    "DIException",
    "MissingDependencyError",
    "ProductionError",
    "UsageError",
    "CircularDependencyError",
    "InvalidKeyError",
    "InvalidBindingError",
    "MissingFieldError",
]
