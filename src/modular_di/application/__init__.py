"""
Application layer - Use cases and orchestration.

This layer contains modules, metadata tables and the resolution engine.
It depends only on the Domain layer.
"""

from .binder import Binder
from .circular_detector import CircularDependencyDetector
from .container import Container
from .fields import must_exist, populate_fields
from .map_module import MapModule, instance, provider
from .metadata import MetadataRegistry, default_registry, injects, provides, requires
from .module import Module
from .resolver import DependencyResolver

__all__ = [
    "Container",
    "Module",
    "MapModule",
    "Binder",
    "DependencyResolver",
    "CircularDependencyDetector",
    "MetadataRegistry",
    "default_registry",
    "requires",
    "injects",
    "provides",
    "provider",
    "instance",
    "populate_fields",
    "must_exist",
]
