"""Application layer - Requirement and field declaration tables."""

import inspect
import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, TypeVar

from modular_di.domain import describe_key, key_kind

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROVIDES_ATTRIBUTE = "__di_provides__"


def _unwrap(target: Any) -> Any:
    # Bound methods share the declaration of their underlying function.
    return getattr(target, "__func__", target)


class MetadataRegistry:
    """Explicit registration table for requirement lists and injected fields.

    The container only reads from this table. Declarations are written either
    directly through ``register_requirements``/``register_field`` or through the
    ``requires``/``injects`` decorators.

    Attributes:
        _requirements: Ordered key lists per class or function.
        _fields: Attribute-to-key mappings per class.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._requirements: Dict[Any, Tuple[Any, ...]] = {}
        self._fields: Dict[type, Dict[str, Any]] = {}

    def register_requirements(self, target: Any, keys: Iterable[Any]) -> None:
        """Declare the ordered keys a class or callable needs before invocation.

        Registering again replaces the previous list.

        Args:
            target: A class, function or bound method.
            keys: The required keys, in resolution order.

        Raises:
            InvalidKeyError: If any key is not a valid dependency key.
        """
        keys = tuple(keys)
        for key in keys:
            key_kind(key)
        self._requirements[_unwrap(target)] = keys
        logger.debug(
            "Registered requirements for %s: [%s]",
            getattr(target, "__qualname__", target),
            ", ".join(describe_key(key) for key in keys),
        )

    def requirements_of(self, target: Any) -> Tuple[Any, ...]:
        """Return the ordered requirement list of a class or callable.

        Classes without their own declaration use the nearest declared ancestor.
        Targets without any declaration require nothing.

        Args:
            target: A class, function or bound method.

        Returns:
            Tuple of required keys, possibly empty.
        """
        target = _unwrap(target)
        if inspect.isclass(target):
            for cls in target.__mro__:
                if cls in self._requirements:
                    return self._requirements[cls]
            return ()
        return self._requirements.get(target, ())

    def register_field(self, cls: type, attribute: str, key: Any) -> None:
        """Tag an instance attribute of a class with the key it is populated from.

        Args:
            cls: The owning class.
            attribute: The attribute name.
            key: The dependency key copied into the attribute.

        Raises:
            InvalidKeyError: If the key is not a valid dependency key.
        """
        key_kind(key)
        self._fields.setdefault(cls, {})[attribute] = key

    def fields_of(self, cls: type) -> Dict[str, Any]:
        """Return the attribute-to-key mapping of a class, merged along its MRO.

        Args:
            cls: The class to inspect.

        Returns:
            Mapping of attribute names to keys; subclass declarations win.
        """
        merged: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            merged.update(self._fields.get(klass, {}))
        return merged

    def clear(self) -> None:
        """Forget every declaration. Useful for testing."""
        self._requirements.clear()
        self._fields.clear()


default_registry = MetadataRegistry()


def requires(*keys: Any, registry: Optional[MetadataRegistry] = None) -> Callable[[T], T]:
    """Decorator declaring the keys a class, function or provider method requires.

    Args:
        *keys: The required keys, in resolution order.
        registry: Registry to write to. Defaults to the shared registry.

    Example:
        >>> @requires("database", Logger)
        ... class UserService:
        ...     def __init__(self, options):
        ...         self.database = options.database
        ...         self.logger = options[Logger]
    """

    def decorator(target: T) -> T:
        (registry or default_registry).register_requirements(target, keys)
        return target

    return decorator


def injects(registry: Optional[MetadataRegistry] = None, **attribute_keys: Any) -> Callable[[T], T]:
    """Class decorator tagging attributes to be populated from resolved options.

    Args:
        registry: Registry to write to. Defaults to the shared registry.
        **attribute_keys: Attribute names mapped to the keys they are copied from.

    Example:
        >>> @requires("clock")
        ... @injects(clock="clock")
        ... class Scheduler:
        ...     def __init__(self, options):
        ...         pass
    """

    def decorator(cls: T) -> T:
        for attribute, key in attribute_keys.items():
            (registry or default_registry).register_field(cls, attribute, key)  # type: ignore[arg-type]
        return cls

    return decorator


def provides(key: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator tagging a module method as the provider of a key.

    The method is bound as a factory when the module is configured and is
    called with the resolved options.

    Args:
        key: The key produced by the method.

    Example:
        >>> class ClockModule(Module):
        ...     @provides("now")
        ...     async def now(self, options):
        ...         return datetime.utcnow()
    """
    key_kind(key)

    def decorator(method: Callable[..., Any]) -> Callable[..., Any]:
        setattr(method, PROVIDES_ATTRIBUTE, key)
        return method

    return decorator
