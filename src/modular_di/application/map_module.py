"""Application layer - Module built from a key-to-value mapping."""

import inspect
from typing import Any, Callable, Dict, Mapping, Optional

from modular_di.application.module import Module
from modular_di.domain import InstanceDeclaration, ProviderDeclaration


def provider(factory: Callable[..., Any]) -> ProviderDeclaration:
    """Declare a MapModule entry as a factory called with the resolved options."""
    return ProviderDeclaration(factory=factory)


def instance(value: Any) -> InstanceDeclaration:
    """Declare a MapModule entry as a fixed value, even when it is a class."""
    return InstanceDeclaration(value=value)


class MapModule(Module):
    """Module whose bindings come from a mapping given at construction.

    Each entry is materialized during ``configure``:

    - a class is bound with ``to_constructor``;
    - a ``provider(fn)`` declaration is bound with ``to_factory``;
    - an ``instance(value)`` declaration or any other value is bound with ``to_instance``.

    Provider methods declared on subclasses are applied after the mapping and
    win over a mapping entry for the same key.

    Example:
        >>> module = MapModule({
        ...     "retries": 3,
        ...     Storage: S3Storage,
        ...     "session_id": provider(lambda options: uuid.uuid4()),
        ... })
    """

    def __init__(self, mapping: Optional[Mapping[Any, Any]] = None) -> None:
        """Initialize the module with its mapping.

        Args:
            mapping: Keys mapped to classes, declarations or fixed values.
        """
        super().__init__()
        self._mapping: Dict[Any, Any] = dict(mapping or {})

    async def setup(self, options: Dict[Any, Any]) -> None:
        for key, value in self._mapping.items():
            if isinstance(value, ProviderDeclaration):
                self.bind(key).to_factory(value.factory)
            elif isinstance(value, InstanceDeclaration):
                self.bind(key).to_instance(value.value)
            elif inspect.isclass(value):
                self.bind(key).to_constructor(value)
            else:
                self.bind(key).to_instance(value)
