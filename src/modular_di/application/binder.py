"""Application layer - Fluent binding builder."""

import inspect
from typing import Any, Callable, Dict

from modular_di.domain import Binding, InvalidBindingError, StrategyKind, describe_key


class Binder:
    """Temporary builder returned by ``Module.bind``.

    Each ``to_*`` call finalizes an immutable Binding into the owning module's
    map, replacing whatever was bound to the key before.

    Attributes:
        key: The key being bound.
        _bindings: The owning module's key-to-binding map.
    """

    def __init__(self, key: Any, bindings: Dict[Any, Binding]) -> None:
        self.key = key
        self._bindings = bindings

    def _finish(self, kind: StrategyKind, provider: Any) -> Binding:
        binding = Binding(key=self.key, kind=kind, provider=provider)
        self._bindings[self.key] = binding
        return binding

    def to_constructor(self, cls: type) -> Binding:
        """Produce the value by creating ``cls`` through the container.

        Raises:
            InvalidBindingError: If ``cls`` is not a class.
        """
        if not inspect.isclass(cls):
            raise InvalidBindingError(f"Cannot bind {describe_key(self.key)} to constructor {cls!r}: not a class")
        return self._finish(StrategyKind.CONSTRUCTOR, cls)

    def to_factory(self, factory: Callable[..., Any]) -> Binding:
        """Produce the value by calling ``factory(options)``; awaitable results are awaited.

        Raises:
            InvalidBindingError: If ``factory`` is not callable.
        """
        if not callable(factory):
            raise InvalidBindingError(f"Cannot bind {describe_key(self.key)} to factory {factory!r}: not callable")
        return self._finish(StrategyKind.FACTORY, factory)

    def to_instance(self, value: Any) -> Binding:
        """Return ``value`` unchanged on every resolution."""
        return self._finish(StrategyKind.INSTANCE, value)
