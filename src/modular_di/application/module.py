"""Application layer - Modules holding bindings."""

import inspect
import logging
from typing import Any, Dict, Iterator, Mapping, Optional

from modular_di.application.binder import Binder
from modular_di.application.metadata import PROVIDES_ATTRIBUTE
from modular_di.domain import Binding, IModule, ModuleState, UsageError, describe_key, key_kind

logger = logging.getLogger(__name__)


class Module(IModule):
    """Ordered collection of bindings, populated once by ``configure``.

    Subclasses declare bindings by overriding the async ``setup`` hook and by
    tagging methods with ``@provides``. Provider methods are bound after
    ``setup`` completes, so they win over a ``setup`` binding for the same key.
    Inside one module the last binding of a key wins.

    Attributes:
        _bindings: Key-to-binding map in binding order.
        _state: Configuration state of the module.

    Example:
        >>> class StorageModule(Module):
        ...     async def setup(self, options):
        ...         self.bind("bucket").to_instance(options["bucket"])
        ...         self.bind(Storage).to_constructor(S3Storage)
        ...
        ...     @provides("client")
        ...     async def client(self, options):
        ...         return await connect(options["bucket"])
    """

    def __init__(self) -> None:
        """Initialize an empty, unconfigured module."""
        self._bindings: Dict[Any, Binding] = {}
        self._state = ModuleState.UNCONFIGURED

    @property
    def state(self) -> ModuleState:
        """Current configuration state."""
        return self._state

    @property
    def name(self) -> str:
        """Name used in logs and error messages."""
        return type(self).__name__

    async def configure(self, options: Optional[Mapping[Any, Any]] = None) -> None:
        """Populate the bindings by running ``setup`` and binding provider methods.

        Configuring an already configured module does nothing.

        Args:
            options: Configuration options forwarded by the container.

        Raises:
            UsageError: If a previous configuration failed or is still running.
        """
        if self._state == ModuleState.CONFIGURED:
            logger.debug("Module %s already configured, skipping", self.name)
            return
        if self._state != ModuleState.UNCONFIGURED:
            raise UsageError(f"Module {self.name} cannot be configured while {self._state.value}")

        self._state = ModuleState.CONFIGURING
        try:
            await self.setup(dict(options or {}))
            self._bind_providers()
        except Exception:
            self._state = ModuleState.FAILED
            logger.exception("Module %s failed to configure", self.name)
            raise

        self._state = ModuleState.CONFIGURED
        logger.debug("Module %s configured with %d binding(s)", self.name, len(self._bindings))

    async def setup(self, options: Dict[Any, Any]) -> None:
        """Hook for subclasses to declare bindings. Does nothing by default.

        Args:
            options: Configuration options forwarded by the container.
        """

    def _bind_providers(self) -> None:
        for attribute, member in inspect.getmembers(type(self), callable):
            key = getattr(member, PROVIDES_ATTRIBUTE, None)
            if key is None:
                continue
            self.bind(key).to_factory(getattr(self, attribute))

    def bind(self, key: Any) -> Binder:
        """Start the binding of a key, replacing any previous binding for it.

        Until a ``to_*`` method is called, the key is bound without a strategy
        and resolving it raises ``UsageError``.

        Args:
            key: The dependency key.

        Returns:
            A Binder for choosing the production strategy.

        Raises:
            InvalidKeyError: If the key is not a class, a non-empty string or a Token.
        """
        key_kind(key)
        if key in self._bindings:
            logger.debug("Module %s rebinding %s", self.name, describe_key(key))
        self._bindings[key] = Binding(key=key)
        return Binder(key, self._bindings)

    def get(self, key: Any) -> Optional[Binding]:
        """Return the binding for a key, or None. Never raises."""
        try:
            return self._bindings.get(key)
        except TypeError:
            # Unhashable lookups are simply absent.
            return None

    def keys(self) -> Iterator[Any]:
        return iter(self._bindings)

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"<{self.name} {self._state.value} bindings={len(self._bindings)}>"
