import inspect
import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from modular_di.application.circular_detector import CircularDependencyDetector
from modular_di.application.fields import populate_fields
from modular_di.application.metadata import MetadataRegistry, default_registry
from modular_di.application.resolver import DependencyResolver
from modular_di.config import ContainerSettings
from modular_di.domain import (
    CONTAINER_KEY,
    Binding,
    ContainerState,
    IContainer,
    IModule,
    IResolver,
    MissingDependencyError,
    Options,
    StrategyKind,
    UsageError,
    describe_key,
    key_kind,
)

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Main dependency injection container.

    Owns an ordered list of modules and resolves requirement lists against
    them. When several modules bind the same key, the module registered first
    wins. The container itself is always available under the ``"container"``
    key.

    Lifecycle: the container starts unconfigured; ``configure`` configures
    every module once, in registration order; afterwards ``create`` may be
    called any number of times, concurrently.

    Attributes:
        _modules: Owned modules in registration order.
        _state: Lifecycle state.
        _settings: Runtime switches.
        _registry: Table requirement lists and fields are read from.
        _resolver: Component running binding strategies.
        _circular_detector: Component detecting creation and key resolution cycles.

    Example:
        >>> container = Container(MapModule({"foo": 3}))
        >>> await container.configure()
        >>> bar = await container.create(Bar)
    """

    def __init__(
        self,
        *modules: IModule,
        settings: Optional[ContainerSettings] = None,
        registry: Optional[MetadataRegistry] = None,
    ) -> None:
        """Initialize the container with its modules.

        Args:
            *modules: Modules in registration (priority) order.
            settings: Runtime switches. Read from the environment when omitted.
            registry: Declaration table. Defaults to the shared registry.

        Raises:
            TypeError: If any module does not implement IModule.
        """
        for module in modules:
            if not isinstance(module, IModule):
                raise TypeError(f"Expected a module, got {module!r}")
        self._modules: Tuple[IModule, ...] = tuple(modules)
        self._state = ContainerState.UNCONFIGURED
        self._settings = settings or ContainerSettings()
        self._registry = registry or default_registry
        self._resolver: IResolver = DependencyResolver(self._registry)
        self._circular_detector = CircularDependencyDetector()

    @property
    def modules(self) -> Tuple[IModule, ...]:
        """Owned modules in registration order."""
        return self._modules

    @property
    def state(self) -> ContainerState:
        return self._state

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    async def configure(self, options: Optional[Mapping[Any, Any]] = None) -> None:
        """Configure every module sequentially, in registration order.

        A module failure propagates unchanged and leaves the container unusable.

        Args:
            options: Configuration options forwarded to each module.

        Raises:
            UsageError: If the container was already configured or is configuring.
        """
        if self._state != ContainerState.UNCONFIGURED:
            raise UsageError(f"Container cannot be configured while {self._state.value}")

        self._state = ContainerState.CONFIGURING
        for module in self._modules:
            await module.configure(options)

        self._state = ContainerState.CONFIGURED
        logger.info("Container configured with %d module(s)", len(self._modules))

    def _ensure_configured(self) -> None:
        if self._state != ContainerState.CONFIGURED:
            raise UsageError(f"Container must be configured before use (currently {self._state.value})")

    async def create(self, target: Any, options: Optional[Mapping[Any, Any]] = None) -> Any:
        """Create an instance of a class with its requirements injected.

        The class's requirement list is resolved key by key, in declared order.
        Every missing key is collected before failing. The class is then called
        with a single resolved-options mapping; seed ``options`` take priority
        over resolved values.

        When a module binds the class itself to something other than
        ``to_constructor(target)``, that binding is used instead, so overrides
        of a class key apply to ``create`` as well. Targets that are names or
        Tokens are resolved like ``get``.

        Args:
            target: A class to construct, or a key to resolve.
            options: Seed values.

        Returns:
            The new instance, or the resolved value for a key target.

        Raises:
            UsageError: If the container is not configured.
            MissingDependencyError: If any required key cannot be resolved.
            CircularDependencyError: If the class is already being created in this chain.
            ProductionError: If a dependency's constructor or factory fails.

        Example:
            >>> @requires("foo")
            ... class Bar:
            ...     def __init__(self, options):
            ...         self.foo = options.foo
            >>> bar = await container.create(Bar)
        """
        self._ensure_configured()

        if not inspect.isclass(target):
            return await self.get(target, options)

        token = self._circular_detector.push(target) if self._settings.detect_cycles else None
        try:
            found = self.find_binding(target)
            if found is not None and not self._constructs_itself(found[1], target):
                return await self._resolve_key(target, options)

            requirements = self._registry.requirements_of(target)
            resolved = await self.build_options(target, requirements, options)
            instance = target(resolved)
            if self._settings.populate_fields:
                populate_fields(instance, resolved, self._registry)
            return instance
        finally:
            if token is not None:
                self._circular_detector.pop(token)

    @staticmethod
    def _constructs_itself(binding: Binding, target: type) -> bool:
        return binding.kind == StrategyKind.CONSTRUCTOR and binding.provider is target

    async def get(self, key: Any, options: Optional[Mapping[Any, Any]] = None) -> Any:
        """Resolve the value bound to a single key.

        Keys are tracked like classes during ``create``, so a factory that
        resolves its own key raises ``CircularDependencyError``.

        Args:
            key: The dependency key.
            options: Seed values; a seeded key is returned as is.

        Returns:
            The resolved value.

        Raises:
            UsageError: If the container is not configured.
            InvalidKeyError: If the key is not a valid dependency key.
            MissingDependencyError: If no module binds the key.
            CircularDependencyError: If the key is already being resolved in this chain.
        """
        self._ensure_configured()
        key_kind(key)

        if options and key != CONTAINER_KEY and key in options:
            return options[key]
        if inspect.isclass(key) and self.find_binding(key) is not None:
            # Bound classes go through create, which tracks them.
            return await self.create(key, options)

        token = self._circular_detector.push(key) if self._settings.detect_cycles else None
        try:
            return await self._resolve_key(key, options)
        finally:
            if token is not None:
                self._circular_detector.pop(token)

    async def _resolve_key(self, key: Any, options: Optional[Mapping[Any, Any]]) -> Any:
        resolved = await self.build_options(key, [key], options)
        return resolved[key]

    async def build_options(
        self,
        target: Any,
        requirements: Sequence[Any],
        seed: Optional[Mapping[Any, Any]] = None,
    ) -> Options:
        """Resolve a requirement list into an options mapping.

        Keys are resolved one after the other so later factories see earlier
        values. Seeded keys are never resolved or overwritten, except the
        container key, which always maps to this container.

        Once a key turns out to be missing, the remaining keys are only looked
        up, not produced, so the whole list is checked without running
        factories or constructors for a target that cannot be built. A bound
        dependency failing on its own missing requirements counts as such a
        fault too.

        Args:
            target: The class or callable the options are for, used in errors.
            requirements: Keys to resolve, in order.
            seed: Values that take priority over resolved ones.

        Returns:
            Options holding the container, the seed values and every resolved key.

        Raises:
            MissingDependencyError: Listing every key no module could provide,
                with the error of a failing bound dependency as ``nested``.
        """
        options = Options({CONTAINER_KEY: self})
        for key, value in (seed or {}).items():
            if key != CONTAINER_KEY:
                options[key] = value

        missing = []
        nested: Optional[MissingDependencyError] = None
        for key in requirements:
            if key in options:
                continue

            found = self.find_binding(key)
            if found is None:
                missing.append(key)
                continue
            if missing or nested is not None:
                continue

            module, binding = found
            try:
                options[key] = await self._resolver.produce(binding, self, options)
            except MissingDependencyError as e:
                nested = e
                continue
            if self._settings.log_resolutions:
                logger.debug("Resolved %s from %s", describe_key(key), getattr(module, "name", module))

        if missing:
            raise MissingDependencyError(target, missing, nested=nested) from nested
        if nested is not None:
            raise nested
        return options

    def find_binding(self, key: Any) -> Optional[Tuple[IModule, Binding]]:
        """Return the first module, in registration order, that binds the key.

        Args:
            key: The dependency key.

        Returns:
            Tuple of (module, binding), or None if no module binds the key.
        """
        for module in self._modules:
            binding = module.get(key)
            if binding is not None:
                return module, binding
        return None

    def __repr__(self) -> str:
        return f"<Container {self._state.value} modules={len(self._modules)}>"
