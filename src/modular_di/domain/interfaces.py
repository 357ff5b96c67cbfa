from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional, Sequence, Tuple

from modular_di.domain.models import Binding, Options

if TYPE_CHECKING:
    from modular_di.application.binder import Binder


class IModule(ABC):
    """Abstract interface for an ordered collection of bindings."""

    @abstractmethod
    async def configure(self, options: Optional[Mapping[Any, Any]] = None) -> None:
        """Populate the module's bindings. Runs once.

        Args:
            options: Configuration options forwarded by the container.
        """

    @abstractmethod
    def bind(self, key: Any) -> "Binder":
        """Start (or restart) the binding for a key.

        Args:
            key: The dependency key to bind.

        Returns:
            A fluent binder used to choose the production strategy.
        """

    @abstractmethod
    def get(self, key: Any) -> Optional[Binding]:
        """Return the binding for a key, or None when this module does not bind it."""

    @abstractmethod
    def keys(self) -> Iterator[Any]:
        """Iterate over the bound keys in binding order."""


class IContainer(ABC):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    async def configure(self, options: Optional[Mapping[Any, Any]] = None) -> None:
        """Configure every owned module in registration order.

        Args:
            options: Configuration options forwarded to each module.
        """

    @abstractmethod
    async def create(self, target: Any, options: Optional[Mapping[Any, Any]] = None) -> Any:
        """Create an instance of a class, or resolve a key, with all requirements injected.

        Args:
            target: A class to construct, or a key to resolve.
            options: Seed values; they take priority over resolved values.
        """

    @abstractmethod
    async def get(self, key: Any, options: Optional[Mapping[Any, Any]] = None) -> Any:
        """Resolve the value bound to a single key.

        Args:
            key: The dependency key.
            options: Seed values handed to factories.
        """

    @abstractmethod
    async def build_options(
        self,
        target: Any,
        requirements: Sequence[Any],
        seed: Optional[Mapping[Any, Any]] = None,
    ) -> Options:
        """Resolve a requirement list into an options mapping.

        Args:
            target: The class or callable the options are for, used in errors.
            requirements: Keys to resolve, in order.
            seed: Values that take priority over resolved ones.

        Raises:
            MissingDependencyError: Listing every key no module could provide.
        """

    @abstractmethod
    def find_binding(self, key: Any) -> Optional[Tuple[IModule, Binding]]:
        """Return the first module (in registration order) binding the key, with its binding."""


class IResolver(ABC):
    """Abstract interface for producing values from bindings."""

    @abstractmethod
    async def produce(self, binding: Binding, container: IContainer, options: Options) -> Any:
        """Run a binding's production strategy.

        Args:
            binding: The binding to run.
            container: The container driving the resolution.
            options: The consumer's resolved options so far.

        Returns:
            The produced value.

        Raises:
            UsageError: If the binding is unfinished.
            ProductionError: If the constructor or factory body fails.
        """
