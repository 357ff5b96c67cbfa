from typing import Any, Callable, Optional, Tuple

from modular_di.application import Container, MetadataRegistry, Module
from modular_di.config import ContainerSettings
from modular_di.domain import ContainerState


class OverrideModule(Module):
    """Module holding test overrides. Bindings are added directly, outside ``setup``."""

    def clear(self) -> None:
        """Remove every override."""
        self._bindings.clear()


class TestContainer(Container):
    """DI container for testing with dependency override capabilities.

    Overrides live in a module registered before every other module, so an
    override always wins over the production binding of the same key. Overrides
    can be added before or after ``configure``.

    This is useful for:
    - Mocking external services (databases, APIs, etc.)
    - Replacing implementations with test doubles
    - Isolating tests from shared state

    Attributes:
        _overrides: The override module, first in registration order.

    Example:
        >>> async def test_user_service():
        ...     async with TestContainer(ProductionModule()) as container:
        ...         mock_email = MockEmailService()
        ...         container.mock_instance(EmailService, mock_email)
        ...
        ...         # UserService will get mocked EmailService
        ...         service = await container.create(UserService)
        ...         await service.send_welcome_email(user)
        ...         assert mock_email.send_called
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(
        self,
        *modules: Module,
        settings: Optional[ContainerSettings] = None,
        registry: Optional[MetadataRegistry] = None,
    ) -> None:
        """Initialize the test container.

        Args:
            *modules: Production modules, after the override module in priority.
            settings: Runtime switches.
            registry: Declaration table.
        """
        self._overrides = OverrideModule()
        super().__init__(self._overrides, *modules, settings=settings, registry=registry)

    def mock_instance(self, key: Any, value: Any) -> None:
        """Replace a dependency with a fixed value.

        Example:
            >>> container.mock_instance(DatabaseConnection, mock_db)
            >>> service = await container.create(UserService)
            >>> assert service.db is mock_db
        """
        self._overrides.bind(key).to_instance(value)

    def mock_factory(self, key: Any, factory: Callable[..., Any]) -> None:
        """Replace a dependency with a factory called with the resolved options.

        Example:
            >>> container.mock_factory("request_id", lambda options: "req-1")
        """
        self._overrides.bind(key).to_factory(factory)

    def mock_constructor(self, key: Any, cls: type) -> None:
        """Replace a dependency with another class created by the container.

        Example:
            >>> container.mock_constructor(CacheService, InMemoryCacheService)
        """
        self._overrides.bind(key).to_constructor(cls)

    def reset_overrides(self) -> None:
        """Remove all overrides and restore the production bindings."""
        self._overrides.clear()

    async def __aenter__(self) -> "TestContainer":
        """Configure the container on entry if needed."""
        if self.state == ContainerState.UNCONFIGURED:
            await self.configure()
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> bool:
        """Drop overrides on exit."""
        self.reset_overrides()
        return False


def create_mock_container(*values: Tuple[Any, Any]) -> TestContainer:
    """Create a test container with pre-configured mock values.

    The container still needs ``configure`` (or ``async with``) before use.

    Args:
        *values: Tuples of (key, mock_value).

    Returns:
        TestContainer with the values bound as overrides.

    Example:
        >>> container = create_mock_container(
        ...     (DatabaseConnection, mock_db),
        ...     ("cache", mock_cache),
        ... )
        >>> async with container:
        ...     service = await container.create(UserService)
    """
    container = TestContainer()

    for key, value in values:
        container.mock_instance(key, value)

    return container
