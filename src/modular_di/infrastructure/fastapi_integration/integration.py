import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Mapping, Optional

from fastapi import FastAPI

from modular_di.domain import IContainer

logger = logging.getLogger(__name__)


def create_fastapi_dependency(
    container: IContainer,
    target: Any,
    options: Optional[Mapping[Any, Any]] = None,
) -> Callable[[], Awaitable[Any]]:
    """Create a FastAPI Depends() callable that creates the target from the container.

    Each request triggers a fresh ``container.create(target)``; values bound
    with ``to_instance`` are shared, factories run again.

    Args:
        container: The configured container.
        target: The class to create, or the key to resolve.
        options: Seed values passed to every ``create`` call.

    Returns:
        An async callable that FastAPI can use with Depends().

    Example:
        >>> get_users = create_fastapi_dependency(container, UserService)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_users)):
        ...     return await service.all()
    """

    async def dependency() -> Any:
        """Create the target from the container."""
        return await container.create(target, options)

    return dependency


def container_lifespan(
    container: IContainer,
    options: Optional[Mapping[Any, Any]] = None,
) -> Callable[[FastAPI], Any]:
    """Build a FastAPI lifespan that configures the container on startup.

    The container is stored on ``app.state.di_container``.

    Args:
        container: The container to configure.
        options: Configuration options forwarded to every module.

    Returns:
        A lifespan callable for ``FastAPI(lifespan=...)``.

    Example:
        >>> container = Container(DatabaseModule(), ServicesModule())
        >>> app = FastAPI(lifespan=container_lifespan(container, {"dsn": DSN}))
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await container.configure(options)
        app.state.di_container = container
        logger.info("DI container ready for %s", app.title)
        yield

    return lifespan
