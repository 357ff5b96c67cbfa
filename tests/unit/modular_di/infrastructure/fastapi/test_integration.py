"""Unit tests for FastAPI integration helpers."""

import inspect

import pytest
from fastapi import FastAPI

from modular_di.application import Container, MapModule, MetadataRegistry
from modular_di.domain import ContainerState, UsageError
from modular_di.infrastructure.fastapi_integration.integration import (
    container_lifespan,
    create_fastapi_dependency,
)
from modular_di.infrastructure.testing import TestContainer


class TestCreateFastapiDependency:
    """Test cases for create_fastapi_dependency."""

    def test_returns_coroutine_function(self):
        """Test that the dependency is an async callable."""
        dependency = create_fastapi_dependency(Container(), "foo")

        assert inspect.iscoroutinefunction(dependency)

    @pytest.mark.asyncio
    async def test_dependency_creates_target(self):
        registry = MetadataRegistry()
        container = Container(MapModule({"foo": 3}), registry=registry)
        await container.configure()

        class Bar:
            def __init__(self, options):
                self.foo = options.foo

        registry.register_requirements(Bar, ["foo"])
        dependency = create_fastapi_dependency(container, Bar)

        bar = await dependency()

        assert isinstance(bar, Bar)
        assert bar.foo == 3

    @pytest.mark.asyncio
    async def test_dependency_passes_seed_options(self):
        container = Container(MapModule({"foo": 3}), registry=MetadataRegistry())
        await container.configure()

        dependency = create_fastapi_dependency(container, "foo", {"foo": 7})

        assert await dependency() == 7

    @pytest.mark.asyncio
    async def test_dependency_requires_configured_container(self):
        dependency = create_fastapi_dependency(Container(), "foo")

        with pytest.raises(UsageError):
            await dependency()

    @pytest.mark.asyncio
    async def test_dependency_honours_class_overrides(self):
        """Test that a class mocked in a TestContainer reaches the route dependency."""

        class UserService:
            def __init__(self, options):
                raise ConnectionError("no database in tests")

        fake = object()
        container = TestContainer(registry=MetadataRegistry())
        container.mock_instance(UserService, fake)
        await container.configure()
        dependency = create_fastapi_dependency(container, UserService)

        assert await dependency() is fake


class TestContainerLifespan:
    """Test cases for container_lifespan."""

    @pytest.mark.asyncio
    async def test_lifespan_configures_container(self):
        container = Container(MapModule({"foo": 3}), registry=MetadataRegistry())
        app = FastAPI()
        lifespan = container_lifespan(container)

        async with lifespan(app):
            assert container.state == ContainerState.CONFIGURED
            assert app.state.di_container is container

    @pytest.mark.asyncio
    async def test_lifespan_forwards_options(self):
        class UrlModule(MapModule):
            async def setup(self, options):
                self.bind("url").to_instance(options["url"])

        container = Container(UrlModule(), registry=MetadataRegistry())
        app = FastAPI()

        async with container_lifespan(container, {"url": "sqlite://"})(app):
            assert await container.get("url") == "sqlite://"
