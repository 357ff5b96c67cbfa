import inspect
import logging
from typing import Any, Optional

from modular_di.application.metadata import MetadataRegistry, default_registry
from modular_di.domain import (
    Binding,
    DIException,
    IContainer,
    IResolver,
    Options,
    ProductionError,
    StrategyKind,
    UsageError,
    describe_key,
)

logger = logging.getLogger(__name__)


class DependencyResolver(IResolver):
    """Runs the production strategy of a binding.

    - INSTANCE bindings return their value unchanged.
    - CONSTRUCTOR bindings recurse into ``container.create``.
    - FACTORY bindings call the factory with resolved options and await the
      result when it is awaitable. A factory with declared requirements gets
      them resolved first, seeded with the consumer's options.

    Failures of the constructor or factory body are wrapped in
    ``ProductionError``; DI errors pass through unchanged.

    Attributes:
        _registry: Table the factory requirement lists are read from.
    """

    def __init__(self, registry: Optional[MetadataRegistry] = None) -> None:
        self._registry = registry or default_registry

    async def produce(self, binding: Binding, container: IContainer, options: Options) -> Any:
        """Produce the value of a binding.

        Args:
            binding: The binding to run.
            container: The container driving the resolution.
            options: The consumer's resolved options so far.

        Returns:
            The produced value.

        Raises:
            UsageError: If the binding has no production strategy.
            MissingDependencyError: If a factory's own requirements cannot be resolved.
            ProductionError: If the constructor or factory body fails.

        Example:
            >>> binding = module.get("foo")
            >>> value = await resolver.produce(binding, container, options)
        """
        if binding.kind is None:
            raise UsageError(f"Key {describe_key(binding.key)} was bound without a production strategy")

        if binding.kind == StrategyKind.INSTANCE:
            return binding.provider

        try:
            if binding.kind == StrategyKind.CONSTRUCTOR:
                return await container.create(binding.provider)

            # StrategyKind.FACTORY
            factory = binding.provider
            requirements = self._registry.requirements_of(factory)
            if requirements:
                options = await container.build_options(factory, requirements, options)
            value = factory(options)
            if inspect.isawaitable(value):
                value = await value
            return value

        except DIException:
            raise
        except Exception as e:
            logger.debug("Production of %s failed: %r", describe_key(binding.key), e)
            raise ProductionError(binding.key, e) from e
