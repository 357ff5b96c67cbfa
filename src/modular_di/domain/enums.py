from enum import Enum


class StrategyKind(str, Enum):
    """Defines how a binding produces its value.

    Attributes:
        CONSTRUCTOR: Value is built by the container from a class, resolving its requirements first.
        FACTORY: Value is returned by a callable receiving the resolved options.
        INSTANCE: Value is returned unchanged on every resolution.
    """

    CONSTRUCTOR = "constructor"
    FACTORY = "factory"
    INSTANCE = "instance"

    def __str__(self) -> str:
        return self.value


class ContainerState(str, Enum):
    """Lifecycle states of a container. There is no way back to UNCONFIGURED."""

    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    CONFIGURED = "configured"

    def __str__(self) -> str:
        return self.value


class ModuleState(str, Enum):
    """Lifecycle states of a module."""

    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    CONFIGURED = "configured"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value
