import inspect
from typing import Any, List, Optional, Sequence

from modular_di.domain.keys import describe_key


def _describe_target(target: Any) -> str:
    if inspect.isclass(target) or not callable(target):
        return describe_key(target)
    return getattr(target, "__qualname__", repr(target))


class DIException(Exception):
    """Base exception for DI-related errors."""


class MissingDependencyError(DIException):
    """Raised when required keys cannot be resolved by any module.

    Every unresolved key of a single resolution is reported at once, in
    declaration order. The target is never constructed.

    When a bound dependency could not be produced because its own
    requirements are missing, that inner error is kept as ``nested``.

    Attributes:
        target: The class, callable or key whose requirements were being resolved.
        missing_keys: The keys no module could provide.
        nested: The error of a bound dependency that failed for the same reason, if any.
    """

    def __init__(
        self,
        target: Any,
        missing_keys: Sequence[Any],
        nested: Optional["MissingDependencyError"] = None,
    ) -> None:
        self.target = target
        self.missing_keys: List[Any] = list(missing_keys)
        self.nested = nested
        keys = ", ".join(describe_key(key) for key in self.missing_keys)
        message = f"Cannot create {_describe_target(target)}: missing dependencies [{keys}]"
        if nested is not None:
            message += f"; {nested}"
        super().__init__(message)


class ProductionError(DIException):
    """Raised when a constructor or factory body fails while producing a value.

    The original exception is kept as ``cause`` and as ``__cause__``.

    Attributes:
        key: The key whose binding failed.
        cause: The exception raised by the constructor or factory.
    """

    def __init__(self, key: Any, cause: BaseException) -> None:
        self.key = key
        self.cause = cause
        message = f"Failed to produce {describe_key(key)}: {type(cause).__name__}: {cause}"
        super().__init__(message)


class UsageError(DIException):
    """Raised when the container or a module is used incorrectly.

    This occurs when:
    - Calling create before the container is configured.
    - Configuring a container twice, or a module that previously failed.
    - Resolving a key that was bound without a production strategy.
    """


class CircularDependencyError(DIException):
    """Raised when a class is created again while its own creation is in progress.

    Attributes:
        dependency_chain: List of classes involved in the cycle.
    """

    def __init__(self, dependency_chain: Sequence[Any]) -> None:
        self.dependency_chain = list(dependency_chain)
        message = f"Circular dependency detected: {' -> '.join(_describe_target(cls) for cls in self.dependency_chain)}"
        super().__init__(message)


class InvalidKeyError(DIException):
    """Raised for values that cannot act as dependency keys.

    Attributes:
        key: The rejected value.
    """

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Invalid dependency key: {key!r}. Expected a class, a non-empty string or a Token")


class InvalidBindingError(DIException):
    """Raised when a binding strategy receives an unusable provider.

    This occurs when:
    - Binding a non-class with to_constructor.
    - Binding a non-callable with to_factory.
    """


class MissingFieldError(DIException):
    """Raised when an injected field is read but was never populated.

    Attributes:
        owner: The instance the field was read from.
        attribute: The attribute name.
    """

    def __init__(self, owner: Any, attribute: str) -> None:
        self.owner = owner
        self.attribute = attribute
        super().__init__(f"Injected field '{attribute}' of {type(owner).__name__} was not populated")
