from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from modular_di.domain.enums import StrategyKind
from modular_di.domain.exceptions import UsageError
from modular_di.domain.keys import describe_key


class Binding(BaseModel):
    """Value object pairing a key with its production strategy.

    A binding with no ``kind`` is unfinished: ``bind(key)`` was called without
    any ``to_*`` step. Resolving it is a usage error.

    Attributes:
        key: The key this binding satisfies.
        kind: How the value is produced.
        provider: The class, factory callable or fixed instance.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: Any = Field(..., description="The dependency key satisfied by this binding.")
    kind: Optional[StrategyKind] = Field(default=None, description="The production strategy.")
    provider: Any = Field(default=None, description="Class, factory or instance backing the strategy.")

    @property
    def is_finished(self) -> bool:
        """Whether a production strategy has been chosen."""
        return self.kind is not None

    def __str__(self) -> str:
        if self.kind is None:
            return f"{describe_key(self.key)} -> <unfinished>"
        provider_name = getattr(self.provider, "__qualname__", None) or repr(self.provider)
        return f"{describe_key(self.key)} -> {provider_name} ({self.kind.value})"


class ProviderDeclaration(BaseModel):
    """Marks a map entry as a factory rather than a fixed value.

    Attributes:
        factory: Callable receiving the resolved options.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    factory: Callable[..., Any] = Field(..., description="Factory invoked with the resolved options.")


class InstanceDeclaration(BaseModel):
    """Marks a map entry as a fixed value, even when the value is a class.

    Attributes:
        value: The value returned on every resolution.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = Field(..., description="The fixed value.")


_MAPPING_METHODS = frozenset({"get", "keys", "items", "values"})


class Options(Mapping):
    """Resolved-options mapping handed to constructors and factories.

    Keys are the dependency keys themselves. Name keys can also be read as
    attributes, so ``options["foo"]`` and ``options.foo`` are equivalent.
    The container is always available under ``"container"``.

    The only names that cannot be read as attributes are the mapping methods
    ``get``, ``keys``, ``items`` and ``values``. While an option with one of
    those names is present, reading the attribute raises ``UsageError``
    instead of returning the method; read such options as ``options["values"]``.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[Any, Any]] = None) -> None:
        self._values: Dict[Any, Any] = dict(values or {})

    def __getattribute__(self, name: str) -> Any:
        if name in _MAPPING_METHODS and name in object.__getattribute__(self, "_values"):
            raise UsageError(
                f"Option {name!r} is shadowed by the Options.{name}() method; read it as options[{name!r}]"
            )
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"No resolved option named {name!r}") from None

    def __getitem__(self, key: Any) -> Any:
        return self._values[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        # Only the container writes, while assembling.
        self._values[key] = value

    def __contains__(self, key: Any) -> bool:
        try:
            return key in self._values
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Options):
            return self._values == other._values
        if isinstance(other, dict):
            return self._values == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{describe_key(key)}: {value!r}" for key, value in self._values.items())
        return f"Options({{{items}}})"
