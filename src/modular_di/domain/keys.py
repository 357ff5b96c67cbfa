import inspect
from enum import Enum
from typing import Any, Optional

CONTAINER_KEY = "container"


class KeyKind(str, Enum):
    """The three flavours of dependency keys.

    Attributes:
        TYPE: A class reference, compared by identity.
        NAME: A textual name, compared by value.
        TOKEN: An opaque Token, compared by identity.
    """

    TYPE = "type"
    NAME = "name"
    TOKEN = "token"

    def __str__(self) -> str:
        return self.value


class Token:
    """Opaque, unique dependency key.

    Two tokens are never equal unless they are the same object, even when
    created with the same description.

    Example:
        >>> DATABASE_URL = Token("database_url")
        >>> module.bind(DATABASE_URL).to_instance("postgres://localhost/app")
    """

    __slots__ = ("description",)

    def __init__(self, description: Optional[str] = None) -> None:
        self.description = description

    def __repr__(self) -> str:
        return f"Token({self.description or hex(id(self))})"


def key_kind(key: Any) -> KeyKind:
    """Classify a dependency key.

    Args:
        key: The key to classify.

    Returns:
        The KeyKind of the key.

    Raises:
        InvalidKeyError: If the key is not a class, a non-empty string or a Token.
    """
    # Imported here to keep keys importable from exceptions without a cycle.
    from modular_di.domain.exceptions import InvalidKeyError

    if inspect.isclass(key):
        return KeyKind.TYPE
    if isinstance(key, Token):
        return KeyKind.TOKEN
    if isinstance(key, str) and key:
        return KeyKind.NAME
    raise InvalidKeyError(key)


def describe_key(key: Any) -> str:
    """Return a short human readable label for a key, used in messages and logs."""
    if inspect.isclass(key):
        return key.__name__
    return repr(key)
