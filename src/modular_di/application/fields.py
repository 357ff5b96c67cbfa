"""Application layer - Injected field population."""

from typing import Any, Mapping, Optional

from modular_di.application.metadata import MetadataRegistry, default_registry
from modular_di.domain import MissingFieldError


def populate_fields(instance: Any, options: Mapping[Any, Any], registry: Optional[MetadataRegistry] = None) -> None:
    """Copy resolved options onto the attributes declared with ``@injects``.

    Attributes whose key is not in ``options`` are left untouched; reading them
    through ``must_exist`` reports the problem.

    Args:
        instance: The freshly created object.
        options: The resolved options it was created with.
        registry: Table the field declarations are read from.
    """
    for attribute, key in (registry or default_registry).fields_of(type(instance)).items():
        if key in options:
            setattr(instance, attribute, options[key])


def must_exist(instance: Any, attribute: str) -> Any:
    """Read an injected attribute, failing when it was never populated.

    Args:
        instance: The owning object.
        attribute: The attribute name.

    Returns:
        The attribute value.

    Raises:
        MissingFieldError: If the attribute is unset or None.
    """
    value = getattr(instance, attribute, None)
    if value is None:
        raise MissingFieldError(instance, attribute)
    return value
