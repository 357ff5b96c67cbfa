"""
Container settings with environment variable support.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ContainerSettings(BaseSettings):
    """Runtime switches of a container.

    Every field can be set through a ``MODULAR_DI_`` prefixed environment
    variable, e.g. ``MODULAR_DI_DETECT_CYCLES=false``.
    """

    detect_cycles: bool = Field(default=True, description="Raise on recursive constructor and key resolution cycles.")
    populate_fields: bool = Field(default=True, description="Copy resolved options onto injected fields.")
    log_resolutions: bool = Field(default=False, description="Log every resolved key at DEBUG level.")

    model_config = {
        "env_prefix": "MODULAR_DI_",
    }
