"""
ModelConfig for plainmodel - per-class serialization configuration.

Declare ``model_config`` on a model class to control how its keys are
written to plain data. Subclasses inherit the nearest base's config.

Example:
    from plainmodel import BaseModel, ModelConfig, NamingCase

    class User(BaseModel):
        model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)

        user_id: int
        full_name: str

    User(user_id=1, full_name="Ann").to_plain()
    # {'userId': 1, 'fullName': 'Ann'}

This module also owns the process-wide default naming case, the convention
incoming plain keys are assumed to use when a model is deserialized.
"""

import logging
from typing import Any, Optional, TypedDict

from .errors import ConfigurationError
from .naming import NamingCase, resolve_naming_case

logger = logging.getLogger(__name__)


class ModelConfig(TypedDict, total=False):
    """Configuration dictionary for BaseModel."""

    rename: NamingCase
    """Naming case applied to keys without an explicit stored name when
    serializing. ``NamingCase.NON_CASE`` also disables key conversion on
    deserialization. Default: unset (keys are written as-is)."""


CONFIG_DEFAULTS: ModelConfig = {}

_KNOWN_KEYS = frozenset(ModelConfig.__annotations__)


def get_config_value(config: Optional[ModelConfig], key: str, default: Any = None) -> Any:
    """Get a configuration value with fallback to defaults."""
    if config is None:
        return CONFIG_DEFAULTS.get(key, default)
    return config.get(key, CONFIG_DEFAULTS.get(key, default))


def check_model_config(config: Any) -> Optional[ModelConfig]:
    """Validate a ``model_config`` declaration and normalize its values."""
    if config is None:
        return None
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"model_config must be a ModelConfig dict, got {type(config).__name__}"
        )
    unknown = set(config) - _KNOWN_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown model_config keys: {sorted(unknown)}")
    checked = ModelConfig(**config)
    if 'rename' in checked:
        checked['rename'] = resolve_naming_case(checked['rename'])
    return checked


# Process-wide default for incoming keys. Resolved once per deserialize call.
_default_naming_case: NamingCase = NamingCase.SNAKE_CASE


def get_default_naming_case() -> NamingCase:
    return _default_naming_case


def set_default_naming_case(case: NamingCase) -> NamingCase:
    """Change the naming case assumed for incoming plain keys.

    Affects every subsequent deserialization in the process that does not
    pass an explicit ``naming_case``. Returns the previous value.
    """
    global _default_naming_case
    previous = _default_naming_case
    _default_naming_case = resolve_naming_case(case)
    logger.debug("Default naming case changed from %s to %s", previous.value, _default_naming_case.value)
    return previous


__all__ = [
    "ModelConfig",
    "CONFIG_DEFAULTS",
    "get_config_value",
    "check_model_config",
    "get_default_naming_case",
    "set_default_naming_case",
]
