"""
Field and model metadata registry.

The model metaclass registers each class once, at class creation. Everything
else reads through the accessor functions here, which tolerate ``None`` and
unregistered classes (treated as having no fields and no config) so that
traversals can descend into plain values without a model type.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import ModelConfig
from .errors import ConfigurationError
from .fields import FieldInfo

logger = logging.getLogger(__name__)

Validator = Callable[..., Any]

_FIELDS: Dict[type, Dict[str, FieldInfo]] = {}
_STORED_NAMES: Dict[type, Dict[str, FieldInfo]] = {}
_MODELS: Dict[type, Optional[ModelConfig]] = {}
_VALIDATORS: Dict[type, Dict[str, List[Validator]]] = {}


def register_model(
    cls: type,
    fields: Mapping[str, FieldInfo],
    config: Optional[ModelConfig] = None,
    validators: Optional[Mapping[str, List[Validator]]] = None,
) -> None:
    """Register (or re-register) the metadata of a model class.

    ``validators`` holds class-level validators keyed by field, run after
    the validators declared inline on each field.
    """
    owners: Dict[str, FieldInfo] = {}
    for key, field in fields.items():
        stored_name = field.name or key
        other = owners.get(stored_name)
        if other is not None:
            raise ConfigurationError(
                f"{cls.__name__}: fields '{other.key}' and '{key}' share the stored name '{stored_name}'"
            )
        owners[stored_name] = field
    stored = {name: field for name, field in owners.items() if field.name is not None}

    extra_validators = dict(validators or {})
    unknown = set(extra_validators) - set(fields)
    if unknown:
        raise ConfigurationError(
            f"{cls.__name__}: validators registered for undeclared fields {sorted(unknown)}"
        )

    _FIELDS[cls] = dict(fields)
    _STORED_NAMES[cls] = stored
    _MODELS[cls] = config
    _VALIDATORS[cls] = {
        key: list(field.validators) + list(extra_validators.get(key, ()))
        for key, field in fields.items()
    }
    logger.debug("Registered model %s with fields %s", cls.__qualname__, list(fields))


def is_model(cls: Any) -> bool:
    return isinstance(cls, type) and cls in _FIELDS


def get_fields(cls: Optional[type]) -> Dict[str, FieldInfo]:
    """Fields of ``cls`` keyed by logical key, in declaration order."""
    return _FIELDS.get(cls, {}) if cls is not None else {}


def get_stored_names(cls: Optional[type]) -> Dict[str, FieldInfo]:
    """Fields of ``cls`` that declare an explicit stored name, keyed by it."""
    return _STORED_NAMES.get(cls, {}) if cls is not None else {}


def get_field(cls: Optional[type], key: str) -> Optional[FieldInfo]:
    """Look up a field by logical key, falling back to its explicit stored name."""
    field = get_fields(cls).get(key)
    if field is None:
        field = get_stored_names(cls).get(key)
    return field


def get_model(cls: Optional[type]) -> Optional[ModelConfig]:
    return _MODELS.get(cls) if cls is not None else None


def get_field_validators(cls: Optional[type], key: str) -> List[Validator]:
    if cls is None:
        return []
    return list(_VALIDATORS.get(cls, {}).get(key, ()))


def get_all_field_validators(cls: Optional[type]) -> Dict[str, List[Validator]]:
    if cls is None:
        return {}
    return {key: list(validators) for key, validators in _VALIDATORS.get(cls, {}).items()}


__all__ = [
    "Validator",
    "register_model",
    "is_model",
    "get_fields",
    "get_stored_names",
    "get_field",
    "get_model",
    "get_field_validators",
    "get_all_field_validators",
]
