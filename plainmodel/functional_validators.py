"""
Functional validators for plainmodel.

Provides the @field_validator decorator to declare validators inside the
class body instead of passing them to Field(validators=...).

Example:
    from plainmodel import BaseModel, field_validator

    class User(BaseModel):
        name: str
        email: str

        @field_validator('name', 'email')
        async def not_blank(value, instance):
            if not value or not value.strip():
                raise ValueError('must not be blank')

A decorated validator receives ``(value, instance)`` like any other
validator; it is not bound to the instance.
"""

from typing import Any, Callable, Dict, List, Mapping

from .errors import ConfigurationError


def field_validator(*fields: str) -> Callable:
    """Decorator registering a validator for one or more fields.

    Args:
        *fields: Field keys this validator applies to.
    """
    if not fields:
        raise ConfigurationError('field_validator requires at least one field name')

    def decorator(func: Callable) -> Callable:
        target = func.__func__ if isinstance(func, staticmethod) else func
        if not callable(target):
            raise ConfigurationError(f"Validator {func!r} is not callable")
        target.__validator_fields__ = fields
        return func
    return decorator


def collect_field_validators(namespace: Mapping[str, Any]) -> Dict[str, List[Callable]]:
    """Gather decorated validators from a class namespace, keyed by field."""
    collected: Dict[str, List[Callable]] = {}
    for attr_name, raw_attr in namespace.items():
        if attr_name.startswith('__'):
            continue
        func = raw_attr.__func__ if isinstance(raw_attr, staticmethod) else raw_attr
        validator_fields = getattr(func, '__validator_fields__', None)
        if not validator_fields or not callable(func):
            continue
        for field_name in validator_fields:
            collected.setdefault(field_name, []).append(func)
    return collected


__all__ = ["field_validator", "collect_field_validators"]
