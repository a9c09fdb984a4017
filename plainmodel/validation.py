"""
Shallow asynchronous validation of model instances.

Validators are ``validator(value, instance)`` callables, usually coroutines,
that raise when the value is invalid; ``str(exception)`` is reported as the
message. All validators selected by a call run concurrently. Validators of
one field never affect the outcome for another field.

Nested models are not validated automatically.
"""

import asyncio
import inspect
import logging
from typing import Any, List, Optional, Sequence

from .registry import Validator, get_all_field_validators, get_field_validators

logger = logging.getLogger(__name__)


class FieldError:
    """A failed field and the message of its first failing validator."""

    __slots__ = ('field', 'message')

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message

    def __repr__(self) -> str:
        return f"FieldError(field={self.field!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FieldError)
            and self.field == other.field
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash(('FieldError', self.field, self.message))

    def to_dict(self) -> dict:
        return {'field': self.field, 'message': self.message}


async def _invoke(validator: Validator, value: Any, instance: Any) -> None:
    result = validator(value, instance)
    if inspect.isawaitable(result):
        await result


async def _run_field(
    field: str, validators: Sequence[Validator], instance: Any
) -> Optional[FieldError]:
    value = getattr(instance, field, None)
    outcomes = await asyncio.gather(
        *(_invoke(validator, value, instance) for validator in validators),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if outcome is None:
            continue
        if not isinstance(outcome, Exception):
            raise outcome
        logger.debug("Validation failed for %s.%s: %s", type(instance).__name__, field, outcome)
        return FieldError(field, str(outcome))
    return None


async def validate_field(instance: Any, field: str) -> Optional[str]:
    """Run the validators of one field; return the first failure's message."""
    validators = get_field_validators(type(instance), field)
    error = await _run_field(field, validators, instance)
    return error.message if error is not None else None


async def validate_all(instance: Any) -> List[FieldError]:
    """Run the validators of every field; return one error per failing field.

    Errors are listed in field declaration order.
    """
    groups = get_all_field_validators(type(instance))
    results = await asyncio.gather(
        *(_run_field(field, validators, instance) for field, validators in groups.items())
    )
    return [error for error in results if error is not None]


__all__ = ["FieldError", "validate_field", "validate_all"]
