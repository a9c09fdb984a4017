"""
Field definition for plainmodel.

Provides the Field() function for attaching serialization metadata to a
model attribute: stored name, nested model type, ignore policy, custom
transform and validators.

Example:
    from typing import Annotated
    from plainmodel import BaseModel, Field, Ignore

    class User(BaseModel):
        user_id: int
        full_name: str = Field(name="fullName")
        password: Annotated[str, Field(ignore=Ignore.SERIALIZE)] = ""
"""

import copy
from enum import Enum, Flag
from typing import Any, Callable, List, Optional, Union

from .errors import ConfigurationError

_MISSING = object()  # Sentinel for unset defaults


class Ignore(Flag):
    """Directions in which a field is dropped."""

    NEVER = 0
    SERIALIZE = 1
    DESERIALIZE = 2
    ALWAYS = SERIALIZE | DESERIALIZE


class TransformType(Enum):
    """Direction tag passed to field transforms."""

    TO_PLAIN = "to_plain"
    TO_MODEL = "to_model"
    CLONE = "clone"


def _coerce_ignore(ignore: Union[Ignore, bool]) -> Ignore:
    if isinstance(ignore, Ignore):
        return ignore
    if isinstance(ignore, bool):
        return Ignore.ALWAYS if ignore else Ignore.NEVER
    raise ConfigurationError(
        f"ignore must be an Ignore flag or bool, got {type(ignore).__name__}"
    )


class FieldInfo:
    """Stores field metadata.

    This is the object returned by Field() and can be used either as the
    attribute default or inside Annotated types.
    """
    __slots__ = (
        'key', 'default', 'default_factory', 'name', 'type', 'ignore',
        'transform', 'validators', 'annotation', 'description',
    )

    def __init__(
        self,
        default: Any = _MISSING,
        *,
        default_factory: Optional[Callable[[], Any]] = None,
        name: Optional[str] = None,
        type: Optional[type] = None,
        ignore: Union[Ignore, bool] = Ignore.NEVER,
        transform: Optional[Callable[[Any, TransformType], Any]] = None,
        validators: Optional[List[Callable[..., Any]]] = None,
        annotation: Any = None,
        description: Optional[str] = None,
    ):
        if default is not _MISSING and default_factory is not None:
            raise ConfigurationError('Cannot specify both default and default_factory')
        if name is not None and (not isinstance(name, str) or not name):
            raise ConfigurationError(f"Stored name must be a non-empty str, got {name!r}")
        if transform is not None and not callable(transform):
            raise ConfigurationError("transform must be callable")
        for validator in validators or ():
            if not callable(validator):
                raise ConfigurationError(f"Validator {validator!r} is not callable")

        self.key: Optional[str] = None
        self.default = default
        self.default_factory = default_factory
        self.name = name
        self.type = type
        self.ignore = _coerce_ignore(ignore)
        self.transform = transform
        self.validators = list(validators or ())
        self.annotation = annotation
        self.description = description

    @property
    def stored_name(self) -> Optional[str]:
        """Key this field occupies in plain data."""
        return self.name or self.key

    @property
    def ignore_on_serialize(self) -> bool:
        return bool(self.ignore & Ignore.SERIALIZE)

    @property
    def ignore_on_deserialize(self) -> bool:
        return bool(self.ignore & Ignore.DESERIALIZE)

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING or self.default_factory is not None

    def get_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is _MISSING:
            return None
        if isinstance(self.default, (list, dict, set)):
            return copy.deepcopy(self.default)
        return self.default

    def copy(self) -> 'FieldInfo':
        clone = FieldInfo.__new__(FieldInfo)
        for slot in FieldInfo.__slots__:
            setattr(clone, slot, getattr(self, slot))
        clone.validators = list(self.validators)
        return clone

    def __repr__(self) -> str:
        parts = [f"key={self.key!r}"]
        if self.name is not None:
            parts.append(f"name={self.name!r}")
        if self.default is not _MISSING:
            parts.append(f"default={self.default!r}")
        if self.type is not None:
            parts.append(f"type={self.type.__name__}")
        if self.ignore:
            parts.append(f"ignore={self.ignore}")
        if self.transform is not None:
            parts.append("transform=...")
        return f"FieldInfo({', '.join(parts)})"


def Field(
    default: Any = _MISSING,
    *,
    default_factory: Optional[Callable[[], Any]] = None,
    name: Optional[str] = None,
    type: Optional[type] = None,
    ignore: Union[Ignore, bool] = Ignore.NEVER,
    transform: Optional[Callable[[Any, TransformType], Any]] = None,
    validators: Optional[List[Callable[..., Any]]] = None,
    description: Optional[str] = None,
) -> Any:
    """Create a FieldInfo with serialization metadata.

    Args:
        default: Value used when the attribute is not provided.
        default_factory: Callable producing the default value.
        name: Key used in plain data. Keys with an explicit name are never
            case-converted.
        type: Model class the value recurses into. Inferred from the
            annotation for ``Model``, ``List[Model]`` and ``Optional[Model]``.
        ignore: ``Ignore`` flag (or bool) dropping the field on
            serialization, deserialization or both.
        transform: ``transform(value, TransformType)`` owning the value's
            conversion in every direction.
        validators: Async ``validator(value, instance)`` callables.

    Example:
        created: datetime = Field(transform=date_transformer("%Y-%m-%d"))
        tags: List[Tag] = Field(default_factory=list)
    """
    return FieldInfo(
        default=default,
        default_factory=default_factory,
        name=name,
        type=type,
        ignore=ignore,
        transform=transform,
        validators=validators,
        description=description,
    )


__all__ = ["Field", "FieldInfo", "Ignore", "TransformType"]
