"""
BaseModel implementation for plainmodel.

Models are plain attribute holders whose class-level metadata (stored
names, nested types, ignore policy, transforms, validators and the model's
naming case) drives conversion to and from JSON-shaped plain data.

Example:
    from typing import List
    from plainmodel import BaseModel, Field, ModelConfig, NamingCase

    class Tag(BaseModel):
        tag_name: str

    class User(BaseModel):
        model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)

        user_id: int
        full_name: str = Field(name="full_name")
        tags: List[Tag] = Field(default_factory=list)

    user = User(user_id=1, full_name="Ann", tags=[Tag(tag_name="admin")])
    user.to_plain()
    # {'userId': 1, 'full_name': 'Ann', 'tags': [{'tagName': 'admin'}]}
    User.from_({'userId': 1, 'full_name': 'Ann'}).full_name  # 'Ann'
"""

import inspect
import json as _json
import logging
import types
from typing import (
    Any, ClassVar, Dict, Iterator, List, Mapping, Optional, Tuple, Type,
    TypeVar, Union, get_args, get_origin, get_type_hints,
)
from typing import Annotated

from . import registry
from .config import ModelConfig, check_model_config, get_default_naming_case
from .fields import FieldInfo, TransformType
from .functional_validators import collect_field_validators
from .marshal import instance_to_plain, plain_to_instance
from .naming import NamingCase, naming_case_fn
from .traversal import traverse_on_deserialize, traverse_on_serialize
from .validation import FieldError, validate_all, validate_field

logger = logging.getLogger(__name__)

_T = TypeVar('_T', bound='BaseModel')

# Attribute names that should not be treated as fields
_RESERVED_NAMES = frozenset({'model_config'})

_UNION_TYPES: Tuple[Any, ...] = (Union,)
if hasattr(types, 'UnionType'):
    _UNION_TYPES += (types.UnionType,)

_CONTAINER_TYPES = (list, tuple, set, frozenset)


def _extract_field_info(annotation: Any) -> Tuple[Any, Optional[FieldInfo]]:
    """Split an annotation into its base type and an Annotated FieldInfo, if any."""
    if get_origin(annotation) is Annotated:
        args = get_args(annotation)
        for meta in args[1:]:
            if isinstance(meta, FieldInfo):
                return args[0], meta
        return args[0], None
    return annotation, None


def _nested_model_type(annotation: Any) -> Optional[type]:
    """Find the model class a field recurses into.

    Handles ``Model``, ``Optional[Model]`` and (nested) sequences of models.
    Mappings are not descended into: their keys are not fields of the value
    type.
    """
    if registry.is_model(annotation):
        return annotation
    origin = get_origin(annotation)
    if origin is Annotated:
        return _nested_model_type(get_args(annotation)[0])
    if origin in _UNION_TYPES or origin in _CONTAINER_TYPES:
        for arg in get_args(annotation):
            if arg is Ellipsis or arg is type(None):
                continue
            found = _nested_model_type(arg)
            if found is not None:
                return found
    return None


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        return {}


def _resolve_hints(cls: type) -> Dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except NameError as e:
        # Forward reference to a class not defined yet, e.g. the model itself.
        logger.debug("Deferring annotation resolution for %s: %s", cls.__qualname__, e)
    hints: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        hints.update(_own_annotations(klass))
    return hints


def _build_model(cls: type) -> None:
    """Collect field metadata from annotations and register the class."""
    own_defaults: Dict[str, Any] = cls.__dict__.get('__plainmodel_defaults__', {})
    own_keys = set(_own_annotations(cls))

    fields: Dict[str, FieldInfo] = {}
    for base in reversed(cls.__mro__[1:]):
        for key, field in registry.get_fields(base).items():
            fields[key] = field.copy()

    for key, annotation in _resolve_hints(cls).items():
        if key.startswith('_') or key in _RESERVED_NAMES:
            continue
        if get_origin(annotation) is ClassVar or annotation is ClassVar:
            continue

        base_type, annotated_info = _extract_field_info(annotation)
        if key in own_defaults:
            default = own_defaults[key]
            if isinstance(default, FieldInfo):
                field = default.copy()
            elif annotated_info is not None:
                field = annotated_info.copy()
                field.default = default
            else:
                field = FieldInfo(default=default)
        elif key in fields and key not in own_keys:
            field = fields[key]
        elif annotated_info is not None:
            field = annotated_info.copy()
        elif key in fields:
            field = fields[key]
        else:
            field = FieldInfo()

        field.key = key
        field.annotation = annotation
        if field.type is None:
            field.type = _nested_model_type(base_type)
        fields[key] = field

    namespace: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        namespace.update(vars(klass))

    registry.register_model(
        cls,
        fields,
        config=cls.model_config,
        validators=collect_field_validators(namespace),
    )


class _ModelMeta(type):
    """Metaclass for BaseModel that registers field metadata at class creation."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict, **kwargs: Any) -> type:
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        if not any(isinstance(base, _ModelMeta) for base in bases):
            # BaseModel itself
            return cls

        # Get model_config from class or inherit from parent
        model_config = namespace.get('model_config')
        if model_config is None:
            for base in bases:
                if getattr(base, 'model_config', None) is not None:
                    model_config = base.model_config
                    break
        cls.model_config = check_model_config(model_config)

        keys = set(_own_annotations(cls))
        keys.update(key for key, value in namespace.items() if isinstance(value, FieldInfo))
        defaults = {key: namespace[key] for key in keys if key in namespace}
        cls.__plainmodel_defaults__ = defaults
        for key, value in defaults.items():
            if isinstance(value, FieldInfo):
                delattr(cls, key)

        _build_model(cls)
        return cls


class BaseModel(metaclass=_ModelMeta):
    """Base class of every model.

    Fields are declared with annotations. Construction performs no
    validation or coercion; call ``await instance.validate()`` to run the
    registered validators.

    Example:
        class User(BaseModel):
            user_id: int
            full_name: str = Field(name="fullName")

        user = User(user_id=1, full_name="Ann")
        assert user.to_plain() == {"user_id": 1, "fullName": "Ann"}
        assert User.from_({"user_id": 1, "fullName": "Ann"}) == user
    """

    model_config: ClassVar[Optional[ModelConfig]] = None

    def __init__(self, **kwargs: Any) -> None:
        for key, field in registry.get_fields(type(self)).items():
            if key in kwargs:
                value = kwargs[key]
            else:
                value = field.get_default()
            setattr(self, key, value)

    def clone(self: _T) -> _T:
        """Deep copy through the plain form, without renaming or ignoring.

        Transformed fields are copied by their transform in the
        ``TransformType.CLONE`` direction.
        """
        data = instance_to_plain(self, by_name=False, direction=TransformType.CLONE)
        return plain_to_instance(type(self), data, ignore_decorators=True)

    def merge(self: _T, other: Union['BaseModel', Mapping[str, Any]]) -> _T:
        """Merge ``other`` into this instance in-place; existing values are overwritten."""
        if isinstance(other, BaseModel):
            items = [
                (key, getattr(other, key))
                for key in registry.get_fields(type(other))
                if hasattr(other, key)
            ]
        elif isinstance(other, Mapping):
            items = list(other.items())
        else:
            raise TypeError(f"Cannot merge {type(other).__name__} into {type(self).__name__}")
        for key, value in items:
            setattr(self, key, value)
        return self

    def mix(self: _T, other: Union['BaseModel', Mapping[str, Any]]) -> _T:
        """Merge ``other`` into a clone of this instance and return the clone."""
        return self.clone().merge(other)

    def to_plain(self) -> Dict[str, Any]:
        """Convert to plain data, applying stored names, naming case and ignore policy."""
        cls = type(self)
        return traverse_on_serialize(instance_to_plain(self), cls, cls)

    def to_model_plain(self) -> Dict[str, Any]:
        """Convert to plain data keyed by logical field keys.

        Unlike ``to_plain`` no key is renamed and no field is ignored.
        Transforms still run in the ``TransformType.TO_PLAIN`` direction.
        """
        return instance_to_plain(self, by_name=False)

    def to_json(self, *, indent: Optional[int] = None) -> str:
        """Convert to a JSON string of ``to_plain()``."""
        return _json.dumps(self.to_plain(), indent=indent, ensure_ascii=False)

    async def validate(self, field: Optional[str] = None) -> Union[Optional[str], List[FieldError]]:
        """Validate this instance shallowly.

        With ``field``, return the first failure message of that field's
        validators, or ``None``. Without it, return one ``FieldError`` per
        failing field; an empty list means the instance is valid.

        Child models are not validated automatically.
        """
        if field is not None:
            return await validate_field(self, field)
        return await validate_all(self)

    @classmethod
    def default(cls: Type[_T]) -> _T:
        return cls()

    @classmethod
    def get_field(cls, key: str) -> Optional[FieldInfo]:
        return registry.get_field(cls, key)

    @classmethod
    def get_fields(cls) -> Dict[str, FieldInfo]:
        return registry.get_fields(cls)

    @classmethod
    def get_model(cls) -> Optional[ModelConfig]:
        return registry.get_model(cls)

    @classmethod
    def get_field_validators(cls, key: str) -> List[Any]:
        return registry.get_field_validators(cls, key)

    @classmethod
    def get_all_field_validators(cls) -> Dict[str, List[Any]]:
        return registry.get_all_field_validators(cls)

    @classmethod
    def from_(
        cls: Type[_T],
        raw: Union['BaseModel', str, bytes, Mapping[str, Any]],
        *,
        naming_case: Optional[NamingCase] = None,
    ) -> _T:
        """Create an instance from another instance, a JSON string or a mapping.

        Args:
            raw: Source data. Instances contribute their ``to_model_plain()``
                form, whose keys are already logical and are not converted.
            naming_case: Naming case of the incoming keys. Defaults to the
                process-wide setting (see ``set_default_naming_case``).

        Raises:
            json.JSONDecodeError: ``raw`` is a string that is not valid JSON.
            TypeError: ``raw`` does not describe a JSON object.
        """
        if isinstance(raw, BaseModel):
            data = raw.to_model_plain()
            naming_case = NamingCase.NON_CASE
        elif isinstance(raw, (str, bytes, bytearray)):
            data = _json.loads(raw)
        else:
            data = raw

        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a mapping or {cls.__name__}, got {type(data).__name__}")

        if naming_case is None:
            naming_case = get_default_naming_case()
        convert = naming_case_fn(naming_case)
        logger.debug("Deserializing %s with incoming naming case %s", cls.__name__, naming_case)
        return plain_to_instance(cls, traverse_on_deserialize(dict(data), cls, cls, convert))

    @classmethod
    def rebuild(cls) -> None:
        """Re-resolve annotations and re-register this model.

        Needed once after defining a model whose annotations refer to
        classes that did not exist yet, such as the model itself.
        """
        _build_model(cls)

    def __repr__(self) -> str:
        """String representation of the model."""
        parts = []
        for name in registry.get_fields(type(self)):
            if hasattr(self, name):
                parts.append(f"{name}={getattr(self, name)!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return NotImplemented
        return self.to_model_plain() == other.to_model_plain()

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[str]:
        """Iterate over field keys."""
        return iter(registry.get_fields(type(self)))


__all__ = ["BaseModel"]
