"""
Generic marshalling between model instances and plain data.

``instance_to_plain`` copies declared fields into dicts, applying field
transforms and descending into nested models, lists and dicts.
``plain_to_instance`` builds instances from plain dicts keyed by logical
field keys, without running validation (validation is explicit and async).

Neither function applies naming-case or ignore policy; that is the job of
``plainmodel.traversal``, which runs after ``instance_to_plain`` and before
``plain_to_instance``.
"""

from typing import Any, Dict, Mapping, Type, TypeVar

from .fields import FieldInfo, TransformType
from .registry import get_fields, is_model

_T = TypeVar('_T')


def _dump_value(value: Any, by_name: bool, direction: TransformType) -> Any:
    if is_model(type(value)):
        return instance_to_plain(value, by_name=by_name, direction=direction)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_dump_value(v, by_name, direction) for v in value]
    if isinstance(value, dict):
        return {k: _dump_value(v, by_name, direction) for k, v in value.items()}
    return value


def instance_to_plain(
    instance: Any,
    *,
    by_name: bool = True,
    direction: TransformType = TransformType.TO_PLAIN,
) -> Dict[str, Any]:
    """Convert a model instance to a plain dict.

    Args:
        instance: Model instance to convert.
        by_name: Use each field's explicit stored name as key. When False,
            logical keys are used.
        direction: Direction tag handed to field transforms.

    Unset attributes are skipped.
    """
    result: Dict[str, Any] = {}
    for key, field in get_fields(type(instance)).items():
        if not hasattr(instance, key):
            continue
        value = getattr(instance, key)
        output_key = (field.name or key) if by_name else key
        if field.transform is not None:
            result[output_key] = field.transform(value, direction)
        else:
            result[output_key] = _dump_value(value, by_name, direction)
    return result


def _load_value(field: FieldInfo, value: Any, ignore_decorators: bool) -> Any:
    if field.transform is not None and not ignore_decorators:
        return field.transform(value, TransformType.TO_MODEL)
    if field.type is not None and is_model(field.type):
        return _load_nested(field.type, value, ignore_decorators)
    return value


def _load_nested(cls: type, value: Any, ignore_decorators: bool) -> Any:
    if isinstance(value, Mapping):
        return plain_to_instance(cls, value, ignore_decorators=ignore_decorators)
    if isinstance(value, list):
        return [_load_nested(cls, v, ignore_decorators) for v in value]
    return value


def plain_to_instance(
    cls: Type[_T],
    data: Mapping[str, Any],
    *,
    ignore_decorators: bool = False,
) -> _T:
    """Create an instance of ``cls`` from a plain mapping keyed by logical keys.

    Args:
        cls: Model class to instantiate.
        data: Plain mapping. Keys that are not declared fields are dropped.
        ignore_decorators: Do not apply field transforms; values of
            transformed fields are taken verbatim.

    Missing fields get their defaults (``None`` when no default exists).
    """
    obj = object.__new__(cls)
    _setattr = object.__setattr__
    for key, field in get_fields(cls).items():
        if key in data:
            _setattr(obj, key, _load_value(field, data[key], ignore_decorators))
        else:
            _setattr(obj, key, field.get_default())
    return obj


__all__ = ["instance_to_plain", "plain_to_instance"]
