"""
Key and policy traversals over plain data.

Both traversals walk a plain value together with the schema it belongs to:
``cls`` is the model class whose fields describe the current mapping (or
``None`` for plain values without a model type) and ``enclosing`` is the
nearest model class above it. Plain mappings and lists never reset
``enclosing``, so naming policy keeps flowing into them.

Per key, exactly one behaviour applies, in this order: the field is
ignored, the field has a transform (value passed through untouched), or the
value is traversed with the field's nested type.
"""

from typing import Any, Callable, Dict, Optional

from .config import ModelConfig, get_config_value
from .fields import FieldInfo
from .naming import NamingCase, naming_case_fn
from .registry import get_field, get_fields, get_model, get_stored_names, is_model


def _resolve_model(cls: Optional[type], enclosing: Optional[type]) -> Optional[ModelConfig]:
    return get_model(cls) or get_model(enclosing)


def _next_enclosing(cls: Optional[type], enclosing: Optional[type]) -> Optional[type]:
    return cls if is_model(cls) else enclosing


def _match_field(cls: Optional[type], key: str, convert: Callable[[str], str]) -> Optional[FieldInfo]:
    """Find the field an incoming converted key belongs to.

    Falls back to comparing against each logical key run through ``convert``,
    for keys the conversion does not invert (e.g. ``address_line1``).
    """
    field = get_field(cls, key)
    if field is None:
        for candidate in get_fields(cls).values():
            if convert(candidate.key) == key:
                return candidate
    return field


def traverse_on_serialize(obj: Any, cls: Optional[type], enclosing: Optional[type]) -> Any:
    """Rename and filter the output of ``instance_to_plain``.

    Keys that are an explicit stored name of a field in ``cls`` are kept;
    other keys go through the ``rename`` case of the resolved model config.
    """
    if isinstance(obj, (list, tuple)):
        return [traverse_on_serialize(item, cls, enclosing) for item in obj]
    if not isinstance(obj, dict):
        return obj

    rename = get_config_value(_resolve_model(cls, enclosing), 'rename', NamingCase.NON_CASE)
    convert = naming_case_fn(rename)
    stored_names = get_stored_names(cls)
    next_enclosing = _next_enclosing(cls, enclosing)

    transformed: Dict[Any, Any] = {}
    for raw_key, raw_value in obj.items():
        field = get_field(cls, raw_key)
        key = raw_key
        if raw_key not in stored_names and isinstance(raw_key, str):
            key = convert(raw_key)
        if field is not None and field.ignore_on_serialize:
            continue
        if field is not None and field.transform is not None:
            transformed[key] = raw_value
            continue
        field_type = field.type if field is not None else None
        transformed[key] = traverse_on_serialize(raw_value, field_type, next_enclosing)
    return transformed


def traverse_on_deserialize(
    obj: Any,
    cls: Optional[type],
    enclosing: Optional[type],
    convert: Callable[[str], str],
) -> Any:
    """Normalize plain keys to logical field keys before ``plain_to_instance``.

    ``convert`` is the incoming naming-case function, resolved once by the
    caller. It is not applied to keys matching an explicit stored name or a
    logical key of ``cls``, nor anywhere under a model configured with
    ``NamingCase.NON_CASE``.
    """
    if isinstance(obj, (list, tuple)):
        return [traverse_on_deserialize(item, cls, enclosing, convert) for item in obj]
    if not isinstance(obj, dict):
        return obj

    non_case = get_config_value(_resolve_model(cls, enclosing), 'rename') is NamingCase.NON_CASE
    stored_names = get_stored_names(cls)
    fields = get_fields(cls)
    next_enclosing = _next_enclosing(cls, enclosing)

    transformed: Dict[Any, Any] = {}
    for raw_key, raw_value in obj.items():
        key = raw_key
        if non_case or raw_key in stored_names or raw_key in fields or not isinstance(raw_key, str):
            field = get_field(cls, key)
        else:
            key = convert(raw_key)
            field = _match_field(cls, key, convert)
        if field is not None:
            if field.ignore_on_deserialize:
                continue
            key = field.key
            if field.transform is not None:
                transformed[key] = raw_value
                continue
        field_type = field.type if field is not None else None
        transformed[key] = traverse_on_deserialize(raw_value, field_type, next_enclosing, convert)
    return transformed


__all__ = ["traverse_on_serialize", "traverse_on_deserialize"]
