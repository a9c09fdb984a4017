"""
Ready-made field transforms.

A transform is called as ``transform(value, TransformType)`` and must cope
with every direction:

1. ``TO_PLAIN``: instance value to plain value;
2. ``TO_MODEL``: plain value to instance value;
3. ``CLONE``: instance value to an independent copy of itself.

Transforms must tolerate ``None`` and other empty values without raising,
since an exception aborts the whole ``to_plain`` / ``from_`` / ``clone`` call.

Example:
    from datetime import datetime
    from plainmodel import BaseModel, Field
    from plainmodel.transformers import date_transformer

    class Event(BaseModel):
        starts_at: datetime = Field(transform=date_transformer("%Y-%m-%d %H:%M"))
"""

import copy
from datetime import date, datetime
from typing import Any, Callable

from .fields import TransformType
from .marshal import instance_to_plain, plain_to_instance

Transform = Callable[[Any, TransformType], Any]


def _map_items(value: Any, func: Callable[[Any], Any]) -> Any:
    if isinstance(value, list):
        return [func(v) for v in value]
    return func(value)


def date_transformer(fmt: str, *, date_only: bool = False) -> Transform:
    """Transform ``datetime`` values to strings in ``fmt`` and back.

    Loading yields ``datetime`` objects, or ``date`` objects with
    ``date_only=True``. Lists are handled element-wise. Values that are
    already dates are accepted when loading.
    """
    def dump(value: Any) -> Any:
        if isinstance(value, (date, datetime)):
            return value.strftime(fmt)
        return value

    def load(value: Any) -> Any:
        if isinstance(value, str):
            parsed = datetime.strptime(value, fmt)
            return parsed.date() if date_only else parsed
        return value

    def transform(value: Any, direction: TransformType) -> Any:
        if not value:
            return value
        if direction is TransformType.TO_PLAIN:
            return _map_items(value, dump)
        if direction is TransformType.TO_MODEL:
            return _map_items(value, load)
        return _map_items(value, copy.copy)

    return transform


def type_transformer(cls: type) -> Transform:
    """Transform values of model type ``cls`` as a whole.

    The value is marshalled without the naming or ignore policy of the
    enclosing model, which is useful for embedding a model verbatim.
    """
    def dump(value: Any) -> Any:
        if isinstance(value, cls):
            return instance_to_plain(value, by_name=False)
        return value

    def load(value: Any) -> Any:
        if isinstance(value, dict):
            return plain_to_instance(cls, value)
        return value

    def duplicate(value: Any) -> Any:
        if isinstance(value, cls) and hasattr(value, 'clone'):
            return value.clone()
        return copy.deepcopy(value)

    def transform(value: Any, direction: TransformType) -> Any:
        if not value:
            return value
        if direction is TransformType.TO_PLAIN:
            return _map_items(value, dump)
        if direction is TransformType.TO_MODEL:
            return _map_items(value, load)
        return _map_items(value, duplicate)

    return transform


__all__ = ["Transform", "date_transformer", "type_transformer"]
