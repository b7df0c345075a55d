"""Map decoded JSON onto result models.

The mapping is deliberately lenient: keys the model does not declare are
dropped, declared fields missing from the payload stay unset, and values are
not validated. Additive changes to API responses therefore never break
decoding.
"""

import types
import typing
from typing import Any, TypeVar

from pydantic import BaseModel

__all__ = ['transform', 'nested_model']

M = TypeVar('M', bound=BaseModel)


def nested_model(annotation: Any) -> type[BaseModel] | None:
    """Find the model class inside a field annotation.

    ``Folder``, ``Folder | None`` and ``list[Participant]`` all yield the
    model; annotations without one yield None.
    """
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation

    origin = typing.get_origin(annotation)
    if origin is None:
        return None
    if origin not in (list, typing.Union, types.UnionType):
        return None

    for arg in typing.get_args(annotation):
        model = nested_model(arg)
        if model is not None:
            return model
    return None


def _transform_object(data: dict[str, Any], model: type[M]) -> M:
    values = {}
    for name, field in model.model_fields.items():
        key = field.alias or name
        if key in data:
            values[name] = transform(data[key], nested_model(field.annotation))
        elif name in data:
            values[name] = transform(data[name], nested_model(field.annotation))
    return model.model_construct(**values)


def transform(data: Any, model: type[BaseModel] | None) -> Any:
    """Transform decoded JSON into instances of ``model``.

    Args:
        data: Decoded JSON value.
        model: Target model, or None to return data unchanged.

    Returns:
        A model instance for objects, a list of transformed elements for
        arrays (order preserved) and the value itself for scalars.
    """
    if isinstance(data, list):
        return [transform(item, model) for item in data]
    if model is not None and isinstance(data, dict):
        return _transform_object(data, model)
    return data
