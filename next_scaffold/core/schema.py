"""Introspection helpers over configuration models.

The validator and the merger both walk pydantic models structurally: they
need to resolve an input key (alias or attribute name) to a field, and to
take a field annotation apart (``Optional[X]``, ``list[X]``, enums, nested
records).
"""

from __future__ import annotations

import types
from enum import Enum
from typing import Any, Literal, Mapping, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo


def wire_name(model: type[BaseModel], name: str) -> str:
    """Return the camelCase key used on the wire for attribute *name*."""
    info = model.model_fields[name]
    return info.alias or name


def resolve_field(model: type[BaseModel], key: str) -> tuple[str, FieldInfo] | None:
    """Map an input *key* (alias or attribute name) to ``(name, FieldInfo)``."""
    fields = model.model_fields
    if key in fields:
        return key, fields[key]
    for name, info in fields.items():
        if info.alias == key:
            return name, info
    return None


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip ``Optional``/``X | None`` and report whether ``None`` is allowed."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0], True
    return annotation, False


def list_item_type(annotation: Any) -> Any | None:
    """Return ``X`` for ``list[X]``, otherwise ``None``."""
    if get_origin(annotation) is list:
        args = get_args(annotation)
        return args[0] if args else Any
    return None


def is_record(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def choices(annotation: Any) -> list[str] | None:
    """Allowed values of an enum or ``Literal`` annotation, else ``None``."""
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return [member.value for member in annotation]
    if get_origin(annotation) is Literal:
        return [str(arg) for arg in get_args(annotation)]
    return None


def to_wire(model: type[BaseModel], data: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    """Rewrite the keys of *data* to wire names, one nested level deep.

    Unknown keys are passed through unchanged so that model validation can
    reject them with its own message.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True)
    result: dict[str, Any] = {}
    for key, value in data.items():
        resolved = resolve_field(model, key)
        if resolved is None:
            result[key] = value
            continue
        name, info = resolved
        annotation, _ = unwrap_optional(info.annotation)
        if is_record(annotation) and isinstance(value, (Mapping, BaseModel)):
            value = to_wire(annotation, value)
        result[wire_name(model, name)] = value
    return result
