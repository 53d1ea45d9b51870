"""Closed value model for the tabular renderer.

Arbitrary Python objects are converted once, by ``inspect_value``, into a
tree of six variants. The flattening algorithm only ever matches on these
variants and never introspects host objects itself.
"""

from __future__ import annotations

import dataclasses
import weakref
from collections.abc import Mapping as AbcMapping
from collections.abc import Sequence as AbcSequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import BaseModel

from ..formatters import safe_str


@dataclass(frozen=True, slots=True)
class Null:
    """Absent value; rendered as ``nil``."""


@dataclass(frozen=True, slots=True)
class Reference:
    """Transparent indirection to another value."""
    target: Value


@dataclass(frozen=True, slots=True)
class Sequence:
    """Ordered items, labelled by position."""
    items: tuple[Value, ...] = ()


@dataclass(frozen=True, slots=True)
class Mapping:
    """Key/value entries, keys already rendered to strings."""
    entries: tuple[tuple[str, Value], ...] = ()


@dataclass(frozen=True, slots=True)
class Record:
    """Named fields in declaration order."""
    fields: tuple[tuple[str, Value], ...] = ()


@dataclass(frozen=True, slots=True)
class Scalar:
    """Leaf value, already rendered to text."""
    text: str


Value: TypeAlias = Null | Reference | Sequence | Mapping | Record | Scalar

NULL = Null()
CYCLE = Scalar("<cycle>")

_TEXT_TYPES = (str, bytes, bytearray, memoryview)
_REF_TYPES = (weakref.ReferenceType,)


def _is_namedtuple(obj: object) -> bool:
    return isinstance(obj, tuple) and hasattr(type(obj), "_fields")


def inspect_value(obj: Any) -> Value:
    """Convert an arbitrary object into a Value tree.

    Dataclasses, NamedTuples and pydantic models become Records; mappings
    become Mappings sorted by ``str(key)``; sets are ordered by ``str(item)``;
    other sequences keep their order. Strings and bytes stay Scalars. An
    object that contains itself renders ``<cycle>`` where it recurs.
    """
    return _inspect(obj, set())


def _inspect(obj: Any, active: set[int]) -> Value:
    if obj is None:
        return NULL
    if isinstance(obj, _TEXT_TYPES):
        return Scalar(safe_str(obj))
    if isinstance(obj, _REF_TYPES):
        target = obj()
        return NULL if target is None else Reference(_inspect(target, active))
    if not _is_container(obj):
        return Scalar(safe_str(obj))

    key = id(obj)
    if key in active:
        return CYCLE
    active.add(key)
    try:
        return _inspect_container(obj, active)
    finally:
        active.discard(key)


def _is_container(obj: Any) -> bool:
    return (
        isinstance(obj, (AbcMapping, AbcSequence, set, frozenset, BaseModel))
        or (dataclasses.is_dataclass(obj) and not isinstance(obj, type))
    )


def _inspect_container(obj: Any, active: set[int]) -> Value:
    if isinstance(obj, BaseModel):
        return Record(tuple((name, _inspect(getattr(obj, name), active)) for name in type(obj).model_fields))
    if dataclasses.is_dataclass(obj):
        return Record(tuple((f.name, _inspect(getattr(obj, f.name), active)) for f in dataclasses.fields(obj)))
    if _is_namedtuple(obj):
        return Record(tuple((name, _inspect(v, active)) for name, v in zip(obj._fields, obj)))
    if isinstance(obj, AbcMapping):
        entries = sorted(((safe_str(k), v) for k, v in obj.items()), key=lambda kv: kv[0])
        return Mapping(tuple((k, _inspect(v, active)) for k, v in entries))
    if isinstance(obj, (set, frozenset)):
        return Sequence(tuple(_inspect(v, active) for v in sorted(obj, key=safe_str)))
    return Sequence(tuple(_inspect(v, active) for v in obj))
