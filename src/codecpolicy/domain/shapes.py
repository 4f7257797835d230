"""Decode target shapes — classification and the generic type tokens.

A *shape* is any type expression the engine can validate against:
``str``, ``list[int]``, ``dict[str, Model]``, ``tuple[int, ...]``, a
dataclass, a ``TypedDict``, ``Model | None`` and so on. :func:`classify`
reduces a shape to the :class:`ShapeKind` that selects which normalization
and transformation rules apply to it.

INVARIANT: exactly one :class:`TypeToken` exists per generic shape.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import functools
import types
import typing
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Any, NamedTuple

from pydantic import BaseModel


class ShapeKind(StrEnum):
    """Rule-selecting category of a decode target shape."""

    STRING = "string"
    LIST = "list"
    SET = "set"
    MAP = "map"
    TUPLE = "tuple"
    MODEL = "model"
    DATACLASS = "dataclass"
    TYPED_DICT = "typed_dict"
    ANY = "any"
    UNION = "union"
    OTHER = "other"


_LIST_ORIGINS: frozenset[Any] = frozenset(
    {list, collections.abc.Sequence, collections.abc.MutableSequence}
)
_SET_ORIGINS: frozenset[Any] = frozenset(
    {set, frozenset, collections.abc.Set, collections.abc.MutableSet}
)
_MAP_ORIGINS: frozenset[Any] = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping}
)


class Shape(NamedTuple):
    """A classified shape: its kind and its member shapes.

    ``args`` holds the item shape for lists and sets, the value shape for
    maps, the item shapes for tuples (``(X, ...)`` when variadic), the
    member shapes for unions, the class for models, dataclasses and typed
    dicts, and the unwrapped shape itself for other shapes.
    """

    kind: ShapeKind
    args: tuple[Any, ...] = ()


class RecordField(NamedTuple):
    """A dataclass or ``TypedDict`` field as the decode rules see it."""

    annotation: Any
    absent_means_empty: bool


def _unwrap(shape: Any) -> Any:
    if isinstance(shape, TypeToken):
        shape = shape.shape
    while typing.get_origin(shape) is Annotated:
        shape = typing.get_args(shape)[0]
    return shape


def classify(shape: Any) -> Shape:
    """Classify *shape* for rule selection.

    ``X | None`` is classified as ``X`` so that an optional collection
    still receives the empty-container substitution.
    """
    shape = _unwrap(shape)
    if shape is Any or shape is object:
        return Shape(ShapeKind.ANY)
    if shape is str:
        return Shape(ShapeKind.STRING)
    if isinstance(shape, type):
        if issubclass(shape, BaseModel):
            return Shape(ShapeKind.MODEL, (shape,))
        if typing.is_typeddict(shape):
            return Shape(ShapeKind.TYPED_DICT, (shape,))
        if dataclasses.is_dataclass(shape):
            return Shape(ShapeKind.DATACLASS, (shape,))
        if issubclass(shape, tuple) and hasattr(shape, "_fields"):
            return Shape(ShapeKind.TUPLE, tuple(typing.get_type_hints(shape).values()))

    origin = typing.get_origin(shape)
    args = typing.get_args(shape)
    if origin is typing.Union or origin is types.UnionType:
        members = tuple(a for a in args if a is not type(None))
        if len(members) == 1:
            return classify(members[0])
        return Shape(ShapeKind.UNION, members)

    base = origin if origin is not None else shape
    if base in _LIST_ORIGINS:
        return Shape(ShapeKind.LIST, (args[0] if args else Any,))
    if base in _SET_ORIGINS:
        return Shape(ShapeKind.SET, (args[0] if args else Any,))
    if base in _MAP_ORIGINS:
        return Shape(ShapeKind.MAP, (args[1] if len(args) == 2 else Any,))
    if base is tuple:
        return Shape(ShapeKind.TUPLE, args if origin is not None else (Any, ...))
    return Shape(ShapeKind.OTHER, (shape,))


def tuple_item(args: tuple[Any, ...], index: int) -> Any:
    """Shape of the item at *index* of a tuple classified with *args*."""
    if len(args) == 2 and args[1] is Ellipsis:
        return args[0]
    return args[index] if index < len(args) else Any


@functools.lru_cache(maxsize=256)
def record_fields(cls: type) -> dict[str, RecordField]:
    """Input fields of a dataclass or ``TypedDict``, keyed by name.

    A field is absent-means-empty when the input must supply it or when its
    default is None.
    """
    hints = typing.get_type_hints(cls)
    if typing.is_typeddict(cls):
        return {
            name: RecordField(hint, name in cls.__required_keys__)
            for name, hint in hints.items()
        }
    fields: dict[str, RecordField] = {}
    for item in dataclasses.fields(cls):
        if not item.init:
            continue
        required = item.default is dataclasses.MISSING and (
            item.default_factory is dataclasses.MISSING
        )
        fields[item.name] = RecordField(hints[item.name], required or item.default is None)
    return fields


def empty_container(kind: ShapeKind) -> list[Any] | set[Any] | dict[str, Any]:
    """Return a fresh empty mutable container for a collection *kind*."""
    if kind is ShapeKind.LIST:
        return []
    if kind is ShapeKind.SET:
        return set()
    if kind is ShapeKind.MAP:
        return {}
    msg = f"{kind} is not a collection shape"
    raise ValueError(msg)


# ── Type tokens ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class TypeToken[T]:
    """Opaque, reusable descriptor of a decode target shape."""

    name: str
    shape: Any

    def __repr__(self) -> str:
        return f"TypeToken({self.name})"


_GENERIC_MAP: TypeToken[dict[str, Any]] = TypeToken("map", dict[str, Any])
_GENERIC_LIST: TypeToken[list[Any]] = TypeToken("list", list[Any])


def generic_map_shape() -> TypeToken[dict[str, Any]]:
    """Shape for decoding into a string-keyed mapping of dynamic values."""
    return _GENERIC_MAP


def generic_list_shape() -> TypeToken[list[Any]]:
    """Shape for decoding into an ordered sequence of dynamic values."""
    return _GENERIC_LIST
