"""ShapeRegistry — shape-keyed post-decode transformations.

After validation, a decoded value is walked alongside its shape and each
node is passed through the transformation registered for it. The core
entries wrap lists, sets, and mappings read-only and turn empty strings
into None; extension modules add entries keyed by concrete type
(``datetime``, ``Decimal``, ...).

INVARIANT: core collection entries cannot be replaced by extensions.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from codecpolicy.domain.rules import (
    ImmutableCollectionPolicy,
    empty_string_to_none,
    normalize_untyped,
)
from codecpolicy.domain.shapes import ShapeKind, classify, record_fields, tuple_item

Transform = Callable[[Any], Any]

logger = logging.getLogger(__name__)

CORE_TRANSFORMS: Mapping[ShapeKind, Transform] = MappingProxyType(
    {
        ShapeKind.STRING: empty_string_to_none,
        ShapeKind.LIST: ImmutableCollectionPolicy.wrap_list,
        ShapeKind.SET: ImmutableCollectionPolicy.wrap_set,
        ShapeKind.MAP: ImmutableCollectionPolicy.wrap_map,
    }
)

# Types whose decoding the core entries own.
RESERVED_TYPES: frozenset[type] = frozenset({list, tuple, set, frozenset, dict, str})


class ShapeRegistry:
    """Immutable registry of post-decode transformations."""

    __slots__ = ("_types",)

    def __init__(self, transforms: Mapping[type, Transform] | None = None) -> None:
        accepted: dict[type, Transform] = {}
        for target, func in (transforms or {}).items():
            is_model = isinstance(target, type) and issubclass(target, BaseModel)
            if target in RESERVED_TYPES or is_model:
                logger.warning("Ignoring transform for reserved type %s", target.__name__)
                continue
            accepted[target] = func
        object.__setattr__(self, "_types", MappingProxyType(accepted))

    def __setattr__(self, name: str, value: Any) -> None:
        msg = "ShapeRegistry is immutable"
        raise AttributeError(msg)

    @property
    def types(self) -> Mapping[type, Transform]:
        """Extension transforms keyed by type."""
        return self._types

    def apply(self, shape: Any, value: Any) -> Any:
        """Transform validated *value* according to *shape*, recursively."""
        if value is None:
            return None
        kind, args = classify(shape)

        if kind is ShapeKind.STRING:
            return CORE_TRANSFORMS[kind](value)
        if kind is ShapeKind.LIST:
            return CORE_TRANSFORMS[kind]([self.apply(args[0], v) for v in value])
        if kind is ShapeKind.SET:
            return CORE_TRANSFORMS[kind]({self.apply(args[0], v) for v in value})
        if kind is ShapeKind.MAP:
            return CORE_TRANSFORMS[kind]({k: self.apply(args[0], v) for k, v in value.items()})
        if kind is ShapeKind.TUPLE:
            items = [self.apply(tuple_item(args, i), v) for i, v in enumerate(value)]
            return type(value)(*items) if hasattr(value, "_fields") else tuple(items)
        if kind is ShapeKind.TYPED_DICT:
            fields = record_fields(args[0])
            return ImmutableCollectionPolicy.wrap_map(
                {
                    k: self.apply(fields[k].annotation if k in fields else Any, v)
                    for k, v in value.items()
                }
            )
        if isinstance(value, BaseModel):
            return self._apply_model(value)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return self._apply_dataclass(value)
        if kind in (ShapeKind.ANY, ShapeKind.UNION):
            return normalize_untyped(value)
        if kind is ShapeKind.OTHER:
            transform = self._types.get(args[0])
            if transform is not None:
                return transform(value)
        return value

    def _apply_model(self, model: BaseModel) -> BaseModel:
        fields = type(model).model_fields
        update = {
            name: self.apply(field.annotation, getattr(model, name))
            for name, field in fields.items()
        }
        return model.model_copy(update=update)

    def _apply_dataclass(self, instance: Any) -> Any:
        # Frozen dataclasses reject setattr; write through object on a copy.
        clone = copy.copy(instance)
        for name, field in record_fields(type(instance)).items():
            object.__setattr__(clone, name, self.apply(field.annotation, getattr(instance, name)))
        return clone
