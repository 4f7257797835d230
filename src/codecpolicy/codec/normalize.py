"""Pre-validation normalization of decoded JSON against a target shape.

Runs on the engine's builtin output (dicts, lists, strings, numbers)
before validation:

- unknown model, dataclass and typed-dict fields are dropped
- absent or null collections become empty collections

Empty strings are left for the post-decode pass, after validation has
accepted them, so that leaves typed plain ``str`` still decode.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from pydantic import AliasChoices, AliasPath, BaseModel
from pydantic.fields import FieldInfo

from codecpolicy.domain.rules import ImmutableCollectionPolicy
from codecpolicy.domain.shapes import (
    ShapeKind,
    classify,
    empty_container,
    record_fields,
    tuple_item,
)


class _InputField(NamedTuple):
    keys: list[tuple[str, bool]]
    annotation: Any
    absent_means_empty: bool


def normalize(shape: Any, value: Any) -> Any:
    """Normalize builtin *value* for validation against *shape*."""
    kind, args = classify(shape)
    if kind in ImmutableCollectionPolicy.KINDS:
        value = ImmutableCollectionPolicy.substitute(kind, value)
        if kind is ShapeKind.MAP and isinstance(value, Mapping):
            return {k: normalize(args[0], v) for k, v in value.items()}
        if kind is not ShapeKind.MAP and isinstance(value, (list, tuple)):
            return [normalize(args[0], v) for v in value]
        return value
    if kind is ShapeKind.TUPLE and isinstance(value, (list, tuple)):
        return [normalize(tuple_item(args, i), v) for i, v in enumerate(value)]
    if kind is ShapeKind.MODEL:
        return _normalize_fields(value, _model_fields(args[0]))
    if kind in (ShapeKind.DATACLASS, ShapeKind.TYPED_DICT):
        fields = (
            _InputField([(name, False)], f.annotation, f.absent_means_empty)
            for name, f in record_fields(args[0]).items()
        )
        return _normalize_fields(value, fields)
    return value


def _normalize_fields(value: Any, fields: Iterable[_InputField]) -> Any:
    if not isinstance(value, Mapping):
        return value

    result: dict[str, Any] = {}
    for field in fields:
        found = next(((k, is_path) for k, is_path in field.keys if k in value), None)
        if found is None:
            kind = classify(field.annotation).kind
            first_key = next((k for k, is_path in field.keys if not is_path), None)
            if (
                first_key is not None
                and kind in ImmutableCollectionPolicy.KINDS
                and field.absent_means_empty
            ):
                result[first_key] = empty_container(kind)
            continue
        key, is_path = found
        # Alias paths select below the top level; pass those through untouched.
        result[key] = value[key] if is_path else normalize(field.annotation, value[key])
    return result


def _model_fields(model_cls: type[BaseModel]) -> list[_InputField]:
    return [
        _InputField(
            _input_keys(name, info, by_name=_validates_by_name(model_cls, info)),
            info.annotation,
            _absent_means_empty(info),
        )
        for name, info in model_cls.model_fields.items()
    ]


def _input_keys(name: str, field: FieldInfo, *, by_name: bool) -> list[tuple[str, bool]]:
    """Top-level input keys that may carry *field*, in lookup order.

    Each entry is ``(key, is_path)``; ``is_path`` marks the first segment
    of an :class:`AliasPath`.
    """
    keys: list[tuple[str, bool]] = []
    alias = field.validation_alias
    choices: list[Any] = list(alias.choices) if isinstance(alias, AliasChoices) else [alias]
    for choice in choices:
        if isinstance(choice, str):
            keys.append((choice, False))
        elif isinstance(choice, AliasPath) and isinstance(choice.path[0], str):
            keys.append((choice.path[0], True))
    if field.alias:
        keys.append((field.alias, False))
    if by_name or not keys:
        keys.append((name, False))
    deduped: dict[str, bool] = {}
    for key, is_path in keys:
        deduped.setdefault(key, is_path)
    return list(deduped.items())


def _absent_means_empty(field: FieldInfo) -> bool:
    if field.is_required():
        return True
    return field.default_factory is None and field.default is None


def _validates_by_name(model_cls: type[BaseModel], field: FieldInfo) -> bool:
    if field.alias is None and field.validation_alias is None:
        return True
    config = model_cls.model_config
    return bool(config.get("validate_by_name") or config.get("populate_by_name"))
