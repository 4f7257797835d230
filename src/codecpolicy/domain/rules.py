"""Leaf rules of the codec policy.

- ``empty_string_to_none``: an empty string decodes to the absent value.
- ``ImmutableCollectionPolicy``: absent collections become empty ones and
  every decoded collection is wrapped read-only.
- ``prune_empty``: serialization drops entries whose value is empty.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from codecpolicy.domain.frozen import FrozenDict, FrozenList, FrozenSet
from codecpolicy.domain.shapes import ShapeKind, empty_container


def empty_string_to_none(value: Any) -> Any:
    """Return None for ``""``; pass anything else through unchanged."""
    if value == "" and isinstance(value, str):
        return None
    return value


class ImmutableCollectionPolicy:
    """Null substitution and read-only wrapping for collection shapes."""

    KINDS: frozenset[ShapeKind] = frozenset({ShapeKind.LIST, ShapeKind.SET, ShapeKind.MAP})

    @classmethod
    def substitute(cls, kind: ShapeKind, value: Any) -> Any:
        """Replace an absent *value* with an empty container of *kind*."""
        if value is None and kind in cls.KINDS:
            return empty_container(kind)
        return value

    @staticmethod
    def wrap_list(value: Any) -> Any:
        if isinstance(value, FrozenList) or not isinstance(value, (list, tuple)):
            return value
        return FrozenList(value)

    @staticmethod
    def wrap_set(value: Any) -> Any:
        if isinstance(value, FrozenSet) or not isinstance(value, (set, frozenset)):
            return value
        return FrozenSet(value)

    @staticmethod
    def wrap_map(value: Any) -> Any:
        if isinstance(value, FrozenDict) or not isinstance(value, Mapping):
            return value
        return FrozenDict(value)


def normalize_untyped(value: Any) -> Any:
    """Apply the string and collection rules to an untyped value by runtime type.

    Mapping keys are left alone.
    """
    if isinstance(value, Mapping):
        return ImmutableCollectionPolicy.wrap_map(
            {k: normalize_untyped(v) for k, v in value.items()}
        )
    if isinstance(value, list):
        return ImmutableCollectionPolicy.wrap_list([normalize_untyped(v) for v in value])
    if isinstance(value, (set, frozenset)):
        return ImmutableCollectionPolicy.wrap_set({normalize_untyped(v) for v in value})
    return empty_string_to_none(value)


# ── Serialization ────────────────────────────────────────────────────


def is_empty(value: Any) -> bool:
    """Whether *value* counts as empty for serialization purposes."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, set, frozenset, Mapping)):
        return len(value) == 0
    return False


def prune_empty(value: Any) -> Any:
    """Drop empty mapping entries, recursively.

    Emptiness is judged before nested pruning, so a non-empty object whose
    fields are all empty is kept as ``{}``. List elements are never dropped.
    """
    if isinstance(value, Mapping):
        return {k: prune_empty(v) for k, v in value.items() if not is_empty(v)}
    if isinstance(value, (list, tuple)):
        return [prune_empty(v) for v in value]
    return value
