"""Read-only list, set, and mapping containers.

Each container subclasses its mutable builtin so it compares equal to,
serializes like, and passes ``isinstance`` checks for the builtin.
Every mutating method raises ``TypeError``.
"""

from __future__ import annotations

from typing import Any, NoReturn


def _read_only(self: Any, *args: Any, **kwargs: Any) -> NoReturn:
    msg = f"'{type(self).__name__}' object is read-only"
    raise TypeError(msg)


class FrozenList(list):  # type: ignore[type-arg]
    """A list that rejects mutation after construction."""

    __slots__ = ()

    append = extend = insert = remove = pop = clear = sort = reverse = _read_only
    __setitem__ = __delitem__ = __iadd__ = __imul__ = _read_only

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (list(self),))

    def __repr__(self) -> str:
        return f"FrozenList({list.__repr__(self)})"


class FrozenSet(set):  # type: ignore[type-arg]
    """A set that rejects mutation after construction."""

    __slots__ = ()

    add = discard = remove = pop = clear = update = _read_only
    intersection_update = difference_update = symmetric_difference_update = _read_only
    __ior__ = __iand__ = __isub__ = __ixor__ = _read_only

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (set(self),))

    def __repr__(self) -> str:
        return f"FrozenSet({set.__repr__(self)})"


class FrozenDict(dict):  # type: ignore[type-arg]
    """A mapping that rejects mutation after construction."""

    __slots__ = ()

    clear = pop = popitem = setdefault = update = _read_only
    __setitem__ = __delitem__ = __ior__ = _read_only

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (dict(self),))

    def __repr__(self) -> str:
        return f"FrozenDict({dict.__repr__(self)})"
