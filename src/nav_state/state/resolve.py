"""Value resolution and equality rules shared by the state containers."""

from __future__ import annotations

import numbers
from typing import Any, Callable, TypeVar, Union

S = TypeVar("S")

StateUpdate = Union[S, Callable[[S], S]]
StateInit = Union[S, Callable[[], S]]

# Immutable scalars compare by value; everything else compares by identity.
_SCALAR_TYPES = (str, bytes, type(None))


def strictly_equal(left: Any, right: Any) -> bool:
    """Return True when ``left`` and ``right`` are the same state.

    Containers and other mutable objects are only equal to themselves, so an
    equal-looking copy still counts as a new state. Scalars of the same type
    compare by value, and numbers compare by value across numeric types
    (``1`` and ``1.0`` are the same state). Booleans only match booleans.
    """

    if left is right:
        return True
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, numbers.Number) and isinstance(right, numbers.Number):
        return bool(left == right)
    if type(left) is type(right) and isinstance(left, _SCALAR_TYPES):
        return bool(left == right)
    return False


def resolve_initial(value: StateInit[S]) -> S:
    """Call a lazy initializer, or return ``value`` untouched."""

    if callable(value):
        return value()
    return value


def resolve_update(value: StateUpdate[S], current: S) -> S:
    """Apply an updater to ``current``, or return the literal ``value``."""

    if callable(value):
        return value(current)
    return value


__all__ = [
    "StateInit",
    "StateUpdate",
    "resolve_initial",
    "resolve_update",
    "strictly_equal",
]
