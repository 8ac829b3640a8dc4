"""Value classification helpers used while rendering.

The renderer needs to answer a few questions about arbitrary view values:
is it empty (inverted sections), should a section iterate over it, is it a
scalar that renders its body without a new scope. They are collected here
as pure functions.

Thread-Safety:
All functions are stateless and safe for concurrent use.

"""

from __future__ import annotations

from collections.abc import Collection, Iterator, Mapping, Sized
from numbers import Number
from typing import Any


class _Missing:
    """Sentinel for a name no scope defines.

    Distinct from ``None``, which is a legitimate view value.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

_STRING_TYPES = (str, bytes, bytearray)


def is_scalar(value: Any) -> bool:
    """Strings, bytes, numbers (booleans included) and ``None``."""
    return value is None or isinstance(value, (*_STRING_TYPES, Number))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_list_like(value: Any) -> bool:
    """Whether a section iterates over ``value`` item by item.

    True for non-string collections that are not mappings (lists, tuples,
    ranges, sets, dict views) and for iterators such as generators.
    """
    return (
        isinstance(value, (Collection, Iterator))
        and not isinstance(value, (*_STRING_TYPES, Mapping))
    )


def is_empty(value: Any) -> bool:
    """Whether an inverted section fires for ``value``.

    Empty means missing, ``None``, ``False``, an empty string, numeric zero
    or an empty collection. Other objects are never empty.

    Example:
        >>> [is_empty(v) for v in (MISSING, None, False, "", 0, 0.0, [], {})]
        [True, True, True, True, True, True, True, True]
        >>> [is_empty(v) for v in (True, "0", 1, [0], {"a": None}, object())]
        [False, False, False, False, False, False]
    """
    if value is MISSING or value is None or value is False:
        return True
    if isinstance(value, Number):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def str_safe(value: Any) -> str:
    """Convert a value for output, rendering ``None`` and MISSING as ``""``."""
    if value is None or value is MISSING:
        return ""
    return str(value)
