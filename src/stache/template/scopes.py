"""Scope adapters: one lookup interface over every kind of view value.

A context stack holds scopes, and a scope wraps one view value. The wrapper
is chosen by value kind:

    Mapping        → MappingScope   key lookup
    str/number/... → ScalarScope    exposes nothing
    list/tuple/... → SequenceScope  integer names index the sequence
    anything else  → ObjectScope    attributes, then zero-argument methods

Every lookup returns the value or the ``MISSING`` sentinel. The decision
to raise or render nothing is taken later by the renderer.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Mapping, Sequence
from functools import lru_cache
from typing import Any

from stache.template.helpers import MISSING, is_scalar


def _allows_no_arguments(signature: inspect.Signature, skip: int = 0) -> bool:
    params = list(signature.parameters.values())[skip:]
    return all(
        p.default is not p.empty or p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
        for p in params
    )


@lru_cache(maxsize=512)
def _function_takes_no_arguments(func: Any) -> bool:
    # Plain function behind a bound method; its first parameter is bound.
    return _allows_no_arguments(inspect.signature(func), skip=1)


def _takes_no_arguments(member: Any) -> bool:
    func = getattr(member, "__func__", None)
    if func is not None:
        return _function_takes_no_arguments(func)
    try:
        signature = inspect.signature(member)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures
        return False
    return _allows_no_arguments(signature)


def _is_accessor(owner: Any, name: str, member: Any) -> bool:
    if not inspect.isroutine(member):
        return False
    # Functions stored on the instance itself are data, not methods.
    return name not in getattr(owner, "__dict__", ())


class Scope:
    """Base scope: defines nothing."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def try_get_field(self, name: str) -> Any:
        """Named member / entry ``name``, or MISSING."""
        return MISSING

    def try_get_invocable(self, name: str) -> Any:
        """Result of calling the zero-argument accessor ``name``, or MISSING."""
        return MISSING

    def lookup(self, name: str) -> Any:
        """Field first, then invocable."""
        value = self.try_get_field(name)
        if value is MISSING:
            value = self.try_get_invocable(name)
        return value

    def names(self) -> Iterable[str]:
        """Names this scope can resolve (used for "Did you mean?" hints)."""
        return ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class ScalarScope(Scope):
    __slots__ = ()


class MappingScope(Scope):
    """Scope over a mapping: ``name`` resolves to ``value[name]``."""

    __slots__ = ()

    def try_get_field(self, name: str) -> Any:
        mapping: Mapping[Any, Any] = self.value
        if name in mapping:
            return mapping[name]
        return MISSING

    def names(self) -> Iterable[str]:
        return (key for key in self.value if isinstance(key, str))


class SequenceScope(Scope):
    """Scope over a sequence: ``"0"``, ``"1"``, ... resolve to items."""

    __slots__ = ()

    def try_get_field(self, name: str) -> Any:
        if not (name.isascii() and name.isdigit()):
            return MISSING
        sequence: Sequence[Any] = self.value
        index = int(name)
        if index < len(sequence):
            return sequence[index]
        return MISSING


class ObjectScope(Scope):
    """Scope over an arbitrary object.

    A public attribute that is not a method is a field (properties
    included) and so is a function stored on the instance. A method or
    static method callable without arguments is an accessor and is invoked
    on lookup. Names starting with ``_`` are never exposed.
    """

    __slots__ = ()

    def _member(self, name: str) -> Any:
        if not name or name.startswith("_"):
            return MISSING
        try:
            return getattr(self.value, name)
        except AttributeError:
            return MISSING

    def try_get_field(self, name: str) -> Any:
        member = self._member(name)
        if member is MISSING or _is_accessor(self.value, name, member):
            return MISSING
        return member

    def try_get_invocable(self, name: str) -> Any:
        member = self._member(name)
        if member is MISSING or not _is_accessor(self.value, name, member):
            return MISSING
        if not _takes_no_arguments(member):
            return MISSING
        return member()

    def lookup(self, name: str) -> Any:
        # Single getattr: properties may be expensive or have side effects.
        member = self._member(name)
        if member is MISSING or not _is_accessor(self.value, name, member):
            return member
        if not _takes_no_arguments(member):
            return MISSING
        return member()

    def names(self) -> Iterable[str]:
        return (name for name in dir(self.value) if not name.startswith("_"))


def as_scope(value: Any) -> Scope:
    """Wrap ``value`` in the scope adapter for its kind."""
    if isinstance(value, Scope):
        return value
    if isinstance(value, Mapping):
        return MappingScope(value)
    if is_scalar(value):
        return ScalarScope(value)
    if isinstance(value, Sequence):
        return SequenceScope(value)
    return ObjectScope(value)
