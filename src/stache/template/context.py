"""Context stack and name resolution.

A ``ContextStack`` is an immutable tuple of scopes, innermost first.
Sections and partials never mutate the stack they were given. They call
``push()`` and render against the returned stack, so sibling iterations
never see each other's scope.

Resolution:
    plain      ``name`` is looked up innermost → outermost, first hit wins.
    dotted     (DOT-NOTATION pragma) ``a.b.c`` resolves ``a`` against the full
               stack, then ``b`` against a stack holding only ``a``'s value,
               then ``c`` against only ``b``'s value. Outer scopes are
               invisible past the first segment.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from stache.template.helpers import MISSING
from stache.template.scopes import Scope, as_scope


class ContextStack:
    """Ordered scopes used for name resolution, innermost first.

    Example:
        >>> stack = ContextStack.from_view({"name": "outer", "x": 1})
        >>> stack.push({"name": "inner"}).resolve("name")
        'inner'
        >>> stack.push({"name": "inner"}).resolve("x")
        1
    """

    __slots__ = ("_scopes",)

    def __init__(self, scopes: tuple[Scope, ...] = ()):
        self._scopes = scopes

    @classmethod
    def from_view(cls, view: Any) -> ContextStack:
        """Stack with ``view`` as its only scope (empty for ``None``)."""
        if view is None:
            return cls()
        return cls((as_scope(view),))

    def push(self, value: Any) -> ContextStack:
        """New stack with ``value`` as innermost scope; ``self`` is unchanged."""
        return ContextStack((as_scope(value), *self._scopes))

    def lookup(self, name: str) -> Any:
        """Plain lookup of ``name``; MISSING if no scope defines it."""
        for scope in self._scopes:
            value = scope.lookup(name)
            if value is not MISSING:
                return value
        return MISSING

    def resolve(self, name: str, *, dot_notation: bool = False) -> Any:
        """Resolve ``name``, traversing dotted paths when ``dot_notation`` is set."""
        if not dot_notation or "." not in name:
            return self.lookup(name)

        first, *rest = name.split(".")
        value = self.lookup(first)
        for segment in rest:
            if value is MISSING:
                break
            value = ContextStack.from_view(value).lookup(segment)
        return value

    def names(self) -> frozenset[str]:
        """All names resolvable from this stack."""
        found: set[str] = set()
        for scope in self._scopes:
            found.update(scope.names())
        return frozenset(found)

    def __len__(self) -> int:
        return len(self._scopes)

    def __iter__(self) -> Iterator[Scope]:
        return iter(self._scopes)

    def __repr__(self) -> str:
        return f"ContextStack({list(self._scopes)!r})"
