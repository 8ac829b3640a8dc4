"""Output nodes for the stache AST."""

from __future__ import annotations

from dataclasses import dataclass

from stache.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text between tags, copied through unchanged."""

    value: str


@dataclass(frozen=True, slots=True)
class Variable(Node):
    """Interpolation: {{name}} (escape=True), {{{name}}} / {{&name}} (escape=False).

    ``escape`` records the tag syntax only. The UNESCAPED pragma inverts it
    at render time.
    """

    name: str
    escape: bool = True


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Comment: {{! text }}"""

    text: str
