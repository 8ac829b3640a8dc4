"""Structural nodes for the stache AST."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from stache.nodes.base import Node

PragmaValue = bool | Mapping[str, str]


@dataclass(frozen=True, slots=True)
class Section(Node):
    """Conditional / iterative block: {{#name}}...{{/name}}"""

    name: str
    body: Sequence[Node]


@dataclass(frozen=True, slots=True)
class InvertedSection(Node):
    """Inverted block, rendered only for empty values: {{^name}}...{{/name}}"""

    name: str
    body: Sequence[Node]


@dataclass(frozen=True, slots=True)
class Partial(Node):
    """Partial inclusion: {{>name}}"""

    name: str


@dataclass(frozen=True, slots=True)
class DelimiterChange(Node):
    """Delimiter redefinition: {{=<% %>=}}

    Applied by the lexer while scanning; kept in the tree so the template
    structure stays inspectable.
    """

    open: str
    close: str


@dataclass(frozen=True, slots=True)
class Pragma(Node):
    """Pragma activation: {{%DOT-NOTATION}}

    ``options`` is empty for a plain activation.
    """

    name: str
    options: Mapping[str, str] = field(default_factory=dict)

    @property
    def value(self) -> PragmaValue:
        """Recorded pragma state: ``True`` or the options mapping."""
        return dict(self.options) if self.options else True


@dataclass(frozen=True, slots=True)
class Template(Node):
    """Root node: a parsed template with its activated pragmas."""

    body: Sequence[Node]
    pragmas: Mapping[str, PragmaValue] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class UnmatchedSectionTag(Node):
    """Section tag without a partner: ``{{#name}}``/``{{^name}}`` never
    closed, or ``{{/name}}`` never opened.

    Kept in the tree so the section policy is applied only if rendering
    reaches the tag. ``tag`` is ``"#"``, ``"^"`` or ``"/"``.
    """

    name: str
    tag: str
