"""Stache AST node definitions.

Immutable, slotted dataclasses produced by the parser and walked by the
renderer:

    Template
    ├── Text              literal text
    ├── Variable          {{name}} / {{{name}}} / {{&name}}
    ├── Comment           {{!text}}
    ├── Partial           {{>name}}
    ├── DelimiterChange   {{=<% %>=}}
    ├── Section           {{#name}}...{{/name}}
    ├── InvertedSection   {{^name}}...{{/name}}
    └── UnmatchedSectionTag  stray {{#name}} / {{^name}} / {{/name}}

Pragmas are not part of the body. The parser collects them into
``Template.pragmas``.
"""

from stache.nodes.base import Node
from stache.nodes.output import Comment, Text, Variable
from stache.nodes.structure import (
    DelimiterChange,
    InvertedSection,
    Partial,
    Pragma,
    PragmaValue,
    Section,
    Template,
    UnmatchedSectionTag,
)

__all__ = [
    "Comment",
    "DelimiterChange",
    "InvertedSection",
    "Node",
    "Partial",
    "Pragma",
    "PragmaValue",
    "Section",
    "Template",
    "Text",
    "UnmatchedSectionTag",
    "Variable",
]
