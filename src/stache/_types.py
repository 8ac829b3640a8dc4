"""Token types produced by the stache lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TokenType(Enum):
    """Kinds of lexical tokens.

    Each tag modifier maps to exactly one token type, plain text between tags
    is a single DATA token.
    """

    DATA = "data"
    VARIABLE = "variable"  # {{name}}
    RAW_VARIABLE = "raw_variable"  # {{{name}}} / {{&name}}
    SECTION_BEGIN = "section_begin"  # {{#name}}
    INVERTED_BEGIN = "inverted_begin"  # {{^name}}
    SECTION_END = "section_end"  # {{/name}}
    COMMENT = "comment"  # {{!text}}
    PARTIAL = "partial"  # {{>name}}
    DELIMITER = "delimiter"  # {{=<% %>=}}
    PRAGMA = "pragma"  # {{%NAME key=value}}
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexical token.

    Attributes:
        type: Token kind
        value: Tag name (trimmed) or literal text for DATA tokens
        lineno: 1-based line of the token start
        col_offset: 0-based column of the token start
        raw: Exact source text consumed by the token
        extra: Token-specific payload (pragma options, delimiter pair)
    """

    type: TokenType
    value: str
    lineno: int
    col_offset: int
    raw: str = ""
    extra: Any = field(default=None, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col_offset})"
