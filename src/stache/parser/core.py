"""Stache parser: token stream → immutable node tree.

Recursive descent over the lexer's flat token stream. Section tags are
paired with a stack of open section names, so nested sections of the same
name pair innermost first:

    {{#a}}{{#a}}x{{/a}}{{/a}}  →  Section(a, [Section(a, [Text(x)])])

Whitespace directly after a section's open tag and directly after its
close tag is dropped:

    {{#a}}\\n  x\\n{{/a}}\\nY  →  Section(a, [Text("x\\n")]), Text("Y")

A section tag without a partner becomes an ``UnmatchedSectionTag`` node;
an unclosed section's body follows it as ordinary content. The
environment's ``strict_sections`` policy is applied by the renderer when
it reaches such a node, so a stray tag inside a section that never renders
is never an error.

Pragmas are validated here (unknown names always raise) and collected into
``Template.pragmas``. They apply to the whole template regardless of where
the tag appears.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from stache._types import Token, TokenType
from stache.nodes import (
    Comment,
    DelimiterChange,
    InvertedSection,
    Node,
    Partial,
    Pragma,
    PragmaValue,
    Section,
    Template,
    Text,
    UnmatchedSectionTag,
    Variable,
)
from stache.pragmas import validate

# Token type → parse method. SECTION_END and EOF terminate a body instead.
_TOKEN_PARSERS: dict[TokenType, str] = {
    TokenType.DATA: "_parse_data",
    TokenType.VARIABLE: "_parse_variable",
    TokenType.RAW_VARIABLE: "_parse_variable",
    TokenType.SECTION_BEGIN: "_parse_section",
    TokenType.INVERTED_BEGIN: "_parse_section",
    TokenType.COMMENT: "_parse_comment",
    TokenType.PARTIAL: "_parse_partial",
    TokenType.DELIMITER: "_parse_delimiter",
    TokenType.PRAGMA: "_parse_pragma",
}

_SECTION_TAGS = {
    TokenType.SECTION_BEGIN: "#",
    TokenType.INVERTED_BEGIN: "^",
    TokenType.SECTION_END: "/",
}

_WHITESPACE = " \t\n\r\f\v"


def _strip_leading(body: list[Node]) -> list[Node]:
    """Drop leading whitespace from a section body's first text node."""
    if not body or not isinstance(body[0], Text):
        return body
    value = body[0].value.lstrip(_WHITESPACE)
    if not value:
        return body[1:]
    return [replace(body[0], value=value), *body[1:]]


class Parser:
    """Build a ``nodes.Template`` from tokens.

    Example:
        >>> from stache.lexer import tokenize
        >>> Parser(tokenize("{{#items}}{{name}}{{/items}}")).parse().body
        (Section(lineno=1, col_offset=0, name='items', body=(Variable(...),)),)
    """

    __slots__ = ("_name", "_open", "_pos", "_pragmas", "_source", "_strip_next", "_tokens")

    def __init__(
        self,
        tokens: Sequence[Token],
        name: str | None = None,
        source: str | None = None,
    ):
        self._tokens = tokens
        self._name = name
        self._source = source
        self._pos = 0
        self._open: list[str] = []
        self._pragmas: dict[str, PragmaValue] = {}
        self._strip_next = False

    def parse(self) -> Template:
        """Parse all tokens into a Template node."""
        body = self._parse_body()
        return Template(lineno=1, col_offset=0, body=tuple(body), pragmas=dict(self._pragmas))

    # -- token navigation ---------------------------------------------------

    @property
    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.type is not TokenType.EOF:
            self._pos += 1
        return token

    def _location(self, token: Token) -> dict[str, object]:
        return {
            "lineno": token.lineno,
            "name": self._name,
            "source": self._source,
            "col_offset": token.col_offset,
        }

    # -- bodies ---------------------------------------------------------------

    def _parse_body(self) -> list[Node]:
        """Parse nodes until EOF or a close tag for an open section."""
        body: list[Node] = []
        while True:
            token = self._current
            if token.type is TokenType.EOF:
                return body
            if token.type is TokenType.SECTION_END:
                if token.value in self._open:
                    return body
                body.append(self._unmatched(self._advance()))
                continue

            result = getattr(self, _TOKEN_PARSERS[token.type])()
            if isinstance(result, list):
                body.extend(result)
            elif result is not None:
                body.append(result)

    def _parse_section(self) -> Section | InvertedSection | list[Node]:
        start = self._advance()
        self._open.append(start.value)
        try:
            body = self._parse_body()
        finally:
            self._open.pop()

        end = self._current
        if end.type is TokenType.SECTION_END and end.value == start.value:
            self._advance()
            self._strip_next = self._current.type is TokenType.DATA
            node_cls = InvertedSection if start.type is TokenType.INVERTED_BEGIN else Section
            return node_cls(
                lineno=start.lineno,
                col_offset=start.col_offset,
                name=start.value,
                body=tuple(_strip_leading(body)),
            )

        # EOF, or a close tag belonging to an enclosing section.
        return [self._unmatched(start), *body]

    @staticmethod
    def _unmatched(token: Token) -> UnmatchedSectionTag:
        return UnmatchedSectionTag(
            lineno=token.lineno,
            col_offset=token.col_offset,
            name=token.value,
            tag=_SECTION_TAGS[token.type],
        )

    # -- single tags --------------------------------------------------------

    def _parse_data(self) -> Text | None:
        token = self._advance()
        value = token.value
        if self._strip_next:
            self._strip_next = False
            value = value.lstrip(_WHITESPACE)
            if not value:
                return None
        return Text(lineno=token.lineno, col_offset=token.col_offset, value=value)

    def _parse_variable(self) -> Variable:
        token = self._advance()
        return Variable(
            lineno=token.lineno,
            col_offset=token.col_offset,
            name=token.value,
            escape=token.type is TokenType.VARIABLE,
        )

    def _parse_comment(self) -> Comment:
        token = self._advance()
        return Comment(lineno=token.lineno, col_offset=token.col_offset, text=token.value)

    def _parse_partial(self) -> Partial:
        token = self._advance()
        return Partial(lineno=token.lineno, col_offset=token.col_offset, name=token.value)

    def _parse_delimiter(self) -> DelimiterChange:
        token = self._advance()
        return DelimiterChange(
            lineno=token.lineno,
            col_offset=token.col_offset,
            open=token.extra.open,
            close=token.extra.close,
        )

    def _parse_pragma(self) -> None:
        token = self._advance()
        name = validate(token.value, **self._location(token))
        pragma = Pragma(
            lineno=token.lineno,
            col_offset=token.col_offset,
            name=name,
            options=token.extra or {},
        )
        self._pragmas[name] = pragma.value
