"""Stache lexer: delimiter-aware tag recognition.

Splits template source into a flat token stream. The lexer owns the
*delimiter registry*: the current open/close markers and the regex built
for them. A ``{{=<% %>=}}`` tag swaps the registry for the remainder of the
source, so every later tag (including those inside section bodies that
follow) is recognised with the new pair.

Pragma tags are recognised here as well, together with the single trailing
newline they consume:

    "{{%DOT-NOTATION}}\\n{{name}}"  →  PRAGMA, VARIABLE, EOF

Text that merely looks like a tag opener (``{{`` with no close, ``{{}}``)
is kept as literal DATA.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from stache._types import Token, TokenType
from stache.environment.exceptions import DelimiterError
from stache.pragmas import PRAGMA_BODY, parse_options

logger = logging.getLogger(__name__)

# Modifier character → token type for the generic single-tag form.
_MODIFIERS: dict[str, TokenType] = {
    "": TokenType.VARIABLE,
    "&": TokenType.RAW_VARIABLE,
    "#": TokenType.SECTION_BEGIN,
    "^": TokenType.INVERTED_BEGIN,
    "/": TokenType.SECTION_END,
    ">": TokenType.PARTIAL,
}


@lru_cache(maxsize=64)
def _compile_tag_pattern(open_tag: str, close_tag: str) -> re.Pattern[str]:
    o = re.escape(open_tag)
    c = re.escape(close_tag)
    # Tag contents never span a close delimiter; names never span an opener.
    inner = rf"(?:(?!{c}|{o}).)+?"
    return re.compile(
        rf"{o}(?:"
        rf"\{{(?P<triple>{inner})\}}{c}"
        rf"|=(?P<delims>(?:(?!={c}).)+?)={c}"
        rf"|%{PRAGMA_BODY}{c}(?P<chomp>\n)?"
        rf"|!(?P<comment>(?:(?!{c}).)*?){c}"
        rf"|(?P<mod>[#^/>&]?)(?P<name>(?:(?!{c}|{o}).)*?){c}"
        r")",
        re.DOTALL,
    )


@dataclass(frozen=True, slots=True)
class Delimiters:
    """An open/close tag marker pair.

    Example:
        >>> Delimiters.parse("<% %>")
        Delimiters(open='<%', close='%>')
    """

    open: str = "{{"
    close: str = "}}"

    @property
    def tag_pattern(self) -> re.Pattern[str]:
        """Compiled matcher for any tag at the current pair (cached per pair)."""
        return _compile_tag_pattern(self.open, self.close)

    @classmethod
    def parse(cls, text: str) -> Delimiters:
        """Parse the body of a delimiter-change tag.

        Raises:
            DelimiterError: Unless ``text`` holds exactly two
                whitespace-separated tokens.
        """
        parts = text.split()
        if len(parts) != 2:
            raise DelimiterError(f"Invalid delimiter change: {text.strip()!r}")
        return cls(parts[0], parts[1])


DEFAULT_DELIMITERS = Delimiters()


class Lexer:
    """Tokenize stache template source.

    Attributes:
        source: Template text
        name: Template name for error messages
        delimiters: Current delimiter pair (changes while scanning)

    Example:
        >>> [t.type.name for t in Lexer("Hi {{name}}!").tokenize()]
        ['DATA', 'VARIABLE', 'DATA', 'EOF']
    """

    __slots__ = ("_line_pos", "_lineno", "delimiters", "name", "source")

    def __init__(
        self,
        source: str,
        delimiters: Delimiters = DEFAULT_DELIMITERS,
        name: str | None = None,
    ):
        self.source = source
        self.delimiters = delimiters
        self.name = name
        self._lineno = 1
        self._line_pos = 0

    def tokenize(self) -> list[Token]:
        """Scan the whole source and return its tokens, ending with EOF."""
        source = self.source
        tokens: list[Token] = []
        text_start = 0
        pos = 0

        while True:
            start = source.find(self.delimiters.open, pos)
            if start == -1:
                break
            match = self.delimiters.tag_pattern.match(source, start)
            token = self._make_token(match, start) if match else None
            if token is None:
                # Not a tag; the opener stays part of the literal text.
                pos = start + 1
                continue

            if start > text_start:
                tokens.append(self._data(text_start, start))
            tokens.append(token)
            if token.type is TokenType.DELIMITER:
                self.delimiters = token.extra
                logger.debug(
                    "Delimiters changed to %r %r in %s",
                    token.extra.open,
                    token.extra.close,
                    self.name or "<template>",
                )
            pos = text_start = match.end()

        if text_start < len(source):
            tokens.append(self._data(text_start, len(source)))
        lineno, col = self._position(len(source))
        tokens.append(Token(TokenType.EOF, "", lineno, col))
        return tokens

    def _make_token(self, match: re.Match[str], start: int) -> Token | None:
        lineno, col = self._position(start)
        raw = match.group(0)
        groups = match.groupdict()

        if groups["triple"] is not None:
            name = groups["triple"].strip()
            return Token(TokenType.RAW_VARIABLE, name, lineno, col, raw) if name else None

        if groups["delims"] is not None:
            try:
                delimiters = Delimiters.parse(groups["delims"])
            except DelimiterError as e:
                raise DelimiterError(
                    e.message, lineno=lineno, name=self.name, source=self.source, col_offset=col
                ) from None
            return Token(TokenType.DELIMITER, groups["delims"].strip(), lineno, col, raw, delimiters)

        if groups["pragma"] is not None:
            options = parse_options(groups["options"])
            return Token(TokenType.PRAGMA, groups["pragma"], lineno, col, raw, options)

        if groups["comment"] is not None:
            return Token(TokenType.COMMENT, groups["comment"].strip(), lineno, col, raw)

        name = groups["name"].strip()
        if not name:
            return None
        return Token(_MODIFIERS[groups["mod"]], name, lineno, col, raw)

    def _data(self, start: int, end: int) -> Token:
        lineno, col = self._position(start)
        value = self.source[start:end]
        return Token(TokenType.DATA, value, lineno, col, value)

    def _position(self, offset: int) -> tuple[int, int]:
        """Line and column of ``offset``, counted incrementally from the last query."""
        source = self.source
        if offset > self._line_pos:
            self._lineno += source.count("\n", self._line_pos, offset)
        elif offset < self._line_pos:
            self._lineno -= source.count("\n", offset, self._line_pos)
        self._line_pos = offset
        col = offset - (source.rfind("\n", 0, offset) + 1)
        return self._lineno, col


def tokenize(
    source: str,
    delimiters: Delimiters = DEFAULT_DELIMITERS,
    name: str | None = None,
) -> list[Token]:
    """Convenience wrapper: ``Lexer(source, delimiters, name).tokenize()``."""
    return Lexer(source, delimiters, name).tokenize()
