"""HTML escaping for interpolated values.

``html_escape`` replaces the five markup-significant characters in a single
``str.translate()`` pass, then, for output charsets narrower than Unicode,
rewrites every character the charset cannot encode as a named entity
(``&eacute;``) or, when HTML has no name for it, a numeric reference
(``&#8364;``).
"""

from __future__ import annotations

import codecs
from functools import lru_cache
from html.entities import codepoint2name
from typing import Any

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

# Charsets that can encode every code point; nothing beyond the five
# markup characters ever needs an entity for them.
_UNICODE_CHARSETS = frozenset({"utf-8", "utf-16", "utf-32", "utf-8-sig"})


@lru_cache(maxsize=32)
def normalize_charset(charset: str) -> str:
    """Return the canonical codec name for ``charset``.

    Raises:
        LookupError: If Python has no codec for ``charset``.
    """
    return codecs.lookup(charset).name


def _entity(char: str) -> str:
    codepoint = ord(char)
    name = codepoint2name.get(codepoint)
    if name is not None:
        return f"&{name};"
    return f"&#{codepoint};"


def html_escape(value: Any, charset: str = "utf-8") -> str:
    """Escape ``value`` for inclusion in markup.

    Args:
        value: Value to escape. ``None`` becomes ``""``, anything else is
            converted with ``str()``.
        charset: Output character set. Characters it cannot represent are
            replaced by entities.

    Example:
        >>> html_escape("<b>Tom & Jerry</b>")
        '&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;'
        >>> html_escape("café", charset="ascii")
        'caf&eacute;'
    """
    if value is None:
        return ""
    escaped = str(value).translate(_ESCAPE_TABLE)

    codec = normalize_charset(charset)
    if codec in _UNICODE_CHARSETS or escaped.isascii():
        return escaped
    try:
        escaped.encode(codec)
    except UnicodeEncodeError:
        pass
    else:
        return escaped

    out: list[str] = []
    for char in escaped:
        try:
            char.encode(codec)
        except UnicodeEncodeError:
            out.append(_entity(char))
        else:
            out.append(char)
    return "".join(out)
