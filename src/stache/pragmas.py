"""Pragma recognition and validation.

A pragma tag switches a rendering mode for the template that declares it:

    {{%DOT-NOTATION}}            dotted names traverse nested values
    {{%UNESCAPED}}               swap the escaping of {{x}} and {{{x}}}
    {{%DOT-NOTATION key=value}}  activation with options

The tag and exactly one newline directly after it are removed from the
output. Pragmas are scoped to one template: a partial must declare the
pragmas it needs itself.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from stache.environment.exceptions import UnknownPragmaError

DOT_NOTATION = "DOT-NOTATION"
UNESCAPED = "UNESCAPED"

IMPLEMENTED_PRAGMAS: frozenset[str] = frozenset({DOT_NOTATION, UNESCAPED})

# Body of a pragma tag between "<open>%" and "<close>".
PRAGMA_BODY = r"\s*(?P<pragma>[\w-]+)(?P<options>(?:\s+\w+=\w+)*)\s*"

_OPTION_RE = re.compile(r"(\w+)=(\w+)")


def parse_options(options: str) -> dict[str, str]:
    """Parse whitespace separated ``key=value`` pairs.

    Example:
        >>> parse_options(" foo=bar  depth=2")
        {'foo': 'bar', 'depth': '2'}
    """
    return dict(_OPTION_RE.findall(options))


def validate(pragma: str, /, **location: Any) -> str:
    """Return ``pragma`` if it is implemented.

    ``location`` (lineno, name, source, col_offset) is passed to the error.

    Raises:
        UnknownPragmaError: For any other name, independent of error policy.
    """
    if pragma not in IMPLEMENTED_PRAGMAS:
        raise UnknownPragmaError(pragma, **location)
    return pragma


def is_active(pragmas: Mapping[str, object], name: str) -> bool:
    """Whether ``name`` was activated (with or without options)."""
    return bool(pragmas.get(name))
