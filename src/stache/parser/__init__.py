"""Stache parser package.

Turns the lexer's token stream into the immutable node tree defined in
``stache.nodes``.
"""

from stache.parser.core import Parser

__all__ = ["Parser"]
