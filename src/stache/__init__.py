"""Stache — logic-less templates for Python.

Renders Mustache-dialect templates: variables, sections, inverted sections,
comments, partials, delimiter changes and the DOT-NOTATION / UNESCAPED
pragmas. There is no expression language; all logic lives in the view.

Quickstart:
    >>> import stache
    >>> stache.render("Hello {{planet}}", {"planet": "World"})
    'Hello World'

    >>> from stache import Environment
    >>> env = Environment()
    >>> template = env.from_string("{{#items}}<li>{{name}}</li>{{/items}}")
    >>> template.render(items=[{"name": "a"}, {"name": "b"}])
    '<li>a</li><li>b</li>'

File-based templates:
    >>> from stache import Environment, FileSystemLoader
    >>> env = Environment(loader=FileSystemLoader("templates/"))
    >>> env.get_template("page").render(page)   # loads templates/page.mustache

Architecture:
Template Source → Lexer → Parser → Stache AST → Renderer → str

Pipeline stages:
1. **Lexer**: Tokenizes source, tracking delimiter changes and pragma tags
2. **Parser**: Builds an immutable node tree, pairing section tags
3. **Renderer**: Walks the tree against a context stack of view scopes
4. **Template**: Wraps the tree with the render() interface

Thread-Safety:
Templates and environments are immutable once built. All per-render state
lives in a RenderContext created at render entry.

Lenient by default:
Unknown variables and partials render as empty strings. Construct the
Environment with ``strict_variables=True`` / ``strict_partials=True`` to
raise instead.

"""

from typing import Any

from stache._types import Token, TokenType
from stache.environment import (
    ChoiceLoader,
    DelimiterError,
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    FunctionLoader,
    Loader,
    RecursionLimitError,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    UnclosedSectionError,
    UndefinedError,
    UnexpectedCloseSectionError,
    UnknownPartialError,
    UnknownPragmaError,
)
from stache.lexer import Delimiters
from stache.pragmas import DOT_NOTATION, UNESCAPED
from stache.render_context import RenderContext
from stache.template import ContextStack, RenderedTemplate, Template
from stache.utils.html import html_escape

__version__ = "0.1.0"

__all__ = [
    "DOT_NOTATION",
    "UNESCAPED",
    "ChoiceLoader",
    "ContextStack",
    "DelimiterError",
    "Delimiters",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "FunctionLoader",
    "Loader",
    "RecursionLimitError",
    "RenderContext",
    "RenderedTemplate",
    "SourceSnippet",
    "Template",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "Token",
    "TokenType",
    "UnclosedSectionError",
    "UndefinedError",
    "UnexpectedCloseSectionError",
    "UnknownPartialError",
    "UnknownPragmaError",
    "__version__",
    "html_escape",
    "render",
]


def render(
    template: str = "",
    view: Any = None,
    partials: dict[str, str] | None = None,
    **options: Any,
) -> str:
    """Render ``template`` against ``view`` in a one-off Environment.

    ``options`` are Environment arguments (``charset``, ``strict_variables``,
    ``loader``, ...).

    Example:
        >>> render("{{%UNESCAPED}}{{html}}", {"html": "<b>hi</b>"})
        '<b>hi</b>'
    """
    return Environment(**options).render(template, view, partials)
