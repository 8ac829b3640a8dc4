"""Stache Environment — configuration, template loading and caching.

The Environment holds everything that is shared between renders: the
loader, default partials, the output charset and the error policy. It is a
plain dataclass; all options are constructor arguments and are validated
once in ``__post_init__``.

Error policy:

    strict_variables  unknown variable → UndefinedError   (default: render "")
    strict_sections   rendered stray section tag → TemplateSyntaxError (default: raise)
    strict_partials   unknown partial → UnknownPartialError (default: render "")

Unknown pragmas raise regardless of policy.

Thread-Safety:
The template cache is guarded by a lock; everything else is read-only after
construction, so one Environment can serve concurrent renders.

"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from stache.environment.exceptions import TemplateNotFoundError
from stache.environment.loaders import Loader
from stache.lexer import Lexer
from stache.parser import Parser
from stache.renderer import Renderer
from stache.template import Template
from stache.utils.html import normalize_charset

logger = logging.getLogger(__name__)


@dataclass
class Environment:
    """Central configuration and template management.

    Attributes:
        loader: Template source provider (FileSystemLoader, DictLoader, ...)
        partials: Default partial sources, by partial name
        template_extension: Appended to names passed to the loader
        charset: Output character set used by escaping
        strict_variables: Raise UndefinedError for unknown variables
        strict_sections: Raise for unclosed / unexpected section tags
        strict_partials: Raise UnknownPartialError for unknown partials
        max_depth: Maximum section + partial nesting depth

    Example:
            >>> env = Environment(loader=FileSystemLoader("templates/"))
            >>> env.get_template("page").render(title="Hello")

            >>> env = Environment(strict_variables=True)
            >>> env.render("{{greeting}}, {{name}}!", {"greeting": "Hi", "name": "Ana"})
            'Hi, Ana!'

    """

    loader: Loader | None = None
    partials: Mapping[str, str] | None = None
    template_extension: str = "mustache"
    charset: str = "utf-8"
    strict_variables: bool = False
    strict_sections: bool = True
    strict_partials: bool = False
    max_depth: int = 100

    _cache: dict[str, Template] = field(init=False, repr=False, compare=False)
    _cache_lock: threading.Lock = field(init=False, repr=False, compare=False)
    _renderer: Renderer = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            normalize_charset(self.charset)
        except LookupError:
            raise ValueError(f"Unknown charset: {self.charset!r}") from None
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

        self.partials = dict(self.partials or {})
        self.template_extension = self.template_extension.lstrip(".")
        self._cache = {}
        self._cache_lock = threading.Lock()
        self._renderer = Renderer(self)

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    def template_filename(self, name: str) -> str:
        """Loader name for template ``name``: extension added unless it has one."""
        if "." in name or not self.template_extension:
            return name
        return f"{name}.{self.template_extension}"

    def partial_filename(self, name: str) -> str:
        """Loader name for partial ``name``: always ``name`` + extension."""
        if not self.template_extension:
            return name
        return f"{name}.{self.template_extension}"

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Parse ``source`` into a Template (not cached).

        Raises:
            TemplateSyntaxError: On unknown pragmas and invalid delimiter tags.
                Stray section tags are reported when rendering reaches them.
        """
        return self._compile(source, name, None)

    def get_template(self, name: str) -> Template:
        """Load, parse and cache template ``name`` from the loader.

        Raises:
            TemplateNotFoundError: If there is no loader or it has no such
                template.
        """
        with self._cache_lock:
            cached = self._cache.get(name)
        if cached is not None:
            return cached

        if self.loader is None:
            raise TemplateNotFoundError(f"Template '{name}' not found: no loader configured")

        source, filename = self.loader.get_source(self.template_filename(name))
        template = self._compile(source, name, filename)
        logger.debug("Loaded template '%s' from %s", name, filename or "<loader>")

        with self._cache_lock:
            return self._cache.setdefault(name, template)

    def render(
        self,
        template: str | Template | None = None,
        view: Any = None,
        partials: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> str:
        """Render a template source string (or Template) against ``view``.

        Example:
            >>> Environment().render("Hello {{planet}}", {"planet": "World"})
            'Hello World'
        """
        if not isinstance(template, Template):
            template = self.from_string(template or "")
        if view is None:
            return template.render(partials=partials, **kwargs)
        return template.render(view, partials=partials, **kwargs)

    def clear_cache(self) -> None:
        """Drop all cached templates."""
        with self._cache_lock:
            count = len(self._cache)
            self._cache.clear()
        logger.debug("Cleared %d cached templates", count)

    def cache_info(self) -> dict[str, int]:
        with self._cache_lock:
            return {"size": len(self._cache)}

    def _compile(self, source: str, name: str | None, filename: str | None) -> Template:
        tokens = Lexer(source, name=name).tokenize()
        ast = Parser(tokens, name=name, source=source).parse()
        return Template(self, ast, name, filename, source)
