"""Stache Template — parsed template object ready for rendering.

The Template class wraps a parsed node tree and provides the ``render()``
API. Templates are immutable and thread-safe for concurrent rendering.

Architecture:
    ```
    Template
    ├── _env_ref: WeakRef[Environment]  # Prevents circular refs
    ├── _ast: nodes.Template            # Parsed node tree + pragmas
    ├── _source: str                    # For runtime error snippets
    └── _name, _filename                # For error messages
    ```

Memory Safety:
Uses ``weakref.ref(env)`` to break potential cycles:
``Template → (weak) → Environment → cache → Template``

Thread-Safety:
- Templates are immutable after construction
- ``render()`` creates only local state (buffer, RenderContext)
- Multiple threads can call ``render()`` concurrently

"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from stache.environment.exceptions import TemplateError
from stache.nodes import InvertedSection, Node, Partial, PragmaValue, Section
from stache.render_context import RenderContext
from stache.template.context import ContextStack

if TYPE_CHECKING:
    from stache.environment import Environment
    from stache.nodes import Template as TemplateNode

logger = logging.getLogger(__name__)


def _walk(nodes: Sequence[Node]) -> Iterator[Node]:
    for node in nodes:
        yield node
        if isinstance(node, (Section, InvertedSection)):
            yield from _walk(node.body)


class Template:
    """Parsed template ready for rendering.

    Memory Safety:
        Uses ``weakref.ref(env)`` to prevent circular reference leaks:
        ``Template → (weak) → Environment → _cache → Template``

    Attributes:
        name: Template identifier (for error messages)
        filename: Source file path (for error messages)
        pragmas: Pragmas the template declares

    Example:
            >>> from stache import Environment
            >>> env = Environment()
            >>> t = env.from_string("Hello, {{name}}!")
            >>> t.render(name="World")
            'Hello, World!'

            >>> t.render({"name": "World"})  # Any view object also works
            'Hello, World!'

    """

    __slots__ = ("_ast", "_env_ref", "_filename", "_name", "_source")

    def __init__(
        self,
        env: Environment,
        ast: TemplateNode,
        name: str | None,
        filename: str | None,
        source: str | None = None,
    ):
        """Initialize template with its parsed tree.

        Args:
            env: Parent Environment (stored as weak reference)
            ast: Parsed node tree
            name: Template name (for error messages)
            filename: Source filename (for error messages)
            source: Template source for runtime error snippets
        """
        self._env_ref: weakref.ref[Environment] = weakref.ref(env)
        self._ast = ast
        self._name = name
        self._filename = filename
        self._source = source

    @property
    def _env(self) -> Environment:
        """Get the Environment (dereferences weak reference)."""
        env = self._env_ref()
        if env is None:
            raise RuntimeError(
                f"Environment has been garbage collected"
                f" (template: {self._name or 'unknown'})"
            )
        return env

    @property
    def name(self) -> str | None:
        """Template name."""
        return self._name

    @property
    def filename(self) -> str | None:
        """Source filename."""
        return self._filename

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def ast(self) -> TemplateNode:
        """Parsed node tree."""
        return self._ast

    @property
    def pragmas(self) -> Mapping[str, PragmaValue]:
        """Declared pragmas: name → ``True`` or the option mapping."""
        return self._ast.pragmas

    def render(
        self,
        *args: Any,
        partials: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> str:
        """Render template against a view.

        Args:
            *args: At most one view (mapping or any object)
            partials: Partial sources for this render, overriding the
                environment's partials of the same name
            **kwargs: Variables layered on top of the view

        Returns:
            Rendered template as string

        Example:
            >>> t.render(name="World")
            'Hello, World!'
            >>> t.render({"name": "World"})
            'Hello, World!'
        """
        if len(args) > 1:
            raise TypeError(
                f"render() takes at most 1 positional argument (the view), got {len(args)}"
            )

        stack = ContextStack.from_view(args[0] if args else None)
        if kwargs:
            stack = stack.push(kwargs)

        env = self._env
        ctx = RenderContext.create(env, self, partials)
        return env.renderer.render(self._ast, stack, ctx)

    def list_partials(self) -> list[str]:
        """Names of the partials this template includes, in order of first use.

        Partials included by those partials are not followed.
        """
        names: dict[str, None] = {}
        for node in _walk(self._ast.body):
            if isinstance(node, Partial):
                names.setdefault(node.name)
        return list(names)

    def __repr__(self) -> str:
        return f"<Template {self._name or '(inline)'}>"


class RenderedTemplate:
    """A template bound to a view and partials, rendered on demand.

    ``render()`` re-renders with optional overrides. ``str()`` renders with
    the bound values and never raises a ``TemplateError``; a failed render
    becomes a short diagnostic string instead.

    Example:
        >>> rt = RenderedTemplate(template, {"name": "World"})
        >>> str(rt)
        'Hello, World!'
        >>> rt.render({"name": "there"})
        'Hello, there!'
    """

    __slots__ = ("_env", "_partials", "_template", "_view")

    def __init__(
        self,
        template: Template,
        view: Any = None,
        partials: Mapping[str, str] | None = None,
    ):
        self._template = template
        # Keep the environment alive as long as the bound template.
        self._env = template._env
        self._view = view
        self._partials = partials

    @property
    def template(self) -> Template:
        return self._template

    def render(self, view: Any = None, partials: Mapping[str, str] | None = None) -> str:
        """Render with the bound values; arguments override them when given."""
        if view is None:
            view = self._view
        if partials is None:
            partials = self._partials
        if view is None:
            return self._template.render(partials=partials)
        return self._template.render(view, partials=partials)

    def __str__(self) -> str:
        """Render and return full string, or a diagnostic on failure."""
        try:
            return self.render()
        except TemplateError as e:
            logger.warning("Error rendering %s: %s", self._template, e)
            return f"Error rendering template: {e}"
