"""Stache RenderContext — per-render state, passed explicitly.

Everything a render may change lives here instead of on the Environment or
the Template:

    - the pragmas of the template being rendered
    - the partial store (explicit partials + loader hits cached for this render)
    - compiled partial templates
    - items of generators and other single-pass iterables already drained
    - nesting depth (DoS protection) and the partial inclusion chain

A fresh RenderContext is created at every ``Template.render()`` entry and
threaded through the renderer. Partials get a child context that shares the
caches but carries its own template name and pragmas. Templates and
environments therefore stay immutable and can be rendered concurrently.

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from stache.environment.exceptions import RecursionLimitError, TemplateNotFoundError
from stache.nodes import PragmaValue
from stache.pragmas import DOT_NOTATION, UNESCAPED, is_active

if TYPE_CHECKING:
    from stache.environment import Environment
    from stache.template import Template

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-render state isolated from the user's view.

    Attributes:
        env: Environment supplying loader and error policy
        template_name: Current template name for error messages
        source: Current template source for error snippets
        pragmas: Pragmas declared by the current template
        partials: Partial store shared by the whole render
        compiled_partials: Parsed partial templates shared by the whole render
        drained: Single-pass iterables already read by a section, by id
        depth: Current section/partial nesting depth
        template_stack: (template_name, line) pairs of the partial chain
    """

    env: Environment
    template_name: str | None = None
    source: str | None = None
    pragmas: Mapping[str, PragmaValue] = field(default_factory=dict)
    partials: dict[str, str] = field(default_factory=dict)
    compiled_partials: dict[str, Template] = field(default_factory=dict)
    drained: dict[int, tuple[Any, list[Any]]] = field(default_factory=dict)
    depth: int = 0
    template_stack: tuple[tuple[str, int], ...] = ()

    @classmethod
    def create(
        cls,
        env: Environment,
        template: Template,
        partials: Mapping[str, str] | None = None,
    ) -> RenderContext:
        """Context for a top-level render of ``template``.

        The partial store starts from the environment's partials, overridden
        by the ones passed to this render.
        """
        store = dict(env.partials)
        if partials:
            store.update(partials)
        return cls(
            env=env,
            template_name=template.name,
            source=template.source,
            pragmas=template.pragmas,
            partials=store,
        )

    @property
    def dot_notation(self) -> bool:
        return is_active(self.pragmas, DOT_NOTATION)

    @property
    def unescaped(self) -> bool:
        return is_active(self.pragmas, UNESCAPED)

    def descend(self, name: str, lineno: int | None = None) -> RenderContext:
        """Context one nesting level deeper.

        Raises:
            RecursionLimitError: If ``Environment.max_depth`` would be exceeded.
        """
        max_depth = self.env.max_depth
        if self.depth >= max_depth:
            raise RecursionLimitError(
                max_depth,
                name,
                template_name=self.template_name,
                lineno=lineno,
                template_stack=list(self.template_stack),
            )
        return replace(self, depth=self.depth + 1)

    def child_context(self, partial: Template, lineno: int) -> RenderContext:
        """Context for rendering ``partial`` included at ``lineno``.

        Shares the partial store and compiled partials with this context.
        Pragmas come from the partial itself, never from the includer.
        """
        inner = self.descend(partial.name or "<partial>", lineno)
        stack = self.template_stack
        stack += ((self.template_name or "<template>", lineno),)
        return replace(
            inner,
            template_name=partial.name,
            source=partial.source,
            pragmas=partial.pragmas,
            template_stack=stack,
        )

    def get_partial(self, name: str) -> str | None:
        """Source of partial ``name``, or None if it cannot be found.

        Explicit partials win. Otherwise the environment's loader is asked for
        ``name`` plus the template extension. A hit is cached for the rest of
        this render, a miss is not.
        """
        if name in self.partials:
            return self.partials[name]

        loader = self.env.loader
        if loader is None:
            logger.debug("Partial '%s' not found: no loader configured", name)
            return None

        filename = self.env.partial_filename(name)
        try:
            source, origin = loader.get_source(filename)
        except TemplateNotFoundError as e:
            logger.debug("Partial '%s' not found: %s", name, e)
            return None

        logger.debug("Loaded partial '%s' from %s", name, origin or filename)
        self.partials[name] = source
        return source

    def get_partial_template(self, name: str, source: str) -> Template:
        """Parse partial ``name`` once per render."""
        template = self.compiled_partials.get(name)
        if template is None:
            template = self.env.from_string(source, name=name)
            self.compiled_partials[name] = template
        return template

    def drain(self, iterable: Iterable[Any]) -> list[Any]:
        """Items of a single-pass ``iterable``, read at most once per render.

        Every section that resolves the same iterator during this render sees
        the same items, so ``{{#gen}}`` and ``{{^gen}}`` agree on emptiness.
        """
        entry = self.drained.get(id(iterable))
        if entry is None or entry[0] is not iterable:
            # Holding the iterable keeps its id from being reused mid-render.
            entry = (iterable, list(iterable))
            self.drained[id(iterable)] = entry
        return entry[1]
