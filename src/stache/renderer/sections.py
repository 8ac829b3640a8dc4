"""Section rendering for the stache renderer.

Provides mixin for expanding ``{{#name}}`` and ``{{^name}}`` blocks.

Expansion by value kind (normal section):

    empty (MISSING, None, False, "", 0, [])  → nothing
    list-like                                 → body once per item, item pushed
    mapping / object                          → body once, value pushed
    other truthy scalar                       → body once, stack unchanged

An inverted section renders its body once, in the unchanged stack, exactly
when the normal section would render nothing. Single-pass iterables such as
generators are drained into a list the first time a section resolves them
and the same list is reused for the rest of the render.

Stray section tags are checked against ``strict_sections`` here, when the
renderer reaches them.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence, Sized
from typing import TYPE_CHECKING, Any

from stache.environment.exceptions import UnclosedSectionError, UnexpectedCloseSectionError
from stache.template.helpers import is_empty, is_list_like, is_scalar

if TYPE_CHECKING:
    from stache.environment import Environment
    from stache.nodes import InvertedSection, Node, Section, UnmatchedSectionTag
    from stache.render_context import RenderContext
    from stache.template.context import ContextStack

logger = logging.getLogger(__name__)


class SectionRenderingMixin:
    """Mixin for rendering sections and inverted sections."""

    if TYPE_CHECKING:
        # Host attributes (from Renderer.__init__)
        _env: Environment

        # From Renderer core
        def _render_nodes(
            self,
            nodes: Sequence[Node],
            stack: ContextStack,
            ctx: RenderContext,
            append: Callable[[str], Any],
        ) -> None: ...

        def _resolve(self, name: str, node: Node, stack: ContextStack, ctx: RenderContext) -> Any: ...

    def _resolve_section(
        self, node: Section | InvertedSection, stack: ContextStack, ctx: RenderContext
    ) -> Any:
        value = self._resolve(node.name, node, stack, ctx)
        if is_list_like(value) and not isinstance(value, Sized):
            return ctx.drain(value)
        return value

    def _render_section(
        self,
        node: Section,
        stack: ContextStack,
        ctx: RenderContext,
        append: Callable[[str], Any],
    ) -> None:
        value = self._resolve_section(node, stack, ctx)
        if is_empty(value):
            return

        inner = ctx.descend(node.name, node.lineno)
        if is_list_like(value):
            for item in value:
                self._render_nodes(node.body, stack.push(item), inner, append)
        elif is_scalar(value):
            self._render_nodes(node.body, stack, inner, append)
        else:
            self._render_nodes(node.body, stack.push(value), inner, append)

    def _render_inverted_section(
        self,
        node: InvertedSection,
        stack: ContextStack,
        ctx: RenderContext,
        append: Callable[[str], Any],
    ) -> None:
        value = self._resolve_section(node, stack, ctx)
        if is_empty(value):
            self._render_nodes(node.body, stack, ctx.descend(node.name, node.lineno), append)

    def _render_unmatched_section_tag(
        self,
        node: UnmatchedSectionTag,
        stack: ContextStack,
        ctx: RenderContext,
        append: Callable[[str], Any],
    ) -> None:
        if self._env.strict_sections:
            error_cls = UnexpectedCloseSectionError if node.tag == "/" else UnclosedSectionError
            raise error_cls(
                node.name,
                lineno=node.lineno,
                name=ctx.template_name,
                source=ctx.source,
                col_offset=node.col_offset,
            )
        logger.debug(
            "Dropping stray section tag '%s%s' at %s:%d",
            node.tag,
            node.name,
            ctx.template_name or "<template>",
            node.lineno,
        )
