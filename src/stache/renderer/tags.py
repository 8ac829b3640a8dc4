"""Single-tag rendering for the stache renderer.

Provides mixin for text, variables, partials and the tags that render
nothing (comments, delimiter changes).

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from stache.environment.exceptions import (
    SourceSnippet,
    TemplateError,
    TemplateRuntimeError,
    UndefinedError,
    UnknownPartialError,
    build_source_snippet,
)
from stache.template.helpers import MISSING, str_safe
from stache.utils.html import html_escape

if TYPE_CHECKING:
    from stache.environment import Environment
    from stache.nodes import Comment, DelimiterChange, Node, Partial, Text, Variable
    from stache.render_context import RenderContext
    from stache.template.context import ContextStack

logger = logging.getLogger(__name__)


class TagRenderingMixin:
    """Mixin for rendering leaf tags and resolving names."""

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

    def _render_text(
        self, node: Text, stack: ContextStack, ctx: RenderContext, append: Callable[[str], Any]
    ) -> None:
        append(node.value)

    def _render_nothing(
        self,
        node: Comment | DelimiterChange,
        stack: ContextStack,
        ctx: RenderContext,
        append: Callable[[str], Any],
    ) -> None:
        pass

    def _render_variable(
        self, node: Variable, stack: ContextStack, ctx: RenderContext, append: Callable[[str], Any]
    ) -> None:
        value = self._resolve(node.name, node, stack, ctx)
        # UNESCAPED swaps the meaning of {{x}} and {{{x}}}.
        if node.escape != ctx.unescaped:
            append(html_escape(str_safe(value), self._env.charset))
        else:
            append(str_safe(value))

    def _render_partial(
        self, node: Partial, stack: ContextStack, ctx: RenderContext, append: Callable[[str], Any]
    ) -> None:
        source = ctx.get_partial(node.name)
        if source is None:
            if self._env.strict_partials:
                raise UnknownPartialError(node.name, ctx.template_name, node.lineno)
            logger.debug(
                "Unknown partial '%s' in %s:%d rendered as empty",
                node.name,
                ctx.template_name or "<template>",
                node.lineno,
            )
            return

        partial = ctx.get_partial_template(node.name, source)
        inner = ctx.child_context(partial, node.lineno)
        # Partials see the includer's stack as-is.
        self._render_nodes(partial.ast.body, stack, inner, append)

    def _resolve(
        self,
        name: str,
        node: Node,
        stack: ContextStack,
        ctx: RenderContext,
    ) -> Any:
        """Resolve ``name`` and apply the undefined-variable policy.

        Returns the value, or MISSING when lenient. Exceptions raised by view
        accessors are wrapped in ``TemplateRuntimeError``.
        """
        try:
            value = stack.resolve(name, dot_notation=ctx.dot_notation)
        except TemplateError:
            raise
        except Exception as e:
            raise TemplateRuntimeError(
                f"Error resolving '{name}': {type(e).__name__}: {e}",
                template_name=ctx.template_name,
                lineno=node.lineno,
                source_snippet=self._snippet(ctx, node),
                template_stack=list(ctx.template_stack),
            ) from e

        if value is MISSING and self._env.strict_variables:
            raise UndefinedError(
                name,
                ctx.template_name,
                node.lineno,
                available_names=stack.names(),
                source_snippet=self._snippet(ctx, node),
                template_stack=list(ctx.template_stack),
            )
        return value

    @staticmethod
    def _snippet(ctx: RenderContext, node: Node) -> SourceSnippet | None:
        if not ctx.source:
            return None
        return build_source_snippet(ctx.source, node.lineno, column=node.col_offset)
