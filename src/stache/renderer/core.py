"""Stache Renderer Core — main Renderer class.

The Renderer walks a parsed node tree against a context stack and produces
the output string. Uses a mixin-based design for maintainability.

Design Principles:
1. **Tree walk**: templates are parsed once, every render re-walks the tree
2. **StringBuilder**: Output via ``append()``, join at end
3. **O(1) dispatch**: Dict-based node type → handler lookup
4. **Explicit state**: everything a render changes lives in ``RenderContext``

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from stache.renderer.sections import SectionRenderingMixin
from stache.renderer.tags import TagRenderingMixin

if TYPE_CHECKING:
    from stache.environment import Environment
    from stache.nodes import Node
    from stache.nodes import Template as TemplateNode
    from stache.render_context import RenderContext
    from stache.template.context import ContextStack


class Renderer(TagRenderingMixin, SectionRenderingMixin):
    """Render stache node trees.

    One Renderer belongs to an Environment and holds no per-render state, so
    it may render any number of templates concurrently.

    Node Dispatch:
        Uses O(1) dict lookup for node type → handler:
            ```python
            dispatch = {
                "Text": self._render_text,
                "Variable": self._render_variable,
                "Section": self._render_section,
                ...
            }
            handler = dispatch[type(node).__name__]
            ```

    Example:
            >>> from stache import Environment
            >>> env = Environment()
            >>> template = env.from_string("Hello, {{name}}!")
            >>> template.render(name="World")
            'Hello, World!'

    """

    __slots__ = ("_env", "_node_dispatch")

    def __init__(self, env: Environment):
        self._env = env
        self._node_dispatch: dict[str, Callable[..., None]] = {
            "Text": self._render_text,
            "Variable": self._render_variable,
            "Section": self._render_section,
            "InvertedSection": self._render_inverted_section,
            "UnmatchedSectionTag": self._render_unmatched_section_tag,
            "Partial": self._render_partial,
            "Comment": self._render_nothing,
            "DelimiterChange": self._render_nothing,
        }

    def render(self, ast: TemplateNode, stack: ContextStack, ctx: RenderContext) -> str:
        """Render the template ``ast`` against ``stack``."""
        buf: list[str] = []
        self._render_nodes(ast.body, stack, ctx, buf.append)
        return "".join(buf)

    def _render_nodes(
        self,
        nodes: Sequence[Node],
        stack: ContextStack,
        ctx: RenderContext,
        append: Callable[[str], Any],
    ) -> None:
        dispatch = self._node_dispatch
        for node in nodes:
            dispatch[type(node).__name__](node, stack, ctx, append)
