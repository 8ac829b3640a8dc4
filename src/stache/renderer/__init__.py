"""Stache renderer: node tree + context stack → output string.

The renderer package is organized into logical modules:
- core: Renderer class and node dispatch
- tags: text, variables, partials, name resolution
- sections: sections and inverted sections

"""

from stache.renderer.core import Renderer

__all__ = ["Renderer"]
