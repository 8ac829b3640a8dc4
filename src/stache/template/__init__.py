"""Stache Template package — parsed template objects ready for rendering.

Re-exports the public symbols so that ``from stache.template import Template``
works without knowing the module layout.

"""

from stache.template.context import ContextStack
from stache.template.core import RenderedTemplate, Template
from stache.template.helpers import MISSING

__all__ = [
    "MISSING",
    "ContextStack",
    "RenderedTemplate",
    "Template",
]
