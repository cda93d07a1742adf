#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers for mdpress output formats.

This package contains the mistune renderer subclasses that produce the two
supported output formats.

Available Renderers
-------------------
- HtmlRenderer: HTML fragments or complete pages
- LatexRenderer: complete LaTeX ``article`` documents

"""

from mdpress.renderers.html import HtmlRenderer
from mdpress.renderers.latex import LatexRenderer

__all__ = [
    "HtmlRenderer",
    "LatexRenderer",
]
