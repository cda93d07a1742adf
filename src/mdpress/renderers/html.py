#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpress/renderers/html.py
"""HTML rendering on top of mistune.

This module provides the HtmlRenderer class, a ``mistune.HTMLRenderer``
subclass that honours the :class:`~mdpress.pipeline.HtmlFlag` options:
XHTML or HTML void tags, typographic substitutions, a table of contents and
a complete standalone page.

"""

from __future__ import annotations

from typing import Optional

import mistune
from mistune.toc import render_toc_ul
from mistune.util import safe_entity, unescape

from mdpress.constants import GENERATOR_NAME
from mdpress.pipeline import HtmlFlag
from mdpress.renderers.typography import educate

XHTML_DOCTYPE = (
    '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" '
    '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">'
)
HTML_DOCTYPE = "<!DOCTYPE html>"


class HtmlRenderer(mistune.HTMLRenderer):
    """Render mistune tokens to HTML.

    Parameters
    ----------
    flags : HtmlFlag, default HtmlFlag.NONE
        Renderer options
    title : str, default ""
        Page title, used with ``HtmlFlag.COMPLETE_PAGE``
    css : str, default ""
        Stylesheet href, used with ``HtmlFlag.COMPLETE_PAGE``

    Examples
    --------
        >>> import mistune
        >>> renderer = HtmlRenderer(HtmlFlag.USE_XHTML)
        >>> mistune.create_markdown(renderer=renderer)("a  \\nb")
        '<p>a<br />\\nb</p>\\n'

    """

    NAME = "html"

    def __init__(self, flags: HtmlFlag = HtmlFlag.NONE, title: str = "", css: str = ""):
        """Initialize the renderer with flags and page metadata."""
        super().__init__(escape=False)
        self.flags = flags
        self.title = title
        self.css = css

    @property
    def xhtml(self) -> bool:
        """Whether void elements are closed XHTML-style."""
        return HtmlFlag.USE_XHTML in self.flags

    @property
    def _void_close(self) -> str:
        return " />" if self.xhtml else ">"

    def text(self, text: str) -> str:
        """Escape a text node and apply smartypants when enabled."""
        if HtmlFlag.USE_SMARTYPANTS not in self.flags:
            return safe_entity(text)
        return educate(
            unescape(text),
            fractions=HtmlFlag.SMARTYPANTS_FRACTIONS in self.flags,
            latex_dashes=HtmlFlag.SMARTYPANTS_LATEX_DASHES in self.flags,
        )

    def linebreak(self) -> str:
        """Render a hard line break."""
        return "<br" + self._void_close + "\n"

    def thematic_break(self) -> str:
        """Render a horizontal rule."""
        return "<hr" + self._void_close + "\n"

    def image(self, text: str, url: str, title: Optional[str] = None) -> str:
        """Render an image with the configured void-tag style."""
        html = super().image(text, url, title)
        if self.xhtml:
            return html
        return html.removesuffix(" />") + ">"

    def render_toc(self, toc_items: list[tuple[int, str, str]]) -> str:
        """Render the table of contents block."""
        return "<nav>\n" + render_toc_ul(toc_items) + "</nav>\n"

    def finalize(self, body: str, toc_items: list[tuple[int, str, str]]) -> str:
        """Assemble TOC, body and page wrapper into the final output.

        Parameters
        ----------
        body : str
            Rendered document body
        toc_items : list[tuple[int, str, str]]
            ``(level, id, text)`` entries collected from the headings

        Returns
        -------
        str
            Final HTML

        """
        parts = []
        if HtmlFlag.TOC in self.flags:
            parts.append(self.render_toc(toc_items))
        if HtmlFlag.OMIT_CONTENTS not in self.flags:
            parts.append(body)
        content = "".join(parts)

        if HtmlFlag.COMPLETE_PAGE not in self.flags:
            return content
        return self._wrap_in_document(content)

    def _wrap_in_document(self, content: str) -> str:
        """Wrap content in a complete HTML document.

        Parameters
        ----------
        content : str
            Rendered HTML content

        Returns
        -------
        str
            Complete HTML document

        """
        close = self._void_close
        if self.xhtml:
            parts = [XHTML_DOCTYPE, '<html xmlns="http://www.w3.org/1999/xhtml">']
        else:
            parts = [HTML_DOCTYPE, "<html>"]
        parts.append("<head>")
        parts.append(f"  <title>{mistune.escape(self.title)}</title>")
        parts.append(f'  <meta name="GENERATOR" content="{GENERATOR_NAME}"{close}')
        parts.append(f'  <meta charset="utf-8"{close}')
        if self.css:
            href = mistune.escape(self.css)
            parts.append(f'  <link rel="stylesheet" type="text/css" href="{href}"{close}')
        parts.append("</head>")
        parts.append("<body>")
        parts.append("")
        return "\n".join(parts) + content + "\n</body>\n</html>\n"


__all__ = ["HtmlRenderer", "XHTML_DOCTYPE", "HTML_DOCTYPE"]
