#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpress/renderers/latex.py
"""LaTeX rendering on top of mistune.

This module provides the LatexRenderer class which converts mistune tokens
to LaTeX. Output is always a complete ``article`` document; HTML-only
options do not apply and raw HTML is dropped.

"""

from __future__ import annotations

import re
from typing import Any, Optional

import mistune
from mistune.util import unescape

from mdpress.constants import GENERATOR_NAME

PREAMBLE = (
    "\\documentclass{article}\n"
    "\\usepackage{graphicx}\n"
    "\\usepackage{listings}\n"
    "\\usepackage[margin=1in]{geometry}\n"
    "\\usepackage[utf8]{inputenc}\n"
    "\\usepackage{verbatim}\n"
    "\\usepackage[normalem]{ulem}\n"
    "\\usepackage{hyperref}\n"
    "\n"
    "\\hypersetup{colorlinks,%\n"
    "  citecolor=black,%\n"
    "  filecolor=black,%\n"
    "  linkcolor=black,%\n"
    "  menucolor=black,%\n"
    f"  pdfauthor={{{GENERATOR_NAME}}},%\n"
    "  pdfpagemode=UseNone,%\n"
    "  urlcolor=black}\n"
    "\n"
    "\\begin{document}\n"
)

POSTAMBLE = "\n\\end{document}\n"

HEADING_COMMANDS = {
    1: "section",
    2: "subsection",
    3: "subsubsection",
    4: "paragraph",
    5: "subparagraph",
    6: "textbf",
}

TABLE_ALIGNMENTS = {"left": "l", "center": "c", "right": "r"}

# LaTeX special characters that need escaping
SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "#": r"\#",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_SPECIAL_PATTERN = re.compile("|".join(re.escape(c) for c in SPECIAL_CHARS))

_CELL_SEPARATOR = " & "


def escape_latex(text: str) -> str:
    """Escape LaTeX special characters in a single pass.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Escaped text

    """
    return _SPECIAL_PATTERN.sub(lambda m: SPECIAL_CHARS[m.group(0)], text)


def escape_url(url: str) -> str:
    """Escape the characters ``\\href`` does not accept verbatim."""
    return url.replace("\\", "/").replace("%", r"\%").replace("#", r"\#")


class LatexRenderer(mistune.BaseRenderer):
    r"""Render mistune tokens to LaTeX.

    Examples
    --------
        >>> import mistune
        >>> md = mistune.create_markdown(renderer=LatexRenderer())
        >>> md("# Title")
        '\\section{Title}\n'

    """

    NAME = "latex"

    def __init__(self) -> None:
        """Initialize the renderer and the table column state."""
        super().__init__()
        self._table_alignments: list[Optional[str]] = []

    def render_token(self, token: dict[str, Any], state: Any) -> str:
        """Dispatch a token to the method named after its type."""
        func = getattr(self, token["type"])
        attrs = token.get("attrs")
        if "raw" in token:
            text = token["raw"]
        elif "children" in token:
            text = self.render_tokens(token["children"], state)
        else:
            return func(**attrs) if attrs else func()
        return func(text, **attrs) if attrs else func(text)

    def finalize(self, body: str, toc_items: Optional[list[tuple[int, str, str]]] = None) -> str:
        """Wrap the rendered body in the document preamble and postamble."""
        return PREAMBLE + body + POSTAMBLE

    # inline level

    def text(self, text: str) -> str:
        # Character references reach text nodes undecoded
        return escape_latex(unescape(text))

    def emphasis(self, text: str) -> str:
        return "\\emph{" + text + "}"

    def strong(self, text: str) -> str:
        return "\\textbf{" + text + "}"

    def link(self, text: str, url: str, title: Optional[str] = None) -> str:
        return "\\href{" + escape_url(url) + "}{" + text + "}"

    def image(self, text: str, url: str, title: Optional[str] = None) -> str:
        return "\\includegraphics{" + url + "}"

    def codespan(self, text: str) -> str:
        return "\\texttt{" + escape_latex(text) + "}"

    def linebreak(self) -> str:
        return " \\\\\n"

    def softbreak(self) -> str:
        return "\n"

    def inline_html(self, html: str) -> str:
        return ""

    def strikethrough(self, text: str) -> str:
        return "\\sout{" + text + "}"

    def footnote_ref(self, key: str, index: int) -> str:
        return "\\footnotemark[" + str(index) + "]"

    # block level

    def paragraph(self, text: str) -> str:
        return "\n" + text + "\n"

    def heading(self, text: str, level: int, **attrs: Any) -> str:
        command = HEADING_COMMANDS.get(level, "textbf")
        return "\\" + command + "{" + text + "}\n"

    def blank_line(self) -> str:
        return ""

    def thematic_break(self) -> str:
        return "\n\\noindent\\rule{\\textwidth}{0.4pt}\n"

    def block_text(self, text: str) -> str:
        return text

    def block_code(self, code: str, info: Optional[str] = None) -> str:
        language = info.strip().split(None, 1)[0] if info and info.strip() else ""
        opening = "\\begin{lstlisting}"
        if language:
            opening += "[language=" + language + "]"
        if not code.endswith("\n"):
            code += "\n"
        return "\n" + opening + "\n" + code + "\\end{lstlisting}\n"

    def block_quote(self, text: str) -> str:
        return "\\begin{quotation}\n" + text + "\\end{quotation}\n"

    def block_html(self, html: str) -> str:
        return ""

    def block_error(self, text: str) -> str:
        return ""

    def list(self, text: str, ordered: bool, **attrs: Any) -> str:
        env = "enumerate" if ordered else "itemize"
        return "\n\\begin{" + env + "}\n" + text + "\\end{" + env + "}\n"

    def list_item(self, text: str) -> str:
        return "\\item " + text.strip("\n") + "\n"

    # tables

    def table(self, text: str) -> str:
        colspec = "".join(TABLE_ALIGNMENTS.get(a or "left", "l") for a in self._table_alignments) or "l"
        self._table_alignments = []
        return "\n\\begin{tabular}{" + colspec + "}\n" + text + "\\end{tabular}\n"

    def table_head(self, text: str) -> str:
        return text.removesuffix(_CELL_SEPARATOR) + " \\\\\n\\hline\n"

    def table_body(self, text: str) -> str:
        return text

    def table_row(self, text: str) -> str:
        return text.removesuffix(_CELL_SEPARATOR) + " \\\\\n"

    def table_cell(self, text: str, align: Optional[str] = None, head: bool = False) -> str:
        if head:
            self._table_alignments.append(align)
            text = "\\textbf{" + text + "}"
        return text + _CELL_SEPARATOR

    # footnotes

    def footnotes(self, text: str) -> str:
        return "\n" + text

    def footnote_item(self, text: str, key: str, index: int) -> str:
        return "\\footnotetext[" + str(index) + "]{" + text.strip() + "}\n"


__all__ = ["LatexRenderer", "escape_latex", "escape_url", "PREAMBLE", "POSTAMBLE"]
