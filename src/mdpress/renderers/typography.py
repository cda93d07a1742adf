#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Typographic substitutions for HTML text nodes.

Quotes are educated with the rule table of Python-Markdown's ``smarty``
extension, applied directly to a text node instead of through a second
Markdown parse. Dashes and ellipses follow the same rules, with a choice
between LaTeX-style dashes (``--`` en, ``---`` em) and plain ones (``--``
em). Substitutions produce Unicode punctuation, so the result is escaped
afterwards like any other text.

Fractions are handled last, on the escaped text: the common ones (1/2, 1/4,
3/4) become named entities, and with improved fraction rules any ``n/d``
becomes a superscript/subscript pair.
"""

from __future__ import annotations

import re
from typing import Callable, Sequence, Union

from markdown.extensions import smarty
from mistune.util import escape

LEFT_SINGLE_QUOTE = "‘"
RIGHT_SINGLE_QUOTE = "’"
LEFT_DOUBLE_QUOTE = "“"
RIGHT_DOUBLE_QUOTE = "”"
EN_DASH = "–"
EM_DASH = "—"
ELLIPSIS = "…"

COMMON_FRACTIONS = {
    "1/2": "&frac12;",
    "1/4": "&frac14;",
    "3/4": "&frac34;",
}

_COMMON_FRACTION_PATTERN = re.compile(r"(?<![\w/])(1/2|1/4|3/4)(?![\w/])")
_GENERIC_FRACTION_PATTERN = re.compile(r"(?<![\w/])(\d+)/(\d+)(?![\w/])")

# Scanned left to right; "----" leaves a trailing hyphen
_LATEX_DASH_PATTERN = re.compile(r"---?")
_LATEX_DASHES = {"---": EM_DASH, "--": EN_DASH}
_ELLIPSIS_PATTERN = re.compile(r"(?<!\.)\.{3}(?!\.)")

# An int part copies that match group, a str part is literal output
ReplacementParts = Sequence[Union[int, str]]

_QUOTE_RULES: tuple[tuple[str, ReplacementParts], ...] = (
    (smarty.singleQuoteStartRe, (RIGHT_SINGLE_QUOTE,)),
    (smarty.doubleQuoteStartRe, (RIGHT_DOUBLE_QUOTE,)),
    (smarty.doubleQuoteSetsRe, (LEFT_DOUBLE_QUOTE + LEFT_SINGLE_QUOTE,)),
    (smarty.singleQuoteSetsRe, (LEFT_SINGLE_QUOTE + LEFT_DOUBLE_QUOTE,)),
    (smarty.doubleQuoteSetsRe2, (RIGHT_SINGLE_QUOTE + RIGHT_DOUBLE_QUOTE,)),
    (smarty.singleQuoteSetsRe2, (RIGHT_DOUBLE_QUOTE + RIGHT_SINGLE_QUOTE,)),
    (smarty.decadeAbbrRe, (RIGHT_SINGLE_QUOTE,)),
    (smarty.openingSingleQuotesRegex, (1, LEFT_SINGLE_QUOTE)),
    (smarty.closingSingleQuotesRegex, (RIGHT_SINGLE_QUOTE,)),
    (smarty.closingSingleQuotesRegex2, (RIGHT_SINGLE_QUOTE, 1)),
    (smarty.remainingSingleQuotesRegex, (LEFT_SINGLE_QUOTE,)),
    (smarty.openingDoubleQuotesRegex, (1, LEFT_DOUBLE_QUOTE)),
    (smarty.closingDoubleQuotesRegex, (RIGHT_DOUBLE_QUOTE,)),
    (smarty.closingDoubleQuotesRegex2, (RIGHT_DOUBLE_QUOTE,)),
    (smarty.remainingDoubleQuotesRegex, (LEFT_DOUBLE_QUOTE,)),
)


def _replacer(parts: ReplacementParts) -> Callable[[re.Match[str]], str]:
    def replace(match: re.Match[str]) -> str:
        return "".join(match.group(part) if isinstance(part, int) else part for part in parts)

    return replace


_COMPILED_QUOTE_RULES = tuple((re.compile(pattern), _replacer(parts)) for pattern, parts in _QUOTE_RULES)


def educate_dashes(text: str, latex_dashes: bool = True) -> str:
    """Replace ASCII dashes.

    Parameters
    ----------
    text : str
        Raw text
    latex_dashes : bool
        If True, ``---`` is an em dash and ``--`` an en dash; otherwise
        every ``--`` is an em dash, so ``---`` becomes an em dash and a hyphen

    """
    if latex_dashes:
        return _LATEX_DASH_PATTERN.sub(lambda m: _LATEX_DASHES[m.group(0)], text)
    return text.replace("--", EM_DASH)


def educate_quotes(text: str) -> str:
    """Turn straight quotes into curly ones."""
    for pattern, replace in _COMPILED_QUOTE_RULES:
        text = pattern.sub(replace, text)
    return text


def educate_ellipses(text: str) -> str:
    return _ELLIPSIS_PATTERN.sub(ELLIPSIS, text)


def replace_fractions(text: str, improved: bool) -> str:
    """Replace fractions written with a slash.

    Parameters
    ----------
    text : str
        Escaped HTML text
    improved : bool
        Render every ``n/d`` as ``<sup>n</sup>&frasl;<sub>d</sub>`` instead of
        only converting the common fractions to entities

    Returns
    -------
    str
        Text with fractions replaced

    """
    if improved:
        return _GENERIC_FRACTION_PATTERN.sub(r"<sup>\1</sup>&frasl;<sub>\2</sub>", text)
    return _COMMON_FRACTION_PATTERN.sub(lambda m: COMMON_FRACTIONS[m.group(1)], text)


def educate(text: str, fractions: bool = True, latex_dashes: bool = True) -> str:
    """Apply all typographic substitutions to a raw text node.

    Parameters
    ----------
    text : str
        Unescaped text
    fractions : bool
        Use improved fraction rules
    latex_dashes : bool
        Use LaTeX-style dash rules

    Returns
    -------
    str
        Escaped HTML

    Examples
    --------
    >>> educate('"Hi" -- 1/2')
    '“Hi” – <sup>1</sup>&frasl;<sub>2</sub>'

    """
    # Dashes first, so a quote after a dash is seen as an opening quote
    text = educate_dashes(text, latex_dashes=latex_dashes)
    text = educate_quotes(text)
    text = educate_ellipses(text)
    return replace_fractions(escape(text), improved=fractions)


__all__ = [
    "COMMON_FRACTIONS",
    "educate_dashes",
    "educate_quotes",
    "educate_ellipses",
    "replace_fractions",
    "educate",
]
