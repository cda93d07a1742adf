#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Translation of normalized settings into an engine configuration.

:func:`build_engine_config` is a pure function: it reads a normalized
:class:`~mdpress.settings.Settings` record and returns an immutable
:class:`EngineConfig` describing which parsing extensions to enable, which
renderer to use and which renderer flags to pass.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from mdpress.settings import Settings


class Extension(enum.Flag):
    """Optional parsing features of the Markdown engine."""

    NONE = 0
    NO_INTRA_EMPHASIS = enum.auto()
    TABLES = enum.auto()
    FENCED_CODE = enum.auto()
    AUTOLINK = enum.auto()
    STRIKETHROUGH = enum.auto()
    SPACE_HEADERS = enum.auto()
    FOOTNOTES = enum.auto()


COMMON_EXTENSIONS = (
    Extension.NO_INTRA_EMPHASIS
    | Extension.TABLES
    | Extension.FENCED_CODE
    | Extension.AUTOLINK
    | Extension.STRIKETHROUGH
    | Extension.SPACE_HEADERS
)


class HtmlFlag(enum.Flag):
    """Options of the HTML renderer."""

    NONE = 0
    USE_XHTML = enum.auto()
    USE_SMARTYPANTS = enum.auto()
    SMARTYPANTS_FRACTIONS = enum.auto()
    SMARTYPANTS_LATEX_DASHES = enum.auto()
    COMPLETE_PAGE = enum.auto()
    OMIT_CONTENTS = enum.auto()
    TOC = enum.auto()


class RendererKind(enum.Enum):
    """Output renderer selection."""

    HTML = "html"
    LATEX = "latex"


@dataclass(frozen=True)
class EngineConfig:
    """Everything the engine needs to render one document.

    Parameters
    ----------
    extensions : Extension
        Enabled parsing extensions
    renderer : RendererKind
        Selected renderer
    html_flags : HtmlFlag
        HTML renderer flags; always empty for LaTeX
    title : str
        Page title, used with ``HtmlFlag.COMPLETE_PAGE``
    css : str
        Stylesheet href, used with ``HtmlFlag.COMPLETE_PAGE``

    """

    extensions: Extension = COMMON_EXTENSIONS
    renderer: RendererKind = RendererKind.HTML
    html_flags: HtmlFlag = field(default=HtmlFlag.NONE)
    title: str = ""
    css: str = ""

    def has_extension(self, extension: Extension) -> bool:
        """Return True if ``extension`` is enabled."""
        return extension in self.extensions

    def has_flag(self, flag: HtmlFlag) -> bool:
        """Return True if the HTML renderer flag ``flag`` is set."""
        return flag in self.html_flags

    def describe(self) -> dict[str, Any]:
        """Return a loggable summary of the configuration."""
        return {
            "renderer": self.renderer.value,
            "extensions": sorted(e.name for e in Extension if e.value and e in self.extensions),
            "html_flags": sorted(f.name for f in HtmlFlag if f.value and f in self.html_flags),
            "title": self.title,
            "css": self.css,
        }


def build_extensions(settings: Settings) -> Extension:
    """Return the extension set for ``settings``."""
    extensions = COMMON_EXTENSIONS
    if settings.footnotes:
        extensions |= Extension.FOOTNOTES
    return extensions


def build_html_flags(settings: Settings) -> HtmlFlag:
    """Return the HTML renderer flags for ``settings``.

    The fraction and dash sub-flags only accompany ``USE_SMARTYPANTS``;
    without it they are left out.
    """
    flags = HtmlFlag.NONE
    if settings.xhtml:
        flags |= HtmlFlag.USE_XHTML
    if settings.smartypants:
        flags |= HtmlFlag.USE_SMARTYPANTS
        if settings.fractions:
            flags |= HtmlFlag.SMARTYPANTS_FRACTIONS
        if settings.latex_dashes:
            flags |= HtmlFlag.SMARTYPANTS_LATEX_DASHES
    if settings.page:
        flags |= HtmlFlag.COMPLETE_PAGE
    if settings.toc_only:
        flags |= HtmlFlag.OMIT_CONTENTS
    if settings.toc:
        flags |= HtmlFlag.TOC
    return flags


def build_engine_config(settings: Settings) -> EngineConfig:
    """Translate normalized settings into an :class:`EngineConfig`.

    Parameters
    ----------
    settings : Settings
        Normalized settings record; not modified

    Returns
    -------
    EngineConfig
        Extension set, renderer selection and renderer flags

    """
    extensions = build_extensions(settings)
    if settings.latex:
        # LaTeX output ignores every HTML-only option
        return EngineConfig(extensions=extensions, renderer=RendererKind.LATEX)
    return EngineConfig(
        extensions=extensions,
        renderer=RendererKind.HTML,
        html_flags=build_html_flags(settings),
        title=settings.title,
        css=settings.css,
    )


__all__ = [
    "Extension",
    "COMMON_EXTENSIONS",
    "HtmlFlag",
    "RendererKind",
    "EngineConfig",
    "build_extensions",
    "build_html_flags",
    "build_engine_config",
]
