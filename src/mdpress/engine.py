#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpress/engine.py
"""Markdown engine boundary.

This module is the only place that talks to mistune directly. It exposes a
single operation, :func:`render`, which takes raw input bytes and an
:class:`~mdpress.pipeline.EngineConfig` and returns the rendered bytes.
Rendering has no failure signal: any input decodes (invalid UTF-8 is
replaced) and produces some output, possibly empty.

"""

from __future__ import annotations

import logging
from typing import Union

import mistune
from mistune.toc import add_toc_hook

from mdpress.pipeline import EngineConfig, Extension, HtmlFlag, RendererKind
from mdpress.renderers.html import HtmlRenderer
from mdpress.renderers.latex import LatexRenderer

logger = logging.getLogger(__name__)

# Extensions without a plugin are native CommonMark behaviour in mistune
EXTENSION_PLUGINS: dict[Extension, str | None] = {
    Extension.NO_INTRA_EMPHASIS: None,
    Extension.TABLES: "table",
    Extension.FENCED_CODE: None,
    Extension.AUTOLINK: "url",
    Extension.STRIKETHROUGH: "strikethrough",
    Extension.SPACE_HEADERS: None,
    Extension.FOOTNOTES: "footnotes",
}

# Every heading level goes into the table of contents
TOC_MIN_LEVEL = 1
TOC_MAX_LEVEL = 6


def plugins_for(extensions: Extension) -> list[str]:
    """Return the mistune plugin names needed for an extension set.

    Parameters
    ----------
    extensions : Extension
        Enabled extensions

    Returns
    -------
    list[str]
        Plugin names in a stable order

    """
    plugins = []
    for extension, plugin in EXTENSION_PLUGINS.items():
        if plugin and extension in extensions:
            plugins.append(plugin)
    return plugins


def create_renderer(config: EngineConfig) -> Union[HtmlRenderer, LatexRenderer]:
    """Instantiate the renderer selected by ``config``."""
    if config.renderer is RendererKind.LATEX:
        return LatexRenderer()
    return HtmlRenderer(config.html_flags, title=config.title, css=config.css)


def create_markdown(config: EngineConfig) -> mistune.Markdown:
    """Build a configured mistune ``Markdown`` instance.

    A fresh instance is built per call; renderers keep per-document state.
    """
    renderer = create_renderer(config)
    markdown = mistune.create_markdown(renderer=renderer, plugins=plugins_for(config.extensions))
    if config.renderer is RendererKind.HTML and HtmlFlag.TOC in config.html_flags:
        add_toc_hook(markdown, min_level=TOC_MIN_LEVEL, max_level=TOC_MAX_LEVEL)
    return markdown


def render_text(text: str, config: EngineConfig) -> str:
    """Render Markdown text to a string.

    Parameters
    ----------
    text : str
        Markdown source
    config : EngineConfig
        Extension set, renderer selection and renderer flags

    Returns
    -------
    str
        Rendered HTML or LaTeX

    """
    markdown = create_markdown(config)
    body, state = markdown.parse(text)
    toc_items = state.env.get("toc_items", [])
    return markdown.renderer.finalize(body, toc_items)


def render(source: bytes, config: EngineConfig) -> bytes:
    """Render Markdown bytes with the given engine configuration.

    Parameters
    ----------
    source : bytes
        UTF-8 encoded Markdown; invalid sequences are replaced
    config : EngineConfig
        Extension set, renderer selection and renderer flags

    Returns
    -------
    bytes
        UTF-8 encoded output

    """
    text = source.decode("utf-8", errors="replace")
    return render_text(text, config).encode("utf-8")


__all__ = ["EXTENSION_PLUGINS", "plugins_for", "create_renderer", "create_markdown", "render_text", "render"]
