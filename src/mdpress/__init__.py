"""mdpress - a Markdown processor with HTML and LaTeX output.

mdpress reads a Markdown document and renders it as an HTML fragment, a
complete HTML page, or a complete LaTeX document. Settings come from three
layers, applied in order: built-in defaults, an optional config file and
command-line flags. A fixed set of implication rules then makes them
consistent before the engine configuration is built.

Key Features
------------
- Tables, fenced code, autolinks, strikethrough and optional footnotes
- Typographic quotes, dashes, ellipses and fractions for HTML
- Table of contents, alone or in front of the document
- JSON, TOML or YAML config files
- Repeated rendering and CPU profiling for benchmarking

Examples
--------
Render a string to HTML:

    >>> from mdpress import Settings, build_engine_config, normalize, render
    >>> config = build_engine_config(normalize(Settings()))
    >>> render(b"*hi*", config)
    b'<p><em>hi</em></p>\\n'

"""

from mdpress.constants import VERSION
from mdpress.engine import render, render_text
from mdpress.exceptions import (
    ConfigError,
    ConfigMalformedError,
    ConfigNotFoundError,
    FileError,
    InputReadError,
    MdpressError,
    OutputWriteError,
    UsageError,
)
from mdpress.normalize import normalize
from mdpress.pipeline import EngineConfig, Extension, HtmlFlag, RendererKind, build_engine_config
from mdpress.settings import Settings

__version__ = VERSION

__all__ = [
    "__version__",
    "Settings",
    "normalize",
    "build_engine_config",
    "EngineConfig",
    "Extension",
    "HtmlFlag",
    "RendererKind",
    "render",
    "render_text",
    "MdpressError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigMalformedError",
    "UsageError",
    "FileError",
    "InputReadError",
    "OutputWriteError",
]
