#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Settings record shared by every stage of a run.

The record starts out holding the defaults from :mod:`mdpress.constants`. It
is then updated by the config file loader, by the command-line flags and by
the option normalizer, in that order, and is read-only afterwards.

Field metadata drives both the command-line parser and the config file
decoder:

- ``help``: flag help text
- ``flag``: command-line flag name (without dashes)
- ``metavar``: placeholder shown for valued flags
- ``aliases``: extra config-file keys accepted for the field
- ``type``: the Python type the value must have
- ``minimum``: smallest value accepted for an integer field
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Iterator, Mapping

from mdpress.constants import (
    DEFAULT_CPU_PROFILE,
    DEFAULT_CSS,
    DEFAULT_FOOTNOTES,
    DEFAULT_FRACTIONS,
    DEFAULT_LATEX,
    DEFAULT_LATEX_DASHES,
    DEFAULT_PAGE,
    DEFAULT_REPEAT,
    DEFAULT_SMARTYPANTS,
    DEFAULT_TITLE,
    DEFAULT_TOC,
    DEFAULT_TOC_ONLY,
    DEFAULT_XHTML,
)


@dataclass
class Settings:
    """All configurable knobs of a conversion run.

    Parameters
    ----------
    page : bool, default False
        Emit a full standalone HTML document.
    toc : bool, default False
        Generate a table of contents.
    toc_only : bool, default False
        Generate only the table of contents.
    xhtml : bool, default True
        Use XHTML-style self-closing tags.
    latex : bool, default False
        Select the LaTeX renderer instead of HTML.
    smartypants : bool, default True
        Apply typographic substitutions (HTML only).
    latex_dashes : bool, default True
        Use LaTeX-style dash rules for smartypants.
    fractions : bool, default True
        Use improved fraction rules for smartypants.
    footnotes : bool, default False
        Enable Pandoc-style footnotes.
    title : str, default ""
        Page title.
    css : str, default ""
        Stylesheet href for the page.
    cpu_profile : str, default ""
        Path to write a CPU profile to.
    repeat : int, default 1
        Number of times the input is rendered.

    Notes
    -----
    No validation happens here; :func:`mdpress.normalize.normalize` makes
    the record consistent.

    """

    page: bool = field(
        default=DEFAULT_PAGE,
        metadata={"help": "Generate a standalone HTML page (implies --no-latex)", "flag": "page", "type": bool},
    )
    toc: bool = field(
        default=DEFAULT_TOC,
        metadata={"help": "Generate a table of contents (implies --no-latex)", "flag": "toc", "type": bool},
    )
    toc_only: bool = field(
        default=DEFAULT_TOC_ONLY,
        metadata={
            "help": "Generate a table of contents only (implies --toc)",
            "flag": "toconly",
            "aliases": ("tocOnly",),
            "type": bool,
        },
    )
    xhtml: bool = field(
        default=DEFAULT_XHTML,
        metadata={
            "help": "Use XHTML-style tags in HTML output",
            "flag": "xhtml",
            "aliases": ("useXHTML",),
            "type": bool,
        },
    )
    latex: bool = field(
        default=DEFAULT_LATEX,
        metadata={
            "help": "Generate LaTeX output instead of HTML",
            "flag": "latex",
            "aliases": ("useLatex",),
            "type": bool,
        },
    )
    smartypants: bool = field(
        default=DEFAULT_SMARTYPANTS,
        metadata={"help": "Apply smartypants-style substitutions", "flag": "smartypants", "type": bool},
    )
    latex_dashes: bool = field(
        default=DEFAULT_LATEX_DASHES,
        metadata={"help": "Use LaTeX-style dash rules for smartypants", "flag": "latexdashes", "type": bool},
    )
    fractions: bool = field(
        default=DEFAULT_FRACTIONS,
        metadata={"help": "Use improved fraction rules for smartypants", "flag": "fractions", "type": bool},
    )
    footnotes: bool = field(
        default=DEFAULT_FOOTNOTES,
        metadata={"help": "Use Pandoc-style footnotes", "flag": "footnotes", "type": bool},
    )
    title: str = field(
        default=DEFAULT_TITLE,
        metadata={"help": "Explicit page title (implies --page)", "flag": "title", "metavar": "TITLE", "type": str},
    )
    css: str = field(
        default=DEFAULT_CSS,
        metadata={
            "help": "Link to a CSS stylesheet (implies --page)",
            "flag": "css",
            "metavar": "URL",
            "aliases": ("cssHref",),
            "type": str,
        },
    )
    cpu_profile: str = field(
        default=DEFAULT_CPU_PROFILE,
        metadata={
            "help": "Write cpu profile to a file",
            "flag": "cpuprofile",
            "metavar": "PATH",
            "aliases": ("profilePath",),
            "type": str,
        },
    )
    repeat: int = field(
        default=DEFAULT_REPEAT,
        metadata={
            "help": "Process the input multiple times (for benchmarking)",
            "flag": "repeat",
            "metavar": "N",
            "aliases": ("repeatCount",),
            "type": int,
            "minimum": 1,
        },
    )

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict snapshot of the settings."""
        return asdict(self)

    def update_from(self, values: Mapping[str, Any]) -> None:
        """Assign the given field values in place.

        Only keys that name a field are assigned; everything else is left
        untouched.

        Parameters
        ----------
        values : Mapping[str, Any]
            Field names mapped to their new values

        """
        names = {f.name for f in fields(self)}
        for name, value in values.items():
            if name in names:
                setattr(self, name, value)


def settings_fields() -> Iterator[Any]:
    """Iterate over the settings dataclass fields in declaration order."""
    yield from fields(Settings)


def config_keys_for(settings_field: Any) -> tuple[str, ...]:
    """Return every config-file key that maps onto a settings field.

    The field name, its flag name and any aliases are all accepted; matching
    is done on :func:`normalize_key` forms.
    """
    keys = [settings_field.name, settings_field.metadata.get("flag", settings_field.name)]
    keys.extend(settings_field.metadata.get("aliases", ()))
    return tuple(dict.fromkeys(normalize_key(k) for k in keys))


def normalize_key(key: str) -> str:
    """Fold a config key for case-insensitive matching (``TOC_Only`` -> ``toconly``)."""
    return key.replace("_", "").replace("-", "").lower()


__all__ = ["Settings", "settings_fields", "config_keys_for", "normalize_key"]
