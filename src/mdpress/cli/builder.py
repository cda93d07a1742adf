#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line argument parsing for mdpress.

Every setting flag is generated from the :class:`~mdpress.settings.Settings`
field metadata, with its default taken from the record as it stands after
the config file was merged. An omitted flag therefore keeps the config or
built-in value and a given flag always wins.

Parsing errors never exit the process from here; they surface as
:class:`~mdpress.exceptions.UsageError` carrying the usage banner.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Any, NoReturn, Optional, Sequence

from mdpress.constants import BANNER, DEFAULT_LOG_LEVEL, PROGRAM_NAME, VERSION
from mdpress.exceptions import UsageError
from mdpress.settings import Settings, settings_fields

logger = logging.getLogger(__name__)

USAGE = "%(prog)s [options] [inputfile [outputfile]]"

LOG_LEVEL_CHOICES = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class MdpressHelpFormatter(argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter):
    """Keep the banner layout and show each flag's current default."""


class MdpressArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises :class:`UsageError` instead of exiting.

    The help text starts with the program banner (name, version, URL and
    license) and is always written to stderr.
    """

    def format_help(self) -> str:
        return BANNER + "\n\n" + super().format_help()

    def print_help(self, file: Any = None) -> None:
        super().print_help(file if file is not None else sys.stderr)

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, usage=self.format_help())


class StderrVersionAction(argparse.Action):
    """Print the version line to stderr; stdout carries rendered output only."""

    def __init__(
        self,
        option_strings: Sequence[str],
        version: str,
        dest: str = argparse.SUPPRESS,
        help: Optional[str] = None,
    ) -> None:
        super().__init__(option_strings=option_strings, dest=dest, default=argparse.SUPPRESS, nargs=0, help=help)
        self.version = version

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: Optional[str] = None,
    ) -> None:
        parser.exit(message=self.version % {"prog": parser.prog} + "\n")


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if ivalue < 1:
        raise argparse.ArgumentTypeError(f"Value must be a positive count, got {ivalue}")
    return ivalue


def add_ambient_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the logging and config-location flags.

    These are read once before the config file is loaded and again, for the
    help text, by the full parser.
    """
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="Read settings from PATH instead of searching the standard locations",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        default=False,
        help="Do not read any settings file",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        default=DEFAULT_LOG_LEVEL,
        type=str.upper,
        help="Logging level for diagnostics on stderr",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        default=None,
        help="Also write log records to PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging (same as --log-level DEBUG)",
    )


def create_pre_parser() -> MdpressArgumentParser:
    """Create the lenient parser used for the ambient flags only."""
    parser = MdpressArgumentParser(add_help=False, allow_abbrev=False)
    add_ambient_arguments(parser)
    return parser


def parse_ambient_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Extract the logging and config-location flags, ignoring everything else.

    Malformed ambient flags fall back to their defaults here; the full parser
    reports them later.
    """
    parser = create_pre_parser()
    try:
        namespace, _ = parser.parse_known_args(argv)
    except UsageError:
        namespace = parser.parse_args([])
    return namespace


def create_parser(settings: Settings) -> MdpressArgumentParser:
    """Create the full argument parser.

    Parameters
    ----------
    settings : Settings
        Current settings; each flag defaults to the matching field's value

    Returns
    -------
    MdpressArgumentParser
        Configured parser

    """
    parser = MdpressArgumentParser(
        prog=PROGRAM_NAME,
        usage=USAGE,
        formatter_class=MdpressHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "inputfile", nargs="?", default=argparse.SUPPRESS, help="Markdown input; standard input when omitted"
    )
    parser.add_argument(
        "outputfile", nargs="?", default=argparse.SUPPRESS, help="Output file; standard output when omitted"
    )

    options = parser.add_argument_group("Options")
    for settings_field in settings_fields():
        flag = "--" + settings_field.metadata["flag"]
        current = getattr(settings, settings_field.name)
        field_type = settings_field.metadata["type"]
        if field_type is bool:
            options.add_argument(
                flag,
                dest=settings_field.name,
                action=argparse.BooleanOptionalAction,
                default=current,
                help=settings_field.metadata["help"],
            )
        else:
            options.add_argument(
                flag,
                dest=settings_field.name,
                type=positive_int if field_type is int else field_type,
                metavar=settings_field.metadata.get("metavar"),
                default=current,
                help=settings_field.metadata["help"],
            )

    general = parser.add_argument_group("General")
    general.add_argument("-h", "--help", action="help", help="Show this message and exit")
    general.add_argument(
        "--version", action=StderrVersionAction, version=f"%(prog)s {VERSION}", help="Show the version and exit"
    )
    add_ambient_arguments(general)
    return parser


@dataclass
class ResolvedArgs:
    """Non-setting results of flag resolution.

    Parameters
    ----------
    input_path : str or None
        Input file, or None for standard input
    output_path : str or None
        Output file, or None for standard output
    namespace : argparse.Namespace
        The full parsed namespace

    """

    input_path: Optional[str]
    output_path: Optional[str]
    namespace: argparse.Namespace

    @property
    def fallback_title(self) -> str:
        """Title to use when none was configured: the input filename, if any."""
        return self.input_path or ""


def resolve_flags(settings: Settings, argv: Optional[Sequence[str]] = None) -> ResolvedArgs:
    """Parse ``argv`` and merge the flag values into ``settings`` in place.

    The input filename is not used as a title here; see
    :func:`apply_fallback_title`.

    Parameters
    ----------
    settings : Settings
        Record to update; its current values are the flag defaults
    argv : Sequence[str], optional
        Arguments without the program name; defaults to ``sys.argv[1:]``

    Returns
    -------
    ResolvedArgs
        Input and output selection plus the parsed namespace

    Raises
    ------
    UsageError
        On unrecognized flags, malformed values or more than two positional
        arguments

    """
    parser = create_parser(settings)
    namespace = parser.parse_args(argv)

    settings.update_from({f.name: getattr(namespace, f.name) for f in settings_fields()})

    return ResolvedArgs(
        input_path=getattr(namespace, "inputfile", None),
        output_path=getattr(namespace, "outputfile", None),
        namespace=namespace,
    )


def apply_fallback_title(settings: Settings, resolved: ResolvedArgs) -> None:
    """Use the input filename as the page title when no title was given.

    This runs after normalization, so a title taken from the filename only
    names the page and never turns a fragment into a standalone page.
    """
    if settings.title == "" and resolved.fallback_title:
        settings.title = resolved.fallback_title
        logger.debug("Using input filename %r as title", settings.title)


__all__ = [
    "USAGE",
    "MdpressArgumentParser",
    "StderrVersionAction",
    "positive_int",
    "add_ambient_arguments",
    "create_pre_parser",
    "parse_ambient_args",
    "create_parser",
    "ResolvedArgs",
    "resolve_flags",
    "apply_fallback_title",
]
