#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for mdpress.

This module provides the command-line entry point. A run resolves settings
in three layers (built-in defaults, the config file, then flags), applies
the implied-option rules, builds the engine configuration and hands off to
the orchestrator.

Examples
--------
Convert a file to an HTML fragment on stdout:
    $ mdpress README.md

Produce a standalone page:
    $ mdpress --title "Notes" notes.md notes.html

Produce LaTeX from stdin:
    $ cat notes.md | mdpress --latex > notes.tex

"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Sequence

from mdpress.cli.builder import apply_fallback_title, parse_ambient_args, resolve_flags
from mdpress.cli.config import load_config, resolve_config_candidates
from mdpress.cli.processors import run_conversion
from mdpress.constants import CONFIG_ENV_VAR, EXIT_ERROR, EXIT_SUCCESS
from mdpress.exceptions import ConfigError, FileError, UsageError
from mdpress.logging_utils import configure_logging
from mdpress.normalize import normalize
from mdpress.pipeline import build_engine_config
from mdpress.settings import Settings

logger = logging.getLogger(__name__)


def _setup_logging(argv: Optional[Sequence[str]]) -> tuple[Optional[str], bool]:
    """Configure logging from the ambient flags.

    Returns the ``--config`` path and the ``--no-config`` switch.
    """
    ambient = parse_ambient_args(argv)
    log_level = "DEBUG" if ambient.verbose else ambient.log_level
    configure_logging(log_level, log_file=ambient.log_file, trace_mode=ambient.verbose)
    return ambient.config, ambient.no_config


def load_settings(config_path: Optional[str] = None, no_config: bool = False) -> Settings:
    """Return the default settings with the config file merged in.

    A missing or malformed config file is reported as a warning; the run
    continues with whatever was assigned before the problem.
    """
    settings = Settings()
    if no_config:
        logger.debug("Config file loading disabled")
        return settings

    candidates = resolve_config_candidates(config_path, os.environ.get(CONFIG_ENV_VAR))
    try:
        load_config(settings, candidates)
    except ConfigError as e:
        logger.warning("%s", e.message)
    return settings


def main(args: list[str] | None = None) -> int:
    """Execute the mdpress command line.

    Parameters
    ----------
    args : list[str], optional
        Arguments without the program name; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        ``EXIT_SUCCESS`` or ``EXIT_ERROR``

    """
    argv = sys.argv[1:] if args is None else list(args)
    config_path, no_config = _setup_logging(argv)

    settings = load_settings(config_path, no_config)

    try:
        resolved = resolve_flags(settings, argv)
    except UsageError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.usage:
            print(e.usage, file=sys.stderr)
        return EXIT_ERROR
    except SystemExit as e:
        # --help and --version
        return e.code if isinstance(e.code, int) else EXIT_SUCCESS

    normalize(settings)
    apply_fallback_title(settings, resolved)
    logger.debug("Resolved settings: %s", settings.to_dict())

    config = build_engine_config(settings)
    logger.debug("Engine configuration: %s", config.describe())

    try:
        run_conversion(settings, config, resolved.input_path, resolved.output_path)
    except FileError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS


__all__ = ["main", "load_settings"]
