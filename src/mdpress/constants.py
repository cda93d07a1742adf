#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mdpress.

This module centralizes the hardcoded values used across mdpress: setting
defaults, config file discovery, the usage banner and exit codes.

Constants are organized by category:
1. Project Metadata - Name, version and banner text
2. Setting Defaults - Initial values of every configurable knob
3. Config File Discovery - Filenames, directories and environment variables
4. Exit Codes - Process status values returned by the CLI
"""

from __future__ import annotations

# =============================================================================
# Project Metadata
# =============================================================================

PROGRAM_NAME = "mdpress"
VERSION = "1.4.0"
PROJECT_URL = "https://github.com/thomas-villani/all2md"
COPYRIGHT_LINE = "Copyright (c) 2025 Tom Villani, Ph.D."
LICENSE_LINE = "Distributed under the Simplified BSD License"

GENERATOR_NAME = f"mdpress Markdown Processor v{VERSION}"

BANNER = (
    f"{GENERATOR_NAME}\n"
    f"Available at {PROJECT_URL}\n\n"
    f"{COPYRIGHT_LINE}\n"
    f"{LICENSE_LINE}\n"
    "See website for details"
)

# =============================================================================
# Setting Defaults
# =============================================================================

DEFAULT_PAGE = False
DEFAULT_TOC = False
DEFAULT_TOC_ONLY = False
DEFAULT_XHTML = True
DEFAULT_LATEX = False
DEFAULT_SMARTYPANTS = True
DEFAULT_LATEX_DASHES = True
DEFAULT_FRACTIONS = True
DEFAULT_FOOTNOTES = False
DEFAULT_TITLE = ""
DEFAULT_CSS = ""
DEFAULT_CPU_PROFILE = ""
DEFAULT_REPEAT = 1

# Default log level keeps config warnings visible without extra flags
DEFAULT_LOG_LEVEL = "WARNING"

# =============================================================================
# Config File Discovery
# =============================================================================

CONFIG_FILENAME = "mdpress.json"
SYSTEM_CONFIG_DIR = "/etc"
USER_CONFIG_SUBDIR = ".config"

CONFIG_ENV_VAR = "MDPRESS_CONFIG"
XDG_CONFIG_HOME_ENV_VAR = "XDG_CONFIG_HOME"
HOME_ENV_VAR = "HOME"

JSON_CONFIG_EXTENSIONS = (".json",)
TOML_CONFIG_EXTENSIONS = (".toml",)
YAML_CONFIG_EXTENSIONS = (".yaml", ".yml")

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
# All-ones status; the shell reports it as 255
EXIT_ERROR = -1
