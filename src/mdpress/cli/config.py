#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mdpress CLI.

This module locates the optional settings file, decodes it (JSON, TOML or
YAML depending on the extension) and merges the recognized keys into a
:class:`~mdpress.settings.Settings` record.

Two outcomes are reported as exceptions and are never fatal for the CLI:

- :class:`~mdpress.exceptions.ConfigNotFoundError` when no candidate opens
- :class:`~mdpress.exceptions.ConfigMalformedError` when the file opened but
  could not be decoded
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import IO, Any, Dict, Iterable, Mapping, Optional, Sequence

import yaml

from mdpress.constants import (
    CONFIG_FILENAME,
    HOME_ENV_VAR,
    SYSTEM_CONFIG_DIR,
    TOML_CONFIG_EXTENSIONS,
    USER_CONFIG_SUBDIR,
    XDG_CONFIG_HOME_ENV_VAR,
    YAML_CONFIG_EXTENSIONS,
)
from mdpress.exceptions import ConfigMalformedError, ConfigNotFoundError
from mdpress.settings import Settings, config_keys_for, normalize_key, settings_fields

logger = logging.getLogger(__name__)


def get_config_search_paths(environ: Optional[Mapping[str, str]] = None) -> list[Path]:
    """Return the candidate config file paths in search order.

    1. ``$XDG_CONFIG_HOME/mdpress.json`` (skipped when the variable is unset)
    2. ``$HOME/.config/mdpress.json``
    3. ``/etc/mdpress.json``

    Parameters
    ----------
    environ : Mapping[str, str], optional
        Environment to read; defaults to ``os.environ``

    Returns
    -------
    list[Path]
        Candidate paths, highest priority first

    Examples
    --------
    >>> get_config_search_paths({"XDG_CONFIG_HOME": "/x", "HOME": "/home/me"})
    [PosixPath('/x/mdpress.json'), PosixPath('/home/me/.config/mdpress.json'), PosixPath('/etc/mdpress.json')]

    """
    if environ is None:
        environ = os.environ

    paths = []
    xdg_config_home = environ.get(XDG_CONFIG_HOME_ENV_VAR, "")
    if xdg_config_home:
        paths.append(Path(xdg_config_home) / CONFIG_FILENAME)

    home = environ.get(HOME_ENV_VAR, "")
    home_path = Path(home) if home else Path.home()
    paths.append(home_path / USER_CONFIG_SUBDIR / CONFIG_FILENAME)

    paths.append(Path(SYSTEM_CONFIG_DIR) / CONFIG_FILENAME)
    return paths


def open_first_config(candidates: Iterable[Path]) -> tuple[Path, IO[bytes]]:
    """Open the first candidate that can be opened.

    Later candidates are not tried once one opens.

    Parameters
    ----------
    candidates : Iterable[Path]
        Paths to try, in order

    Returns
    -------
    tuple[Path, IO[bytes]]
        The path that opened and its binary file object (caller closes it)

    Raises
    ------
    ConfigNotFoundError
        If none of the candidates could be opened

    """
    tried = []
    for path in candidates:
        tried.append(path)
        try:
            handle = open(path, "rb")
        except OSError as e:
            logger.debug("Config candidate %s not usable: %s", path, e)
            continue
        logger.debug("Using config file %s", path)
        return path, handle
    raise ConfigNotFoundError(tried)


def decode_config(config_path: Path, raw: bytes) -> Dict[str, Any]:
    """Decode config file contents based on the file extension.

    Parameters
    ----------
    config_path : Path
        Path of the file, used to pick the format and in messages
    raw : bytes
        File contents

    Returns
    -------
    dict
        Decoded top-level mapping

    Raises
    ------
    ConfigMalformedError
        If the contents cannot be decoded or the root is not a mapping

    """
    ext = config_path.suffix.lower()
    try:
        if ext in TOML_CONFIG_EXTENSIONS:
            data = tomllib.loads(raw.decode("utf-8"))
        elif ext in YAML_CONFIG_EXTENSIONS:
            data = yaml.safe_load(raw.decode("utf-8"))
        else:
            data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ConfigMalformedError(str(config_path), f"Config file {config_path} is not valid UTF-8: {e}", e) from e
    except json.JSONDecodeError as e:
        raise ConfigMalformedError(str(config_path), f"Invalid JSON in config file {config_path}: {e}", e) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigMalformedError(str(config_path), f"Invalid TOML in config file {config_path}: {e}", e) from e
    except yaml.YAMLError as e:
        raise ConfigMalformedError(str(config_path), f"Invalid YAML in config file {config_path}: {e}", e) from e

    if not isinstance(data, dict):
        raise ConfigMalformedError(
            str(config_path), f"Config file {config_path} must contain an object, got {type(data).__name__}"
        )
    return data


def _matches_type(value: Any, expected: type) -> bool:
    # bool is a subclass of int; a JSON true is not a repeat count
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def merge_config(settings: Settings, data: Mapping[str, Any], config_path: Path | str = "<config>") -> list[str]:
    """Merge decoded config data into ``settings`` in place.

    Keys are matched case-insensitively against each field's name, flag name
    and aliases; unknown keys are ignored and absent keys leave the current
    value alone. Keys are applied in document order and the first value of
    the wrong type stops the merge, keeping earlier assignments.

    Parameters
    ----------
    settings : Settings
        Record to update
    data : Mapping[str, Any]
        Decoded config mapping
    config_path : Path or str
        Source path, used in messages

    Returns
    -------
    list[str]
        Names of the fields that were assigned

    Raises
    ------
    ConfigMalformedError
        If a recognized key holds a value of the wrong type or below its minimum

    """
    key_map = {}
    for settings_field in settings_fields():
        for key in config_keys_for(settings_field):
            key_map[key] = settings_field

    assigned = []
    for key, value in data.items():
        settings_field = key_map.get(normalize_key(str(key)))
        if settings_field is None:
            logger.debug("Ignoring unknown config key %r in %s", key, config_path)
            continue

        expected = settings_field.metadata["type"]
        if not _matches_type(value, expected):
            raise ConfigMalformedError(
                str(config_path),
                f"Config key {key!r} in {config_path} must be of type {expected.__name__}, "
                f"got {type(value).__name__}",
            )
        minimum = settings_field.metadata.get("minimum")
        if minimum is not None and value < minimum:
            raise ConfigMalformedError(
                str(config_path),
                f"Config key {key!r} in {config_path} must be at least {minimum}, got {value}",
            )
        setattr(settings, settings_field.name, value)
        assigned.append(settings_field.name)

    return assigned


def load_config(settings: Settings, candidates: Optional[Sequence[Path]] = None) -> Path:
    """Locate, decode and merge the first available config file.

    Parameters
    ----------
    settings : Settings
        Record to update in place
    candidates : Sequence[Path], optional
        Paths to try; defaults to :func:`get_config_search_paths`

    Returns
    -------
    Path
        The config file that was used

    Raises
    ------
    ConfigNotFoundError
        If no candidate could be opened
    ConfigMalformedError
        If the file could not be decoded; fields assigned before the failure
        remain assigned

    """
    if candidates is None:
        candidates = get_config_search_paths()

    config_path, handle = open_first_config(candidates)
    with handle:
        try:
            raw = handle.read()
        except OSError as e:
            raise ConfigMalformedError(str(config_path), f"Error reading config file {config_path}: {e}", e) from e

    data = decode_config(config_path, raw)
    assigned = merge_config(settings, data, config_path)
    logger.debug("Loaded %d setting(s) from %s: %s", len(assigned), config_path, ", ".join(assigned) or "none")
    return config_path


def resolve_config_candidates(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> list[Path]:
    """Return the config candidates with priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config`` flag)
    2. Environment variable config path (``MDPRESS_CONFIG``)
    3. The standard search path

    An explicit or environment path replaces the search path entirely.
    """
    if explicit_path:
        return [Path(explicit_path)]
    if env_var_path:
        return [Path(env_var_path)]
    return get_config_search_paths()


__all__ = [
    "get_config_search_paths",
    "open_first_config",
    "decode_config",
    "merge_config",
    "load_config",
    "resolve_config_candidates",
]
