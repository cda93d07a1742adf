#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for mdpress.

This module defines the exception classes raised while resolving settings
and moving bytes in and out of the renderer. Config conditions are
recoverable and handled by the CLI; usage and file conditions end the run.

Exception Hierarchy
-------------------
- MdpressError (base exception)

  - ConfigError (settings file problems, never fatal)
    - ConfigNotFoundError (no candidate path could be opened)
    - ConfigMalformedError (file opened but could not be decoded)

  - UsageError (bad flags or positional arguments)

  - FileError (file access and I/O)
    - InputReadError (input file or stdin unreadable)
    - OutputWriteError (output file uncreatable or unwritable)

"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class MdpressError(Exception):
    """Base exception class for all mdpress-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ConfigError(MdpressError):
    """Base exception for settings file problems.

    The CLI logs these as warnings and continues with whatever settings are
    already in place.

    Parameters
    ----------
    message : str
        Description of the config problem
    config_path : str, optional
        Path of the offending file, if one was opened
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the config error with the offending path."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class ConfigNotFoundError(ConfigError):
    """Exception raised when no candidate settings file could be opened.

    Parameters
    ----------
    searched_paths : Sequence[Path]
        Candidate paths that were tried, in order
    message : str, optional
        Custom error message. If not provided, uses default message

    """

    def __init__(self, searched_paths: Sequence[Path], message: str | None = None):
        """Initialize the not-found error with the searched paths."""
        self.searched_paths = list(searched_paths)
        if message is None:
            tried = ", ".join(str(p) for p in self.searched_paths) or "<none>"
            message = f"config file not found (tried: {tried})"
        super().__init__(message)


class ConfigMalformedError(ConfigError):
    """Exception raised when a settings file cannot be decoded.

    Fields assigned before the decode failure stay assigned.

    Parameters
    ----------
    config_path : str
        Path to the malformed file
    message : str
        Description of what is malformed
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, config_path: str, message: str, original_error: Exception | None = None):
        """Initialize the malformed config error."""
        super().__init__(message, config_path=config_path, original_error=original_error)


class UsageError(MdpressError):
    """Exception raised for unrecognized flags, bad values or too many arguments.

    Parameters
    ----------
    message : str
        Description of the usage problem
    usage : str, optional
        Full usage banner to show the user

    """

    def __init__(self, message: str, usage: str | None = None):
        """Initialize the usage error with the banner to print."""
        super().__init__(message)
        self.usage = usage


class FileError(MdpressError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class InputReadError(FileError):
    """Exception raised when the input cannot be read.

    Parameters
    ----------
    source : str
        Input path, or ``"<stdin>"`` for standard input
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, source: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the input read error."""
        if message is None:
            message = f"Error reading from {source}"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, file_path=source, original_error=original_error)


class OutputWriteError(FileError):
    """Exception raised when writing output fails.

    Parameters
    ----------
    file_path : str
        Path to the output that failed to write, or ``"<stdout>"``
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Error writing output to {file_path}"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, file_path=file_path, original_error=original_error)


__all__ = [
    "MdpressError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigMalformedError",
    "UsageError",
    "FileError",
    "InputReadError",
    "OutputWriteError",
]
